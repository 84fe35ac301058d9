import asyncio

import pytest
import pytest_asyncio

from parley.application.services import ConversationResolver
from parley.domain.entities.membership import Membership
from parley.domain.exceptions import InvalidInputError, InvalidParticipantsError
from parley.domain.value_objects import ConversationId, UserId
from parley.infrastructure.memory import InMemoryMembershipRepository


@pytest_asyncio.fixture()
async def trio(register):
    for user_id in ("mike", "henry", "steve"):
        await register(user_id)


@pytest.mark.asyncio
async def test_sequential_initiation_is_idempotent(resolver, trio):
    first, created = await resolver.resolve("mike", ["henry", "steve"])
    second, created_again = await resolver.resolve("mike", ["henry", "steve"])

    assert first == second
    assert (created, created_again) == (True, False)


@pytest.mark.asyncio
async def test_same_group_from_another_initiator_converges(resolver, trio):
    first, _ = await resolver.resolve("mike", ["henry", "steve"])
    second, _ = await resolver.resolve("steve", ["mike", "henry"])
    assert first == second


@pytest.mark.asyncio
async def test_members_recorded_in_join_order(resolver, membership_repository, trio):
    conversation_id, _ = await resolver.resolve("mike", ["henry", "steve"])

    members = await membership_repository.members_of(conversation_id)
    assert members == [UserId("mike"), UserId("henry"), UserId("steve")]


@pytest.mark.asyncio
async def test_subset_does_not_match_larger_group(resolver, trio):
    group, _ = await resolver.resolve("mike", ["henry", "steve"])

    assert await resolver.existing_conversation_id(["mike", "henry"]) is None

    pair, created = await resolver.resolve("mike", ["henry"])
    assert created is True
    assert pair != group


@pytest.mark.asyncio
async def test_existing_conversation_found_among_overlapping_groups(resolver, trio):
    group, _ = await resolver.resolve("mike", ["henry", "steve"])
    pair, _ = await resolver.resolve("mike", ["henry"])

    # mike and henry share two conversations; only one has exactly them
    assert await resolver.existing_conversation_id(["mike", "henry"]) == pair
    assert await resolver.existing_conversation_id(["henry", "steve", "mike"]) == group


@pytest.mark.asyncio
async def test_existing_conversation_unknown_ids(resolver, trio):
    assert await resolver.existing_conversation_id(["ghost", "mike"]) is None


@pytest.mark.asyncio
async def test_existing_conversation_requires_ids(resolver):
    with pytest.raises(InvalidInputError):
        await resolver.existing_conversation_id([])
    with pytest.raises(InvalidInputError):
        await resolver.existing_conversation_id("mike")


@pytest.mark.asyncio
async def test_cannot_start_conversation_with_yourself(resolver, trio):
    with pytest.raises(InvalidInputError):
        await resolver.resolve("mike", ["mike"])
    with pytest.raises(InvalidInputError):
        await resolver.resolve("mike", ["henry", "mike"])


@pytest.mark.asyncio
async def test_needs_at_least_one_other_participant(resolver, trio):
    with pytest.raises(InvalidInputError):
        await resolver.resolve("mike", [])


@pytest.mark.asyncio
async def test_other_ids_must_be_a_collection(resolver, trio):
    with pytest.raises(InvalidInputError) as exc:
        await resolver.resolve("mike", "henry")
    assert exc.value.message == "initiateConversation requires array"


@pytest.mark.asyncio
async def test_initiator_must_be_a_string(resolver, trio):
    with pytest.raises(InvalidInputError) as exc:
        await resolver.resolve(None, ["henry"])
    assert exc.value.message == (
        "initiateConversation requires userId string parameter but had None instead"
    )


@pytest.mark.asyncio
async def test_unknown_participants_never_allocate(resolver, membership_repository, trio):
    with pytest.raises(InvalidParticipantsError) as exc:
        await resolver.resolve("mike", ["henry", "ghost"])
    assert exc.value.message == "UserIds not valid"

    assert await membership_repository.conversation_ids_of(UserId("mike")) == []
    assert await membership_repository.conversation_ids_of(UserId("henry")) == []


@pytest.mark.asyncio
async def test_duplicate_other_ids_are_collapsed(resolver, membership_repository, trio):
    conversation_id, _ = await resolver.resolve("mike", ["henry", "henry"])
    assert len(await membership_repository.members_of(conversation_id)) == 2


class LockstepMembershipRepository(InMemoryMembershipRepository):
    """Holds every lookup until `parties` lookups have read, so racing resolves all miss."""

    def __init__(self, parties):
        super().__init__()
        self._parties = parties
        self._arrived = 0
        self._released = asyncio.Event()

    async def conversation_ids_of(self, user_id):
        result = await super().conversation_ids_of(user_id)
        self._arrived += 1
        if self._arrived >= self._parties:
            self._released.set()
        await self._released.wait()
        return result


@pytest.mark.asyncio
async def test_concurrent_initiation_can_duplicate(user_directory, trio):
    """Dedup is best effort: racing calls may both create a conversation."""
    # two resolves, each looking up mike and henry
    memberships = LockstepMembershipRepository(parties=4)
    resolver = ConversationResolver(memberships, user_directory)

    (first, _), (second, _) = await asyncio.gather(
        resolver.resolve("mike", ["henry"]),
        resolver.resolve("mike", ["henry"]),
    )
    assert first != second

    # With two exact matches there is no single existing conversation
    assert await resolver.existing_conversation_id(["mike", "henry"]) is None


@pytest.mark.asyncio
async def test_partial_membership_write_repaired_by_retry(
    resolver, membership_repository, trio
):
    # A crash after the first write leaves a conversation only mike can see
    orphan = ConversationId.generate()
    await membership_repository.add(Membership(UserId("mike"), orphan))

    conversation_id, created = await resolver.resolve("mike", ["henry"])
    assert created is True
    assert conversation_id != orphan

    again, created_again = await resolver.resolve("mike", ["henry"])
    assert again == conversation_id
    assert created_again is False
