import pytest
import pytest_asyncio

from parley.application.commands.conversations import (
    JoinConversationCommand,
    JoinConversationHandler,
    RemoveFromConversationCommand,
    RemoveFromConversationHandler,
)
from parley.application.queries.conversations import (
    GetConversationIdsHandler,
    GetConversationIdsQuery,
    GetConversationUsersHandler,
    GetConversationUsersQuery,
)
from parley.domain.exceptions import (
    AlreadyMemberError,
    InvalidParticipantsError,
    NotMemberError,
)


@pytest.fixture()
def join(membership_repository, reader, user_directory):
    handler = JoinConversationHandler(membership_repository, reader, user_directory)

    async def _join(user_id, conversation_id):
        await handler.execute(JoinConversationCommand(user_id, conversation_id))

    return _join


@pytest.fixture()
def leave(membership_repository):
    handler = RemoveFromConversationHandler(membership_repository)

    async def _leave(user_id, conversation_id):
        await handler.execute(RemoveFromConversationCommand(user_id, conversation_id))

    return _leave


@pytest.fixture()
def conversation_users(reader):
    handler = GetConversationUsersHandler(reader)

    async def _users(conversation_id, requester_id=None):
        users = await handler.execute(
            GetConversationUsersQuery(conversation_id, requester_id=requester_id)
        )
        return [user.id.value for user in users]

    return _users


@pytest_asyncio.fixture()
async def conversation(register, resolver):
    for user_id in ("mike", "henry", "steve", "carol"):
        await register(user_id)
    conversation_id, _ = await resolver.resolve("mike", ["henry", "steve"])
    return conversation_id.value


@pytest.mark.asyncio
async def test_conversation_users_in_join_order(conversation, conversation_users):
    assert await conversation_users(conversation) == ["mike", "henry", "steve"]


@pytest.mark.asyncio
async def test_join_appends_member(conversation, join, conversation_users):
    await join("carol", conversation)
    assert await conversation_users(conversation) == ["mike", "henry", "steve", "carol"]


@pytest.mark.asyncio
async def test_join_twice_fails(conversation, join):
    with pytest.raises(AlreadyMemberError) as exc:
        await join("henry", conversation)
    assert exc.value.message == "User already part of conversation"


@pytest.mark.asyncio
async def test_unknown_user_cannot_join(conversation, join):
    with pytest.raises(InvalidParticipantsError):
        await join("ghost", conversation)


@pytest.mark.asyncio
async def test_remove_member(conversation, leave, conversation_users, reader):
    await leave("henry", conversation)

    assert await conversation_users(conversation) == ["mike", "steve"]
    ids = await GetConversationIdsHandler(reader).execute(GetConversationIdsQuery("henry"))
    assert ids == []


@pytest.mark.asyncio
async def test_remove_non_member_fails(conversation, leave):
    with pytest.raises(NotMemberError) as exc:
        await leave("carol", conversation)
    assert exc.value.message == "User is not part of conversation"


@pytest.mark.asyncio
async def test_rejoin_after_leaving(conversation, join, leave, conversation_users):
    await leave("henry", conversation)
    await join("henry", conversation)
    assert await conversation_users(conversation) == ["mike", "steve", "henry"]


@pytest.mark.asyncio
async def test_conversation_users_for_non_member_requester(
    conversation, conversation_users
):
    with pytest.raises(NotMemberError):
        await conversation_users(conversation, requester_id="carol")
    assert await conversation_users(conversation, requester_id="steve") == [
        "mike",
        "henry",
        "steve",
    ]


@pytest.mark.asyncio
async def test_deleted_user_skipped_in_member_list(
    conversation, user_directory, conversation_users, reader
):
    await user_directory.delete_user("henry")

    assert await conversation_users(conversation) == ["mike", "steve"]
    # the membership record itself is untouched
    ids = await GetConversationIdsHandler(reader).execute(GetConversationIdsQuery("henry"))
    assert [cid.value for cid in ids] == [conversation]
