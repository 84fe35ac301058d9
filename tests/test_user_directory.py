import asyncio

import pytest

from parley.application.services import UserDirectory
from parley.domain.exceptions import (
    DuplicateIdentityError,
    EntityNotFoundError,
    InvalidInputError,
)
from parley.domain.value_objects import UserEmail, UserId
from parley.infrastructure.memory import InMemoryUserRepository


@pytest.mark.asyncio
async def test_register_with_email_and_get(user_directory):
    user = await user_directory.register_with_email("mike", "mike@example.com", "Mike")

    fetched = await user_directory.get_user("mike")
    assert fetched == user
    assert fetched.email.value == "mike@example.com"
    assert fetched.phone_number is None


@pytest.mark.asyncio
async def test_get_user_missing_returns_none(user_directory):
    assert await user_directory.get_user("nobody") is None
    assert await user_directory.get_user("") is None


@pytest.mark.asyncio
async def test_register_same_id_twice_fails(user_directory):
    await user_directory.register_with_email("mike", "mike@example.com", "Mike")

    with pytest.raises(DuplicateIdentityError) as exc:
        await user_directory.register_with_email("mike", "other@example.com", "Mike")
    assert exc.value.message == "User already exists"


@pytest.mark.asyncio
async def test_register_email_owned_by_other_user_fails(user_directory):
    await user_directory.register_with_email("mike", "mike@example.com", "Mike")

    with pytest.raises(DuplicateIdentityError) as exc:
        await user_directory.register_with_email("henry", "mike@example.com", "Henry")
    assert exc.value.message == "User with email mike@example.com already exists"


@pytest.mark.asyncio
async def test_register_with_invalid_email(user_directory):
    with pytest.raises(InvalidInputError) as exc:
        await user_directory.register_with_email("mike", "mike-at-example", "Mike")
    assert exc.value.message == "Invalid email mike-at-example"
    assert await user_directory.get_user("mike") is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "user_id, email, display_name",
    [
        (None, "mike@example.com", "Mike"),
        ("mike", None, "Mike"),
        ("mike", "mike@example.com", None),
        ("mike", "mike@example.com", ""),
    ],
)
async def test_register_with_email_requires_all_fields(
    user_directory, user_id, email, display_name
):
    with pytest.raises(InvalidInputError) as exc:
        await user_directory.register_with_email(user_id, email, display_name)
    assert exc.value.message == "Invalid parameters to call registerUserWithEmail"


@pytest.mark.asyncio
async def test_register_with_phone_number_normalizes(user_directory):
    user = await user_directory.register_with_phone_number(
        "steve", "(212) 555-0123", "Steve"
    )
    assert user.phone_number.value == "+12125550123"

    found = await user_directory.lookup_by_phone_number("+1 212-555-0123")
    assert found.id == UserId("steve")


@pytest.mark.asyncio
async def test_register_phone_owned_by_other_user_fails(user_directory):
    await user_directory.register_with_phone_number("steve", "+12125550123", "Steve")

    with pytest.raises(DuplicateIdentityError) as exc:
        await user_directory.register_with_phone_number("henry", "212 555 0123", "Henry")
    assert exc.value.message == "User with phone number already exists"


@pytest.mark.asyncio
async def test_register_with_unparseable_phone_number(user_directory):
    with pytest.raises(InvalidInputError):
        await user_directory.register_with_phone_number("steve", "not a phone", "Steve")


@pytest.mark.asyncio
async def test_conditional_create_settles_registration_race(user_directory):
    """Two registrations for the same id that both pass the lookup collide at write time."""
    await user_directory.register_with_email("mike", "mike@example.com", "Mike")

    with pytest.raises(DuplicateIdentityError) as exc:
        await user_directory.register_with_phone_number("mike", "+12125550123", "Mike")
    assert exc.value.message == "User already exists"


class InterleavingUserRepository(InMemoryUserRepository):
    """Yields inside lookups and creates so concurrent registrations interleave."""

    async def get_by_email(self, email):
        await asyncio.sleep(0)
        return await super().get_by_email(email)

    async def get_by_phone_number(self, phone_number):
        await asyncio.sleep(0)
        return await super().get_by_phone_number(phone_number)

    async def create(self, user):
        await asyncio.sleep(0)
        await super().create(user)


@pytest.mark.asyncio
async def test_concurrent_registrations_for_same_email_admit_one():
    repo = InterleavingUserRepository()
    directory = UserDirectory(repo, "US")

    results = await asyncio.gather(
        directory.register_with_email("alice", "shared@example.com", "Alice"),
        directory.register_with_email("bob", "shared@example.com", "Bob"),
        return_exceptions=True,
    )

    errors = [r for r in results if isinstance(r, DuplicateIdentityError)]
    assert len(errors) == 1
    assert errors[0].message == "User with email shared@example.com already exists"
    owner = await repo.get_by_email(UserEmail("shared@example.com"))
    loser = "bob" if owner.id.value == "alice" else "alice"
    assert await repo.get_by_id(UserId(loser)) is None


@pytest.mark.asyncio
async def test_concurrent_registrations_for_same_phone_admit_one():
    repo = InterleavingUserRepository()
    directory = UserDirectory(repo, "US")

    results = await asyncio.gather(
        directory.register_with_phone_number("alice", "(212) 555-0123", "Alice"),
        directory.register_with_phone_number("bob", "+1 212 555 0123", "Bob"),
        return_exceptions=True,
    )

    errors = [r for r in results if isinstance(r, DuplicateIdentityError)]
    assert len(errors) == 1
    assert errors[0].message == "User with phone number already exists"


@pytest.mark.asyncio
async def test_push_token_stored_on_registration(user_directory):
    await user_directory.register_with_email(
        "mike", "mike@example.com", "Mike", push_token="fcm-1"
    )
    assert (await user_directory.get_user("mike")).push_token == "fcm-1"


@pytest.mark.asyncio
async def test_lookups(user_directory, register):
    await register("mike")

    assert (await user_directory.lookup_by_email("mike@example.com")).id.value == "mike"
    assert await user_directory.lookup_by_email("henry@example.com") is None
    assert await user_directory.lookup_by_email("garbage") is None
    assert await user_directory.lookup_by_phone_number("garbage") is None


@pytest.mark.asyncio
async def test_update_user_only_changes_given_fields(user_directory, register):
    await register("mike", display_name="Mike", push_token="t1")

    updated = await user_directory.update_user("mike", display_name="Michael")
    assert updated.display_name == "Michael"
    assert updated.push_token == "t1"

    updated = await user_directory.update_user("mike", push_token="t2")
    assert updated.display_name == "Michael"
    assert updated.push_token == "t2"

    stored = await user_directory.get_user("mike")
    assert (stored.display_name, stored.push_token) == ("Michael", "t2")


@pytest.mark.asyncio
async def test_update_unknown_user(user_directory):
    with pytest.raises(EntityNotFoundError) as exc:
        await user_directory.update_user("ghost", display_name="Ghost")
    assert exc.value.message == "User does not exist"


@pytest.mark.asyncio
async def test_delete_user_is_idempotent(user_directory, register):
    await register("mike")

    assert await user_directory.delete_user("mike") is True
    assert await user_directory.delete_user("mike") is False
    assert await user_directory.get_user("mike") is None


@pytest.mark.asyncio
async def test_deleted_user_can_register_again(user_directory, register):
    await register("mike")
    await user_directory.delete_user("mike")

    user = await register("mike")
    assert user.id.value == "mike"


@pytest.mark.asyncio
async def test_validate_ids(user_directory, register):
    await register("mike")
    await register("henry")

    assert await user_directory.validate_ids(["mike", "henry"]) is True
    assert await user_directory.validate_ids(("mike",)) is True
    assert await user_directory.validate_ids(["mike", "ghost"]) is False
    assert await user_directory.validate_ids(["mike", ""]) is False
    assert await user_directory.validate_ids([]) is True


@pytest.mark.asyncio
@pytest.mark.parametrize("bad", ["mike", None, 42, {"mike": 1}, ["mike", 3]])
async def test_validate_ids_rejects_non_collections(user_directory, bad):
    with pytest.raises(InvalidInputError):
        await user_directory.validate_ids(bad)
