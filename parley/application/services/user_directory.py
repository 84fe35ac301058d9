"""
User Directory - registration, profile updates and lookups.

Owns uniqueness of user id, email and phone number. A lookup before the
write rejects the common case early; the repository's conditional create
is what settles two registrations racing for the same id, email or phone.
"""

import logging
from collections.abc import Collection
from typing import Any, Optional

from parley.config.settings import Config
from parley.domain.entities.user import User
from parley.domain.exceptions import (
    ConditionalWriteError,
    DuplicateIdentityError,
    EntityNotFoundError,
    InvalidInputError,
)
from parley.domain.ports.repositories import UserRepository
from parley.domain.value_objects.phone_number import PhoneNumber
from parley.domain.value_objects.user_email import UserEmail
from parley.domain.value_objects.user_id import UserId
from parley.observability import increment_users_registered
from parley.utils.concurrency import gather_all

logger = logging.getLogger(__name__)


def is_id_collection(value: Any) -> bool:
    """True for list/tuple/set style collections of strings (a bare string is not one)."""
    if isinstance(value, (str, bytes, dict)) or not isinstance(value, Collection):
        return False
    return all(isinstance(item, str) for item in value)


def to_user_id(raw: Any) -> Optional[UserId]:
    try:
        return UserId(raw)
    except InvalidInputError:
        return None


class UserDirectory:
    def __init__(self, user_repository: UserRepository, phone_region: str = None):
        self._users = user_repository
        self._phone_region = phone_region or Config.DEFAULT_PHONE_REGION

    async def get_user(self, user_id: Any) -> Optional[User]:
        """Returns None for unknown or malformed ids; never raises for a miss."""
        uid = to_user_id(user_id)
        if uid is None:
            return None
        return await self._users.get_by_id(uid)

    async def get_users(self, user_ids: list[UserId]) -> list[Optional[User]]:
        """Resolve ids concurrently, preserving order. Missing users come back as None."""
        return await gather_all(*(self._users.get_by_id(uid) for uid in user_ids))

    async def lookup_by_email(self, email: Any) -> Optional[User]:
        try:
            address = UserEmail(email)
        except InvalidInputError:
            return None
        return await self._users.get_by_email(address)

    async def lookup_by_phone_number(self, phone_number: Any) -> Optional[User]:
        try:
            number = PhoneNumber.parse(phone_number, self._phone_region)
        except InvalidInputError:
            return None
        return await self._users.get_by_phone_number(number)

    async def validate_ids(self, user_ids: Any) -> bool:
        """True iff every id resolves to an existing user."""
        if not is_id_collection(user_ids):
            raise InvalidInputError("validateUserIds requires a collection of user ids")
        uids = [to_user_id(raw) for raw in user_ids]
        if any(uid is None for uid in uids):
            return False
        users = await self.get_users(uids)
        return all(user is not None for user in users)

    async def register_with_email(
        self,
        user_id: Any,
        email: Any,
        display_name: Any,
        push_token: Optional[str] = None,
    ) -> User:
        if not user_id or not email or not display_name:
            raise InvalidInputError("Invalid parameters to call registerUserWithEmail")

        user = User(
            id=UserId(user_id),
            display_name=display_name,
            email=UserEmail(email),
            push_token=push_token,
        )

        existing = await self._users.get_by_email(user.email)
        if existing and existing.id != user.id:
            raise DuplicateIdentityError(f"User with email {email} already exists")

        await self._create(user)
        increment_users_registered("email")
        logger.info(f"Registered user {user.id} with email")
        return user

    async def register_with_phone_number(
        self,
        user_id: Any,
        phone_number: Any,
        display_name: Any,
        push_token: Optional[str] = None,
    ) -> User:
        if not user_id or not phone_number or not display_name:
            raise InvalidInputError(
                "Invalid parameters to call registerUserWithPhoneNumber"
            )

        user = User(
            id=UserId(user_id),
            display_name=display_name,
            phone_number=PhoneNumber.parse(phone_number, self._phone_region),
            push_token=push_token,
        )

        existing = await self._users.get_by_phone_number(user.phone_number)
        if existing and existing.id != user.id:
            raise DuplicateIdentityError("User with phone number already exists")

        await self._create(user)
        increment_users_registered("phone")
        logger.info(f"Registered user {user.id} with phone number")
        return user

    async def update_user(
        self,
        user_id: Any,
        display_name: Optional[str] = None,
        push_token: Optional[str] = None,
    ) -> User:
        user = await self.get_user(user_id)
        if user is None:
            raise EntityNotFoundError("User does not exist")
        user.update_profile(display_name=display_name, push_token=push_token)
        await self._users.save(user)
        logger.info(f"Updated profile of user {user.id}")
        return user

    async def delete_user(self, user_id: Any) -> bool:
        """Idempotent: deleting an unknown user is not an error."""
        uid = to_user_id(user_id)
        if uid is None:
            raise InvalidInputError("deleteUser requires a user id")
        deleted = await self._users.delete(uid)
        if deleted:
            logger.info(f"Deleted user {uid}")
        return deleted

    async def _create(self, user: User) -> None:
        try:
            await self._users.create(user)
        except ConditionalWriteError as e:
            logger.info(f"Registration of {user.id} lost the race on {e.field}")
            if e.field == "email":
                raise DuplicateIdentityError(
                    f"User with email {user.email.value} already exists"
                ) from e
            if e.field == "phone_number":
                raise DuplicateIdentityError("User with phone number already exists") from e
            raise DuplicateIdentityError("User already exists") from e
