from dataclasses import replace
from typing import Optional

from parley.domain.entities.user import User
from parley.domain.exceptions.conditional_write import ConditionalWriteError
from parley.domain.ports.repositories import UserRepository
from parley.domain.value_objects.phone_number import PhoneNumber
from parley.domain.value_objects.user_email import UserEmail
from parley.domain.value_objects.user_id import UserId


class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self._users: dict[str, User] = {}

    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        user = self._users.get(user_id.value)
        return replace(user) if user else None

    async def get_by_email(self, email: UserEmail) -> Optional[User]:
        for user in self._users.values():
            if user.email == email:
                return replace(user)
        return None

    async def get_by_phone_number(self, phone_number: PhoneNumber) -> Optional[User]:
        for user in self._users.values():
            if user.phone_number == phone_number:
                return replace(user)
        return None

    async def create(self, user: User) -> None:
        # Check and insert run without an await in between, so they are atomic
        if user.id.value in self._users:
            raise ConditionalWriteError(user.id.value)
        for existing in self._users.values():
            if user.email is not None and existing.email == user.email:
                raise ConditionalWriteError(user.email.value, "email")
            if user.phone_number is not None and existing.phone_number == user.phone_number:
                raise ConditionalWriteError(user.phone_number.value, "phone_number")
        self._users[user.id.value] = replace(user)

    async def save(self, user: User) -> None:
        self._users[user.id.value] = replace(user)

    async def delete(self, user_id: UserId) -> bool:
        return self._users.pop(user_id.value, None) is not None
