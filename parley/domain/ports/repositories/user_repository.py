"""
User Repository Port - Interface for user persistence.
Implementations: infrastructure/memory/user_repository.py,
infrastructure/persistence/prisma_user_repository.py
"""

from abc import ABC, abstractmethod
from typing import Optional

from parley.domain.entities.user import User
from parley.domain.value_objects.phone_number import PhoneNumber
from parley.domain.value_objects.user_email import UserEmail
from parley.domain.value_objects.user_id import UserId


class UserRepository(ABC):
    @abstractmethod
    async def get_by_id(self, user_id: UserId) -> Optional[User]: ...

    @abstractmethod
    async def get_by_email(self, email: UserEmail) -> Optional[User]: ...

    @abstractmethod
    async def get_by_phone_number(
        self, phone_number: PhoneNumber
    ) -> Optional[User]: ...

    @abstractmethod
    async def create(self, user: User) -> None:
        """
        Insert only if the id, email and phone number are all unused.

        Raises ConditionalWriteError naming the first key found taken.
        """

    @abstractmethod
    async def save(self, user: User) -> None:
        """Overwrite an existing user record."""

    @abstractmethod
    async def delete(self, user_id: UserId) -> bool: ...
