"""
Prisma User Repository Implementation.

Mapping:
- Prisma model fields: user_id, display_name, email, phone_number, push_token
- Domain entity: User with value objects (UserId, UserEmail, PhoneNumber)

`create` relies on the primary key and the unique email / phone_number
columns for the conditional write: a unique violation means another
registration won the race for one of those keys.
"""

from typing import TYPE_CHECKING, Any, Optional

from prisma.errors import UniqueViolationError

from parley.domain.entities.user import User
from parley.domain.exceptions.conditional_write import ConditionalWriteError
from parley.domain.ports.repositories import UserRepository
from parley.domain.value_objects.phone_number import PhoneNumber
from parley.domain.value_objects.user_email import UserEmail
from parley.domain.value_objects.user_id import UserId

if TYPE_CHECKING:
    from prisma import Prisma


class PrismaUserRepository(UserRepository):
    _prisma: "Prisma"

    def __init__(self, prisma: "Prisma"):
        self._prisma = prisma

    def _to_entity(self, record: Any) -> User:
        """Map Prisma record to domain entity."""
        return User(
            id=UserId(record.user_id),
            display_name=record.display_name,
            email=UserEmail(record.email) if record.email else None,
            phone_number=PhoneNumber(record.phone_number) if record.phone_number else None,
            push_token=record.push_token,
        )

    def _to_record(self, user: User) -> dict[str, Any]:
        return {
            "user_id": user.id.value,
            "display_name": user.display_name,
            "email": user.email.value if user.email else None,
            "phone_number": user.phone_number.value if user.phone_number else None,
            "push_token": user.push_token,
        }

    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        record = await self._prisma.user.find_unique(where={"user_id": user_id.value})
        return self._to_entity(record) if record else None

    async def get_by_email(self, email: UserEmail) -> Optional[User]:
        record = await self._prisma.user.find_first(where={"email": email.value})
        return self._to_entity(record) if record else None

    async def get_by_phone_number(self, phone_number: PhoneNumber) -> Optional[User]:
        record = await self._prisma.user.find_first(
            where={"phone_number": phone_number.value}
        )
        return self._to_entity(record) if record else None

    async def create(self, user: User) -> None:
        try:
            await self._prisma.user.create(data=self._to_record(user))
        except UniqueViolationError as e:
            raise await self._collision(user) from e

    async def _collision(self, user: User) -> ConditionalWriteError:
        """Work out which unique column rejected the insert."""
        if await self.get_by_id(user.id) is not None:
            return ConditionalWriteError(user.id.value)
        if user.email is not None and await self.get_by_email(user.email) is not None:
            return ConditionalWriteError(user.email.value, "email")
        if user.phone_number is not None:
            return ConditionalWriteError(user.phone_number.value, "phone_number")
        return ConditionalWriteError(user.id.value)

    async def save(self, user: User) -> None:
        data = self._to_record(user)
        user_id = data.pop("user_id")
        await self._prisma.user.update(where={"user_id": user_id}, data=data)

    async def delete(self, user_id: UserId) -> bool:
        deleted = await self._prisma.user.delete_many(where={"user_id": user_id.value})
        return deleted > 0
