"""
Prisma Membership Repository Implementation.

Table "conversations": one row per (user_id, conversation_id), with a
secondary index on (conversation_id, joined_at) for member listing in join
order.
"""

from typing import TYPE_CHECKING

from parley.domain.entities.membership import Membership
from parley.domain.ports.repositories import MembershipRepository
from parley.domain.value_objects.conversation_id import ConversationId
from parley.domain.value_objects.user_id import UserId

if TYPE_CHECKING:
    from prisma import Prisma


class PrismaMembershipRepository(MembershipRepository):
    _prisma: "Prisma"

    def __init__(self, prisma: "Prisma"):
        self._prisma = prisma

    async def conversation_ids_of(self, user_id: UserId) -> list[ConversationId]:
        records = await self._prisma.membership.find_many(
            where={"user_id": user_id.value},
            order={"joined_at": "asc"},
        )
        return [ConversationId(record.conversation_id) for record in records]

    async def members_of(self, conversation_id: ConversationId) -> list[UserId]:
        records = await self._prisma.membership.find_many(
            where={"conversation_id": conversation_id.value},
            order={"joined_at": "asc"},
        )
        return [UserId(record.user_id) for record in records]

    async def add(self, membership: Membership) -> None:
        await self._prisma.membership.upsert(
            where={
                "user_id_conversation_id": {
                    "user_id": membership.user_id.value,
                    "conversation_id": membership.conversation_id.value,
                }
            },
            data={
                "create": {
                    "user_id": membership.user_id.value,
                    "conversation_id": membership.conversation_id.value,
                    "joined_at": membership.joined_at,
                },
                "update": {},
            },
        )

    async def remove(self, user_id: UserId, conversation_id: ConversationId) -> bool:
        deleted = await self._prisma.membership.delete_many(
            where={
                "user_id": user_id.value,
                "conversation_id": conversation_id.value,
            }
        )
        return deleted > 0
