"""
Prisma Message Repository Implementation.

Prisma Message Model (from schema.prisma):
    model Message {
        message_id      String   @id @default(uuid())
        conversation_id String
        timestamp       DateTime @db.Timestamptz(6)
        sender_id       String
        body            String
        @@index([conversation_id, timestamp])
    }

Messages are never updated, so `append` is a plain create. The generated
message_id is the key, so two posts stamped with the same instant are both
kept; it also breaks ties when ordering.
"""

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional

from parley.domain.entities.message import Message
from parley.domain.ports.repositories import MessageRepository
from parley.domain.value_objects.conversation_id import ConversationId
from parley.domain.value_objects.user_id import UserId

if TYPE_CHECKING:
    from prisma import Prisma

logger = logging.getLogger(__name__)


class PrismaMessageRepository(MessageRepository):
    _prisma: "Prisma"

    def __init__(self, prisma: "Prisma"):
        self._prisma = prisma

    def _to_entity(self, record: Any) -> Message:
        return Message(
            conversation_id=ConversationId(record.conversation_id),
            sender_id=UserId(record.sender_id),
            body=record.body,
            timestamp=record.timestamp,
        )

    async def append(self, message: Message) -> None:
        await self._prisma.message.create(
            data={
                "conversation_id": message.conversation_id.value,
                "timestamp": message.timestamp,
                "sender_id": message.sender_id.value,
                "body": message.body,
            }
        )

    async def list_by_conversation(
        self, conversation_id: ConversationId, since: Optional[datetime] = None
    ) -> list[Message]:
        where: dict[str, Any] = {"conversation_id": conversation_id.value}
        if since is not None:
            where["timestamp"] = {"gt": since}
        records = await self._prisma.message.find_many(
            where=where,
            order=[{"timestamp": "asc"}, {"message_id": "asc"}],
        )
        logger.debug(
            f"Loaded {len(records)} messages for conversation {conversation_id.value}"
        )
        return [self._to_entity(record) for record in records]
