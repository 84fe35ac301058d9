from datetime import datetime
from typing import Optional

from parley.domain.entities.message import Message
from parley.domain.ports.repositories import MessageRepository
from parley.domain.value_objects.conversation_id import ConversationId


class InMemoryMessageRepository(MessageRepository):
    def __init__(self):
        self._logs: dict[str, list[Message]] = {}

    async def append(self, message: Message) -> None:
        self._logs.setdefault(message.conversation_id.value, []).append(message)

    async def list_by_conversation(
        self, conversation_id: ConversationId, since: Optional[datetime] = None
    ) -> list[Message]:
        messages = self._logs.get(conversation_id.value, [])
        if since is not None:
            messages = [m for m in messages if m.timestamp > since]
        # sorted() is stable, so equal timestamps keep append order
        return sorted(messages, key=lambda m: m.timestamp)
