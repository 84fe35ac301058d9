"""
Message Repository Port - append-only message log per conversation.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from parley.domain.entities.message import Message
from parley.domain.value_objects.conversation_id import ConversationId


class MessageRepository(ABC):
    @abstractmethod
    async def append(self, message: Message) -> None: ...

    @abstractmethod
    async def list_by_conversation(
        self, conversation_id: ConversationId, since: Optional[datetime] = None
    ) -> list[Message]:
        """Messages ordered by timestamp ascending, strictly after `since` when given."""
