"""Conversation and message DTOs for API responses."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from parley.application.dto.user import UserDTO
from parley.application.services.conversation_reader import (
    ConversationView,
    MessageView,
)


class MessageDTO(BaseModel):
    conversation_id: str
    sender_id: str
    sender: Optional[UserDTO] = None
    message: str
    timestamp: datetime

    @classmethod
    def from_view(cls, view: MessageView) -> "MessageDTO":
        return cls(
            conversation_id=view.conversation_id.value,
            sender_id=view.sender_id.value,
            sender=UserDTO.from_entity(view.sender) if view.sender else None,
            message=view.body,
            timestamp=view.timestamp,
        )


class ConversationDTO(BaseModel):
    conversation_id: str
    members: list[UserDTO]
    messages: list[MessageDTO]

    @classmethod
    def from_view(cls, view: ConversationView) -> "ConversationDTO":
        return cls(
            conversation_id=view.conversation_id.value,
            members=[UserDTO.from_entity(u) for u in view.members],
            messages=[MessageDTO.from_view(m) for m in view.messages],
        )
