"""Conversation commands."""

from .initiate_conversation import (
    InitiateConversationCommand,
    InitiateConversationHandler,
)
from .join_conversation import JoinConversationCommand, JoinConversationHandler
from .remove_from_conversation import (
    RemoveFromConversationCommand,
    RemoveFromConversationHandler,
)

__all__ = [
    "InitiateConversationCommand",
    "InitiateConversationHandler",
    "JoinConversationCommand",
    "JoinConversationHandler",
    "RemoveFromConversationCommand",
    "RemoveFromConversationHandler",
]
