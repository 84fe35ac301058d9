"""
APPLICATION SERVICES - shared logic used by several handlers

- UserDirectory: registration, lookups and id validation
- ConversationResolver: find-or-create a conversation for a group of users
- ConversationReader: membership checks and read-time joins of user data
"""

from parley.application.services.user_directory import UserDirectory
from parley.application.services.conversation_resolver import ConversationResolver
from parley.application.services.conversation_reader import (
    ConversationReader,
    ConversationView,
    MessageView,
)

__all__ = [
    "UserDirectory",
    "ConversationResolver",
    "ConversationReader",
    "ConversationView",
    "MessageView",
]
