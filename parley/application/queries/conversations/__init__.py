"""Conversation-related queries."""

from parley.application.queries.conversations.existing_conversation_id import (
    ExistingConversationIdAmongstUsersQuery,
    ExistingConversationIdAmongstUsersHandler,
)
from parley.application.queries.conversations.get_conversation_ids import (
    GetConversationIdsQuery,
    GetConversationIdsHandler,
)
from parley.application.queries.conversations.get_conversation_users import (
    GetConversationUsersQuery,
    GetConversationUsersHandler,
)
from parley.application.queries.conversations.get_conversation import (
    GetConversationQuery,
    GetConversationHandler,
)
from parley.application.queries.conversations.get_conversation_history import (
    GetConversationHistoryQuery,
    GetConversationHistoryHandler,
)

__all__ = [
    "ExistingConversationIdAmongstUsersQuery",
    "ExistingConversationIdAmongstUsersHandler",
    "GetConversationIdsQuery",
    "GetConversationIdsHandler",
    "GetConversationUsersQuery",
    "GetConversationUsersHandler",
    "GetConversationQuery",
    "GetConversationHandler",
    "GetConversationHistoryQuery",
    "GetConversationHistoryHandler",
]
