"""Existing Conversation Id Amongst Users Query."""

from dataclasses import dataclass
from typing import Optional

from parley.application.common.interfaces import Query, QueryHandler
from parley.application.services.conversation_resolver import ConversationResolver
from parley.domain.value_objects.conversation_id import ConversationId


@dataclass(frozen=True)
class ExistingConversationIdAmongstUsersQuery(Query[Optional[ConversationId]]):
    user_ids: tuple[str, ...]


class ExistingConversationIdAmongstUsersHandler(
    QueryHandler[Optional[ConversationId]]
):
    """
    Only a conversation whose members are exactly `user_ids` counts. Asking
    about a subset of a larger group's members returns None.
    """

    def __init__(self, conversation_resolver: ConversationResolver):
        self._conversation_resolver = conversation_resolver

    async def execute(
        self, query: ExistingConversationIdAmongstUsersQuery
    ) -> Optional[ConversationId]:
        return await self._conversation_resolver.existing_conversation_id(
            query.user_ids
        )
