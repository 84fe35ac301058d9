"""Get Conversation Users Query."""

from dataclasses import dataclass
from typing import Optional

from parley.application.common.interfaces import Query, QueryHandler
from parley.application.services.conversation_reader import (
    ConversationReader,
    to_conversation_id,
)
from parley.domain.entities.user import User
from parley.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class GetConversationUsersQuery(Query[list[User]]):
    conversation_id: str
    requester_id: Optional[str] = None


class GetConversationUsersHandler(QueryHandler[list[User]]):
    """
    Members in join order, the originator first. When a requester is given
    it must be a member itself.
    """

    def __init__(self, conversation_reader: ConversationReader):
        self._conversation_reader = conversation_reader

    async def execute(self, query: GetConversationUsersQuery) -> list[User]:
        conversation_id = to_conversation_id(query.conversation_id)
        if query.requester_id is not None:
            await self._conversation_reader.require_member(
                UserId(query.requester_id), conversation_id
            )
        return await self._conversation_reader.members(conversation_id)
