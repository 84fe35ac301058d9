"""Get Conversation Ids Query."""

from dataclasses import dataclass

from parley.application.common.interfaces import Query, QueryHandler
from parley.application.services.conversation_reader import ConversationReader
from parley.domain.value_objects.conversation_id import ConversationId
from parley.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class GetConversationIdsQuery(Query[list[ConversationId]]):
    user_id: str


class GetConversationIdsHandler(QueryHandler[list[ConversationId]]):
    def __init__(self, conversation_reader: ConversationReader):
        self._conversation_reader = conversation_reader

    async def execute(self, query: GetConversationIdsQuery) -> list[ConversationId]:
        return await self._conversation_reader.conversation_ids(UserId(query.user_id))
