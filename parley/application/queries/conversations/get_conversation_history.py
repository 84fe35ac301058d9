"""Get Conversation History Query - every conversation a user belongs to."""

from dataclasses import dataclass

from parley.application.common.interfaces import Query, QueryHandler
from parley.application.services.conversation_reader import (
    ConversationReader,
    ConversationView,
)
from parley.domain.value_objects.user_id import UserId
from parley.utils.concurrency import gather_all


@dataclass(frozen=True)
class GetConversationHistoryQuery(Query[list[ConversationView]]):
    user_id: str


class GetConversationHistoryHandler(QueryHandler[list[ConversationView]]):
    def __init__(self, conversation_reader: ConversationReader):
        self._conversation_reader = conversation_reader

    async def execute(
        self, query: GetConversationHistoryQuery
    ) -> list[ConversationView]:
        user_id = UserId(query.user_id)
        conversation_ids = await self._conversation_reader.conversation_ids(user_id)
        return await gather_all(
            *(
                self._conversation_reader.view(cid, user_id.value)
                for cid in conversation_ids
            )
        )
