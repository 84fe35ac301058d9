"""Get Conversation Query."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from parley.application.common.interfaces import Query, QueryHandler
from parley.application.services.conversation_reader import (
    ConversationReader,
    ConversationView,
)
from parley.domain.entities.message import parse_timestamp


@dataclass(frozen=True)
class GetConversationQuery(Query[ConversationView]):
    conversation_id: str
    user_id: str
    since: Optional[Union[datetime, str]] = None


class GetConversationHandler(QueryHandler[ConversationView]):
    """
    Members and messages of one conversation, readable by members only.
    With `since`, only messages stamped strictly after it are returned.
    """

    def __init__(self, conversation_reader: ConversationReader):
        self._conversation_reader = conversation_reader

    async def execute(self, query: GetConversationQuery) -> ConversationView:
        since = parse_timestamp(query.since) if query.since is not None else None
        return await self._conversation_reader.view(
            query.conversation_id, query.user_id, since=since
        )
