"""Get User Query."""

from dataclasses import dataclass
from typing import Optional

from parley.application.common.interfaces import Query, QueryHandler
from parley.application.services.user_directory import UserDirectory
from parley.domain.entities.user import User


@dataclass(frozen=True)
class GetUserQuery(Query[Optional[User]]):
    user_id: str


class GetUserHandler(QueryHandler[Optional[User]]):
    def __init__(self, user_directory: UserDirectory):
        self._user_directory = user_directory

    async def execute(self, query: GetUserQuery) -> Optional[User]:
        return await self._user_directory.get_user(query.user_id)
