"""Validate User Ids Query."""

from dataclasses import dataclass

from parley.application.common.interfaces import Query, QueryHandler
from parley.application.services.user_directory import UserDirectory


@dataclass(frozen=True)
class ValidateUserIdsQuery(Query[bool]):
    user_ids: tuple[str, ...]


class ValidateUserIdsHandler(QueryHandler[bool]):
    def __init__(self, user_directory: UserDirectory):
        self._user_directory = user_directory

    async def execute(self, query: ValidateUserIdsQuery) -> bool:
        return await self._user_directory.validate_ids(query.user_ids)
