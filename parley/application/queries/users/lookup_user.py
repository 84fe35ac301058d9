"""Lookup queries - find a user by email address or phone number."""

from dataclasses import dataclass
from typing import Optional

from parley.application.common.interfaces import Query, QueryHandler
from parley.application.services.user_directory import UserDirectory
from parley.domain.entities.user import User


@dataclass(frozen=True)
class LookupUserByEmailQuery(Query[Optional[User]]):
    email: str


class LookupUserByEmailHandler(QueryHandler[Optional[User]]):
    def __init__(self, user_directory: UserDirectory):
        self._user_directory = user_directory

    async def execute(self, query: LookupUserByEmailQuery) -> Optional[User]:
        return await self._user_directory.lookup_by_email(query.email)


@dataclass(frozen=True)
class LookupUserByPhoneNumberQuery(Query[Optional[User]]):
    phone_number: str


class LookupUserByPhoneNumberHandler(QueryHandler[Optional[User]]):
    """The number is normalized the same way as at registration before lookup."""

    def __init__(self, user_directory: UserDirectory):
        self._user_directory = user_directory

    async def execute(self, query: LookupUserByPhoneNumberQuery) -> Optional[User]:
        return await self._user_directory.lookup_by_phone_number(query.phone_number)
