"""
Conversation Reader - membership checks and read-time assembly of views.

Messages only carry the sender id. Sender and member records are resolved
from the user store every time a conversation is read, so a profile change
shows up on every message that user ever sent.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from parley.application.services.user_directory import UserDirectory
from parley.domain.entities.message import Message
from parley.domain.entities.user import User
from parley.domain.exceptions import InvalidInputError, NotMemberError
from parley.domain.ports.repositories import MembershipRepository, MessageRepository
from parley.domain.value_objects.conversation_id import ConversationId
from parley.domain.value_objects.user_id import UserId
from parley.utils.concurrency import gather_all

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MessageView:
    conversation_id: ConversationId
    sender_id: UserId
    sender: Optional[User]  # None once the sender's record has been deleted
    body: str
    timestamp: datetime


@dataclass(frozen=True)
class ConversationView:
    conversation_id: ConversationId
    members: list[User] = field(default_factory=list)
    messages: list[MessageView] = field(default_factory=list)


def to_conversation_id(raw: Any) -> ConversationId:
    if isinstance(raw, ConversationId):
        return raw
    return ConversationId(raw)


class ConversationReader:
    def __init__(
        self,
        memberships: MembershipRepository,
        messages: MessageRepository,
        users: UserDirectory,
    ):
        self._memberships = memberships
        self._messages = messages
        self._users = users

    async def member_ids(self, conversation_id: ConversationId) -> list[UserId]:
        return await self._memberships.members_of(conversation_id)

    async def members(self, conversation_id: ConversationId) -> list[User]:
        """Member records in join order. Members whose user record is gone are skipped."""
        ids = await self.member_ids(conversation_id)
        users = await self._users.get_users(ids)
        return [user for user in users if user is not None]

    async def is_member(self, user_id: UserId, conversation_id: ConversationId) -> bool:
        return user_id in await self.member_ids(conversation_id)

    async def require_member(
        self, user_id: UserId, conversation_id: ConversationId
    ) -> None:
        if not await self.is_member(user_id, conversation_id):
            raise NotMemberError()

    async def conversation_ids(self, user_id: UserId) -> list[ConversationId]:
        return await self._memberships.conversation_ids_of(user_id)

    async def message_views(self, messages: list[Message]) -> list[MessageView]:
        """Join each message to its sender's current record (one lookup per sender)."""
        sender_ids = list(dict.fromkeys(m.sender_id for m in messages))
        senders = dict(zip(sender_ids, await self._users.get_users(sender_ids)))
        return [
            MessageView(
                conversation_id=m.conversation_id,
                sender_id=m.sender_id,
                sender=senders.get(m.sender_id),
                body=m.body,
                timestamp=m.timestamp,
            )
            for m in messages
        ]

    async def view(
        self,
        conversation_id: Any,
        requester_id: Any,
        since: Optional[datetime] = None,
    ) -> ConversationView:
        if not conversation_id or not requester_id:
            raise InvalidInputError("invalid parameters for getConversation")
        cid = to_conversation_id(conversation_id)
        uid = UserId(requester_id)

        member_ids, messages = await gather_all(
            self.member_ids(cid),
            self._messages.list_by_conversation(cid, since=since),
        )
        if uid not in member_ids:
            raise NotMemberError()

        member_records, views = await gather_all(
            self._users.get_users(member_ids),
            self.message_views(messages),
        )
        logger.debug(
            f"Read conversation {cid}: {len(member_ids)} members, {len(views)} messages"
        )
        return ConversationView(
            conversation_id=cid,
            members=[user for user in member_records if user is not None],
            messages=views,
        )
