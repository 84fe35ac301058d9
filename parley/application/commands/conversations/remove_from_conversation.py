"""Remove From Conversation Command."""

import logging
from dataclasses import dataclass

from parley.application.common.interfaces import Command, CommandHandler
from parley.application.services.conversation_reader import to_conversation_id
from parley.domain.exceptions import NotMemberError
from parley.domain.ports.repositories import MembershipRepository
from parley.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoveFromConversationCommand(Command[None]):
    user_id: str
    conversation_id: str


class RemoveFromConversationHandler(CommandHandler[None]):
    """
    Drops one membership record. Message history is never deleted, even when
    the last member leaves; it becomes readable again to anyone who re-joins.
    """

    def __init__(self, membership_repository: MembershipRepository):
        self._membership_repository = membership_repository

    async def execute(self, command: RemoveFromConversationCommand) -> None:
        user_id = UserId(command.user_id)
        conversation_id = to_conversation_id(command.conversation_id)

        removed = await self._membership_repository.remove(user_id, conversation_id)
        if not removed:
            raise NotMemberError()
        logger.info(f"User {user_id} left conversation {conversation_id}")
