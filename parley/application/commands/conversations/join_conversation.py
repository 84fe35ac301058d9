"""Join Conversation Command."""

import logging
from dataclasses import dataclass

from parley.application.common.interfaces import Command, CommandHandler
from parley.application.services.conversation_reader import (
    ConversationReader,
    to_conversation_id,
)
from parley.application.services.user_directory import UserDirectory
from parley.domain.entities.membership import Membership
from parley.domain.exceptions import AlreadyMemberError, InvalidParticipantsError
from parley.domain.ports.repositories import MembershipRepository
from parley.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JoinConversationCommand(Command[None]):
    user_id: str
    conversation_id: str


class JoinConversationHandler(CommandHandler[None]):
    def __init__(
        self,
        membership_repository: MembershipRepository,
        conversation_reader: ConversationReader,
        user_directory: UserDirectory,
    ):
        self._membership_repository = membership_repository
        self._conversation_reader = conversation_reader
        self._user_directory = user_directory

    async def execute(self, command: JoinConversationCommand) -> None:
        user_id = UserId(command.user_id)
        conversation_id = to_conversation_id(command.conversation_id)

        if await self._user_directory.get_user(user_id.value) is None:
            raise InvalidParticipantsError()
        if await self._conversation_reader.is_member(user_id, conversation_id):
            raise AlreadyMemberError()

        await self._membership_repository.add(
            Membership(user_id=user_id, conversation_id=conversation_id)
        )
        logger.info(f"User {user_id} joined conversation {conversation_id}")
