"""Initiate Conversation Command."""

from dataclasses import dataclass

from parley.application.common.interfaces import Command, CommandHandler
from parley.application.services.conversation_resolver import ConversationResolver
from parley.domain.value_objects.conversation_id import ConversationId


@dataclass(frozen=True)
class InitiateConversationCommand(Command[ConversationId]):
    user_id: str
    other_user_ids: tuple[str, ...]


class InitiateConversationHandler(CommandHandler[ConversationId]):
    """
    Returns the conversation whose members are exactly the initiator plus
    `other_user_ids`, creating it when there is none. Calling this twice in a
    row for the same group returns the same id.
    """

    def __init__(self, conversation_resolver: ConversationResolver):
        self._conversation_resolver = conversation_resolver

    async def execute(self, command: InitiateConversationCommand) -> ConversationId:
        conversation_id, _ = await self._conversation_resolver.resolve(
            command.user_id, command.other_user_ids
        )
        return conversation_id
