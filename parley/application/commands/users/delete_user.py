"""Delete User Command."""

from dataclasses import dataclass

from parley.application.common.interfaces import Command, CommandHandler
from parley.application.services.user_directory import UserDirectory


@dataclass(frozen=True)
class DeleteUserCommand(Command[bool]):
    user_id: str


class DeleteUserHandler(CommandHandler[bool]):
    """
    Removes only the user record. Memberships and messages stay behind, so
    the user keeps counting as a member while their messages render without
    a sender.
    """

    def __init__(self, user_directory: UserDirectory):
        self._user_directory = user_directory

    async def execute(self, command: DeleteUserCommand) -> bool:
        return await self._user_directory.delete_user(command.user_id)
