"""Update User Command - change display name and/or push token."""

from dataclasses import dataclass
from typing import Optional

from parley.application.common.interfaces import Command, CommandHandler
from parley.application.services.user_directory import UserDirectory
from parley.domain.entities.user import User


@dataclass(frozen=True)
class UpdateUserCommand(Command[User]):
    user_id: str
    display_name: Optional[str] = None
    push_token: Optional[str] = None


class UpdateUserHandler(CommandHandler[User]):
    def __init__(self, user_directory: UserDirectory):
        self._user_directory = user_directory

    async def execute(self, command: UpdateUserCommand) -> User:
        return await self._user_directory.update_user(
            command.user_id,
            display_name=command.display_name,
            push_token=command.push_token,
        )
