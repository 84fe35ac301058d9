"""Register User With Phone Number Command."""

from dataclasses import dataclass
from typing import Optional

from parley.application.common.interfaces import Command, CommandHandler
from parley.application.services.user_directory import UserDirectory
from parley.domain.entities.user import User


@dataclass(frozen=True)
class RegisterUserWithPhoneNumberCommand(Command[User]):
    user_id: str
    phone_number: str
    display_name: str
    push_token: Optional[str] = None


class RegisterUserWithPhoneNumberHandler(CommandHandler[User]):
    def __init__(self, user_directory: UserDirectory):
        self._user_directory = user_directory

    async def execute(self, command: RegisterUserWithPhoneNumberCommand) -> User:
        return await self._user_directory.register_with_phone_number(
            command.user_id,
            command.phone_number,
            command.display_name,
            push_token=command.push_token,
        )
