"""User commands."""

from .register_user_with_email import (
    RegisterUserWithEmailCommand,
    RegisterUserWithEmailHandler,
)
from .register_user_with_phone_number import (
    RegisterUserWithPhoneNumberCommand,
    RegisterUserWithPhoneNumberHandler,
)
from .update_user import UpdateUserCommand, UpdateUserHandler
from .delete_user import DeleteUserCommand, DeleteUserHandler

__all__ = [
    "RegisterUserWithEmailCommand",
    "RegisterUserWithEmailHandler",
    "RegisterUserWithPhoneNumberCommand",
    "RegisterUserWithPhoneNumberHandler",
    "UpdateUserCommand",
    "UpdateUserHandler",
    "DeleteUserCommand",
    "DeleteUserHandler",
]
