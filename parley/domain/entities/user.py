"""
User Entity - A registered participant.
"""

from dataclasses import dataclass
from typing import Optional

from parley.domain.exceptions.invalid_input import InvalidInputError
from parley.domain.value_objects.phone_number import PhoneNumber
from parley.domain.value_objects.user_email import UserEmail
from parley.domain.value_objects.user_id import UserId


@dataclass
class User:
    id: UserId
    display_name: str
    email: Optional[UserEmail] = None
    phone_number: Optional[PhoneNumber] = None
    push_token: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.display_name, str) or not self.display_name.strip():
            raise InvalidInputError("displayName is required")

    def update_profile(
        self, display_name: Optional[str] = None, push_token: Optional[str] = None
    ) -> None:
        """Apply only the fields that were supplied; contact details never change."""
        if display_name is not None:
            if not display_name.strip():
                raise InvalidInputError("displayName cannot be empty")
            self.display_name = display_name
        if push_token is not None:
            self.push_token = push_token
