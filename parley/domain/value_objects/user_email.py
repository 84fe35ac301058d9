"""
UserEmail Value Object - Wraps user email with syntactic validation.
"""

import re
from dataclasses import dataclass

from parley.domain.exceptions.invalid_input import InvalidInputError

# local@domain, where domain is either a bracketed IPv4 literal or dotted labels
# ending in a TLD of two or more letters.
EMAIL_PATTERN = re.compile(
    r"^(([^<>()\[\]\\.,;:\s@\"]+(\.[^<>()\[\]\\.,;:\s@\"]+)*)|(\".+\"))"
    r"@((\[[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\.[0-9]{1,3}\])"
    r"|(([a-zA-Z\-0-9]+\.)+[a-zA-Z]{2,}))$"
)


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.match(str(email).lower()) is not None


@dataclass(frozen=True)
class UserEmail:
    value: str

    def __post_init__(self):
        if not self.value or not is_valid_email(self.value):
            raise InvalidInputError(f"Invalid email {self.value}")

    def __str__(self) -> str:
        return self.value
