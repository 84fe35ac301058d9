"""
ConversationId Value Object - time-ordered UUID (v1) shared by all members.
"""

from dataclasses import dataclass
from uuid import uuid1

from parley.domain.exceptions.invalid_input import InvalidInputError


@dataclass(frozen=True)
class ConversationId:
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise InvalidInputError(f"Invalid conversation id: {self.value!r}")

    @classmethod
    def generate(cls) -> "ConversationId":
        return cls(str(uuid1()))

    def __str__(self) -> str:
        return self.value
