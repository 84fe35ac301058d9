"""
UserId Value Object - opaque identity issued by the identity provider.
"""

from dataclasses import dataclass

from parley.domain.exceptions.invalid_input import InvalidInputError


@dataclass(frozen=True)
class UserId:
    value: str  # "sub" claim of the upstream identity token

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value.strip():
            raise InvalidInputError(f"Invalid user id: {self.value!r}")

    def __str__(self) -> str:
        return self.value
