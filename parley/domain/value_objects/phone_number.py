"""
PhoneNumber Value Object - E.164 normalized phone number.

Numbers are parsed with `phonenumbers` against a default region, so
"(212) 555-0123" and "+12125550123" normalize to the same value and collide
on the uniqueness check.
"""

from dataclasses import dataclass

import phonenumbers

from parley.domain.exceptions.invalid_input import InvalidInputError


@dataclass(frozen=True)
class PhoneNumber:
    value: str  # always E.164, e.g. "+12125550123"

    def __post_init__(self):
        if not self.value or not self.value.startswith("+"):
            raise InvalidInputError(f"Invalid phone number {self.value}")

    @classmethod
    def parse(cls, raw: str, region: str = "US") -> "PhoneNumber":
        if not isinstance(raw, str) or not raw.strip():
            raise InvalidInputError(f"Invalid phone number {raw}")
        try:
            parsed = phonenumbers.parse(raw, region)
        except phonenumbers.NumberParseException:
            raise InvalidInputError(f"Invalid phone number {raw}")
        if not phonenumbers.is_possible_number(parsed):
            raise InvalidInputError(f"Invalid phone number {raw}")
        return cls(
            phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)
        )

    def __str__(self) -> str:
        return self.value
