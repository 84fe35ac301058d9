"""User DTOs for API responses."""

from typing import Optional

from pydantic import BaseModel

from parley.domain.entities.user import User


class UserDTO(BaseModel):
    """Public profile; the push token is never exposed."""

    user_id: str
    display_name: str
    email: Optional[str] = None
    phone_number: Optional[str] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserDTO":
        return cls(
            user_id=user.id.value,
            display_name=user.display_name,
            email=user.email.value if user.email else None,
            phone_number=user.phone_number.value if user.phone_number else None,
        )
