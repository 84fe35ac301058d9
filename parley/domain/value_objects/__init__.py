"""
VALUE OBJECTS - Immutable domain types

Each value object:
- Has no identity (compared by value, not by ID)
- Is immutable (frozen dataclass)
- Validates itself on creation and raises InvalidInputError
"""

from parley.domain.value_objects.user_id import UserId
from parley.domain.value_objects.user_email import UserEmail
from parley.domain.value_objects.phone_number import PhoneNumber
from parley.domain.value_objects.conversation_id import ConversationId

__all__ = [
    "UserId",
    "UserEmail",
    "PhoneNumber",
    "ConversationId",
]
