"""
Message Entity - A single immutable message in a conversation.

Only the sender id is stored. Display data is joined from the live user
record whenever a message is read.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Union

from parley.domain.exceptions.invalid_input import InvalidInputError
from parley.domain.value_objects.conversation_id import ConversationId
from parley.domain.value_objects.user_id import UserId


def parse_timestamp(value: Union[datetime, str]) -> datetime:
    """Accept a datetime or an ISO-8601 string and return an aware UTC datetime."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise InvalidInputError(f"Invalid timestamp {value}")
    if not isinstance(value, datetime):
        raise InvalidInputError(f"Invalid timestamp {value!r}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class Message:
    conversation_id: ConversationId
    sender_id: UserId
    body: str
    timestamp: datetime

    @classmethod
    def create(
        cls,
        conversation_id: ConversationId,
        sender_id: UserId,
        body: str,
        timestamp: Optional[Union[datetime, str]] = None,
    ) -> Message:
        """Stamp with the current time unless a replay timestamp is supplied."""
        if not isinstance(body, str):
            raise InvalidInputError("message must be a string")
        stamp = (
            datetime.now(timezone.utc) if timestamp is None else parse_timestamp(timestamp)
        )
        return cls(
            conversation_id=conversation_id,
            sender_id=sender_id,
            body=body,
            timestamp=stamp,
        )
