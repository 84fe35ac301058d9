"""
Membership Entity - grants a user read/write access to one conversation.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone

from parley.domain.value_objects.conversation_id import ConversationId
from parley.domain.value_objects.user_id import UserId


@dataclass(frozen=True)
class Membership:
    user_id: UserId
    conversation_id: ConversationId
    joined_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
