"""
ENTITIES - Business objects with identity

A conversation is not an entity of its own: it exists only as the set of
Membership records sharing a ConversationId.
"""

from parley.domain.entities.user import User
from parley.domain.entities.membership import Membership
from parley.domain.entities.message import Message

__all__ = [
    "User",
    "Membership",
    "Message",
]
