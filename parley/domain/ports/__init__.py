"""
PORTS - Interfaces the domain needs from the outside world

- repositories/: storage collaborators (users, memberships, messages)
- services/: side channels (push notifications)

Infrastructure provides the implementations.
"""

from parley.domain.ports.repositories import (
    MembershipRepository,
    MessageRepository,
    UserRepository,
)
from parley.domain.ports.services import PushNotifier

__all__ = [
    "MembershipRepository",
    "MessageRepository",
    "UserRepository",
    "PushNotifier",
]
