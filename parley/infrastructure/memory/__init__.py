"""
In-memory repositories.

Dict-backed implementations of the repository ports. They honour the same
contracts as the Prisma ones (conditional create, join order, timestamp
ordering) so the whole service can run without external storage.
"""

from parley.infrastructure.memory.user_repository import InMemoryUserRepository
from parley.infrastructure.memory.membership_repository import (
    InMemoryMembershipRepository,
)
from parley.infrastructure.memory.message_repository import InMemoryMessageRepository

__all__ = [
    "InMemoryUserRepository",
    "InMemoryMembershipRepository",
    "InMemoryMessageRepository",
]
