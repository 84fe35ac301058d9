"""
REPOSITORY PORTS - Data persistence interfaces

Each repository port:
- Is an abstract base class (ABC)
- Is passive: no business invariants are enforced here
- Does NOT specify implementation (in-memory, Prisma, ...)
"""

from parley.domain.ports.repositories.user_repository import UserRepository
from parley.domain.ports.repositories.membership_repository import MembershipRepository
from parley.domain.ports.repositories.message_repository import MessageRepository

__all__ = [
    "UserRepository",
    "MembershipRepository",
    "MessageRepository",
]
