"""
Persistence Layer - Database implementations.

Contains Prisma repository implementations for domain ports. The Prisma
client itself is generated from schema.prisma and injected by the container.
"""

from parley.infrastructure.persistence.prisma_user_repository import (
    PrismaUserRepository,
)
from parley.infrastructure.persistence.prisma_membership_repository import (
    PrismaMembershipRepository,
)
from parley.infrastructure.persistence.prisma_message_repository import (
    PrismaMessageRepository,
)

__all__ = [
    "PrismaUserRepository",
    "PrismaMembershipRepository",
    "PrismaMessageRepository",
]
