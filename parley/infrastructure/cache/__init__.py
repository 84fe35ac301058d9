"""
Cache Layer - Redis caching decorators for repositories.
"""

from parley.infrastructure.cache.cached_message_repository import (
    CachedMessageRepository,
)

__all__ = ["CachedMessageRepository"]
