"""
Cached Message Repository - Decorator pattern for Redis caching.

Architecture:
    CachedMessageRepository (decorator)
        ↓ wraps
    PrismaMessageRepository / InMemoryMessageRepository
        ↓ implements
    MessageRepository (abstract interface)

Cache Strategy:
- Read-Through: full history is served from Redis, loaded from the wrapped
  repository on a miss
- Write-Through: append goes to the wrapped repository first, then ZADD puts
  it in the cached set whether or not that set is complete yet
- TTL-based expiration (Config.REDIS_CACHE_TTL)

Redis Data Structure (SORTED SET):
- Key pattern: "conv:{conversation_id}:msgs"
- Each member: JSON string for ONE message, scored by its timestamp
- One extra member, LOADED_MARKER, scored -inf, is added only when the full
  history has been written. Without it the set may hold just the appends
  that raced a fill, so a read treats it as a miss.

ZADD is idempotent, so concurrent fills and appends converge on one copy
of every message, and an append that lands while a reader is loading from
the database stays in the set once that reader's fill completes.

Error Handling:
- Cache failures never fail the operation: they are logged and the wrapped
  repository answers instead.
"""

import json
import logging
from datetime import datetime
from typing import Optional

from redis.asyncio import Redis

from parley.config.settings import Config
from parley.domain.entities.message import Message
from parley.domain.ports.repositories.message_repository import MessageRepository
from parley.domain.value_objects.conversation_id import ConversationId
from parley.domain.value_objects.user_id import UserId

logger = logging.getLogger(__name__)

LOADED_MARKER = "__loaded__"


class CachedMessageRepository(MessageRepository):
    """
    Decorator: adds Redis caching to MessageRepository.

    Implements the same interface, so callers don't know caching exists.
    """

    def __init__(self, repo: MessageRepository, redis: Redis, ttl: int = None):
        self._repo = repo
        self._redis = redis
        self._ttl = ttl or Config.REDIS_CACHE_TTL

    def _cache_key(self, conversation_id: ConversationId) -> str:
        return f"conv:{conversation_id.value}:msgs"

    def _serialize_message(self, message: Message) -> str:
        return json.dumps(
            {
                "conversation_id": message.conversation_id.value,
                "sender_id": message.sender_id.value,
                "body": message.body,
                "timestamp": message.timestamp.isoformat(),
            }
        )

    def _deserialize_message(self, json_str: str) -> Message:
        d = json.loads(json_str)
        return Message(
            conversation_id=ConversationId(d["conversation_id"]),
            sender_id=UserId(d["sender_id"]),
            body=d["body"],
            timestamp=datetime.fromisoformat(d["timestamp"]),
        )

    def _entries(self, messages: list[Message]) -> dict[str, float]:
        return {self._serialize_message(m): m.timestamp.timestamp() for m in messages}

    async def append(self, message: Message) -> None:
        # 1. Write to the source of truth first
        await self._repo.append(message)

        # 2. Add to the cached set (best effort)
        cache_key = self._cache_key(message.conversation_id)
        try:
            async with self._redis.pipeline(transaction=True) as pipe:
                pipe.zadd(cache_key, self._entries([message]))
                pipe.expire(cache_key, self._ttl)
                await pipe.execute()
        except Exception as e:
            logger.warning(f"Redis cache update error for {cache_key}: {str(e)}")

    async def list_by_conversation(
        self, conversation_id: ConversationId, since: Optional[datetime] = None
    ) -> list[Message]:
        cache_key = self._cache_key(conversation_id)

        # 1. Try cache first (fast path)
        try:
            members = await self._redis.zrange(cache_key, 0, -1)
            members = [m.decode() if isinstance(m, bytes) else m for m in members]
            if LOADED_MARKER in members:
                logger.debug(f"Cache HIT for {cache_key}")
                messages = [
                    self._deserialize_message(s) for s in members if s != LOADED_MARKER
                ]
                return self._after(messages, since)
        except Exception as e:
            logger.warning(f"Redis cache read error for {cache_key}: {str(e)}")

        # 2. Cache miss - load the full history
        logger.debug(f"Cache MISS for {cache_key}")
        messages = await self._repo.list_by_conversation(conversation_id)

        # 3. Populate cache (best effort); merges with any appends made meanwhile
        try:
            if messages:
                entries = self._entries(messages)
                entries[LOADED_MARKER] = float("-inf")
                async with self._redis.pipeline(transaction=True) as pipe:
                    pipe.zadd(cache_key, entries)
                    pipe.expire(cache_key, self._ttl)
                    await pipe.execute()
                logger.debug(f"Cache POPULATED for {cache_key}")
        except Exception as e:
            logger.warning(f"Redis cache write error for {cache_key}: {str(e)}")

        return self._after(messages, since)

    @staticmethod
    def _after(messages: list[Message], since: Optional[datetime]) -> list[Message]:
        if since is None:
            return messages
        return [m for m in messages if m.timestamp > since]
