"""
Redis client singleton for caching conversation message history.
"""

import redis.asyncio as redis
from parley.config.settings import Config


class RedisClient:
    """Singleton Redis client."""

    _instance = None

    def __new__(cls):
        if not cls._instance:
            cls._instance = super().__new__(cls)
            cls._instance.client = redis.from_url(
                Config.REDIS_URL, decode_responses=True
            )
        return cls._instance

    async def ping(self):
        try:
            return await self.client.ping()
        except redis.RedisError:
            return False

    @property
    def redis(self):
        return self.client


def get_redis():
    return RedisClient()
