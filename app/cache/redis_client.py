"""Strict async Redis client for short code -> URL mappings."""

from typing import Optional

import redis.asyncio as redis

CACHE_KEY_PREFIX = "url:"


def cache_key_for_code(short_code: str) -> str:
    return f"{CACHE_KEY_PREFIX}{short_code}"


class RedisCacheClient:
    """
    Thin wrapper around redis.asyncio.Redis.

    Every method lets redis exceptions propagate; SafeCache is the layer
    that turns them into cache misses.
    """

    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_settings(
        cls,
        host: str,
        port: int,
        password: Optional[str] = None,
        db: int = 0,
        socket_timeout: Optional[float] = None,
    ) -> "RedisCacheClient":
        """Build a client from host/port/password configuration."""
        client = redis.Redis(
            host=host,
            port=port,
            password=password,
            db=db,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )
        return cls(client)

    async def ping(self) -> bool:
        return bool(await self.client.ping())

    async def get(self, key: str) -> Optional[str]:
        return await self.client.get(key)

    async def set(self, key: str, value: str, ttl: int) -> None:
        await self.client.setex(key, ttl, value)

    async def close(self) -> None:
        await self.client.aclose()
