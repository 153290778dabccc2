"""
Best-effort cache adapter.

SafeCache exposes the same get/set/close calls as RedisCacheClient but never
raises: every backend failure becomes a miss (get) or a no-op (set). Callers
cannot tell whether the cache is up; only latency changes when it is down.

Connectivity is live state. It is set by a successful ping, cleared when a
command fails with a connection or timeout error, and probed again at most
once per reconnect_interval while down.
"""

import logging
import time
from typing import Optional

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import TimeoutError as RedisTimeoutError

from app.cache.redis_client import RedisCacheClient

logger = logging.getLogger(__name__)

CONNECTIVITY_ERRORS = (RedisConnectionError, RedisTimeoutError, OSError)


class SafeCache:
    """Cache that degrades to a no-op when its backend is unavailable."""

    def __init__(
        self,
        client: Optional[RedisCacheClient],
        default_ttl: int = 3600,
        reconnect_interval: float = 5.0,
    ):
        """
        Args:
            client: Strict backend client, or None to run permanently uncached
            default_ttl: TTL in seconds used when set() gets no explicit ttl
            reconnect_interval: Minimum seconds between reconnect probes
        """
        self.client = client
        self.default_ttl = default_ttl
        self.reconnect_interval = reconnect_interval
        self._connected = False
        self._last_probe: Optional[float] = None

    @property
    def connected(self) -> bool:
        return self._connected

    async def connect(self) -> bool:
        """
        Probe the backend and record the result.

        Returns:
            True if the backend answered the ping
        """
        if self.client is None:
            return False

        first_probe = self._last_probe is None
        self._last_probe = time.monotonic()
        try:
            await self.client.ping()
        except Exception as e:
            if first_probe:
                logger.warning(f"Redis not available, app will continue without caching: {e}")
            self._mark_disconnected(e)
            return False

        if not self._connected:
            logger.info("Redis connected")
        self._connected = True
        return True

    async def get(self, key: str) -> Optional[str]:
        """Return the cached value, or None on miss, error, or disconnection."""
        if not await self._available():
            return None

        try:
            return await self.client.get(key)
        except Exception as e:
            self._handle_error("get", e)
            return None

    async def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        """Store a value with a TTL; failures are logged and dropped."""
        if not await self._available():
            return

        try:
            await self.client.set(key, value, self.default_ttl if ttl is None else ttl)
        except Exception as e:
            self._handle_error("set", e)

    async def close(self) -> None:
        if self.client is None:
            return
        try:
            await self.client.close()
        except Exception as e:
            logger.error(f"Redis close error: {e}")
        finally:
            self._connected = False

    async def _available(self) -> bool:
        if self._connected:
            return True
        if self.client is None:
            return False
        if self._last_probe is not None and time.monotonic() - self._last_probe < self.reconnect_interval:
            return False
        return await self.connect()

    def _handle_error(self, operation: str, error: Exception) -> None:
        if isinstance(error, CONNECTIVITY_ERRORS):
            self._mark_disconnected(error)
        else:
            logger.error(f"Redis {operation} error: {error}")

    def _mark_disconnected(self, error: Exception) -> None:
        if self._connected:
            logger.warning(f"Redis connection lost, continuing without caching: {error}")
        self._connected = False
