"""
Cache module.

- RedisCacheClient: strict async Redis client (raises on failure)
- SafeCache: best-effort adapter over it (never raises)
"""

from app.cache.redis_client import RedisCacheClient, cache_key_for_code
from app.cache.safe_cache import SafeCache

__all__ = [
    "RedisCacheClient",
    "SafeCache",
    "cache_key_for_code",
]
