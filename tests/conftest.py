"""Pytest configuration and fixtures."""

from typing import AsyncGenerator, Dict, Optional

import pytest
import pytest_asyncio
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError

from app.cache.redis_client import RedisCacheClient
from app.cache.safe_cache import SafeCache
from app.db.record_store import RecordStore
from app.db.session import build_engine, build_session_maker, create_tables
from app.services.resolution_service import ResolutionService


class FakeRedis:
    """
    In-memory stand-in for redis.asyncio.Redis.

    Set `down` to simulate a lost connection, or `broken` to make every
    command fail with a server-side error while the connection stays up.
    """

    def __init__(self):
        self.data: Dict[str, str] = {}
        self.ttls: Dict[str, int] = {}
        self.down = False
        self.broken = False
        self.get_calls = 0
        self.set_calls = 0
        self.closed = False

    def _check(self) -> None:
        if self.down:
            raise RedisConnectionError("Connection refused")
        if self.broken:
            raise ResponseError("ERR command failed")

    async def ping(self) -> bool:
        if self.down:
            raise RedisConnectionError("Connection refused")
        return True

    async def get(self, key: str) -> Optional[str]:
        self.get_calls += 1
        self._check()
        return self.data.get(key)

    async def setex(self, key: str, ttl: int, value: str) -> None:
        self.set_calls += 1
        self._check()
        self.data[key] = value
        self.ttls[key] = ttl

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest_asyncio.fixture
async def cache(fake_redis) -> SafeCache:
    """Connected cache over the fake backend; reconnect attempts are not throttled."""
    safe_cache = SafeCache(RedisCacheClient(fake_redis), default_ttl=3600, reconnect_interval=0.0)
    await safe_cache.connect()
    return safe_cache


@pytest_asyncio.fixture
async def db_engine(tmp_path) -> AsyncGenerator:
    """Fresh SQLite database file per test."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def store(db_engine) -> RecordStore:
    return RecordStore(build_session_maker(db_engine))


@pytest_asyncio.fixture
async def service(store, cache) -> AsyncGenerator[ResolutionService, None]:
    resolution_service = ResolutionService(store=store, cache=cache, cache_ttl=3600, code_length=7)
    yield resolution_service
    await resolution_service.aclose()


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/a/b",
        "https://github.com/user/repo",
        "https://stackoverflow.com/questions/123456",
    ]
