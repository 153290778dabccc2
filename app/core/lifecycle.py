"""
Application Resources

This module is the composition root: it builds the database engine, the
record store, the cache and the resolution service once per application
instance and stores them on app.state. Endpoints reach them through
app.api.dependencies, never through module globals.

Design:
- Initialized on application startup, shared across all requests
- Redis being down at startup is not fatal; the cache starts disconnected
- Shutdown waits for in-flight click increments before closing connections
"""

import logging

from fastapi import FastAPI

from app.cache.redis_client import RedisCacheClient
from app.cache.safe_cache import SafeCache
from app.core.setting import Settings, EnvSettingsOptions
from app.db.record_store import RecordStore
from app.db.session import build_engine, build_session_maker, create_tables
from app.services.resolution_service import ResolutionService

logger = logging.getLogger(__name__)


def build_cache(settings: Settings) -> SafeCache:
    """Create the best-effort cache described by the settings."""
    client = None
    if settings.REDIS_ENABLED:
        client = RedisCacheClient.from_settings(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            password=settings.REDIS_PASSWORD,
            db=settings.REDIS_DB,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        )
    else:
        logger.info("Redis disabled by configuration, running without caching")

    return SafeCache(
        client,
        default_ttl=settings.REDIS_CACHE_TTL,
        reconnect_interval=settings.REDIS_RECONNECT_INTERVAL,
    )


async def initialize_resources(app: FastAPI, settings: Settings) -> None:
    """
    Build all collaborators and attach them to app.state.

    Tables are created automatically only for SQLite outside production;
    other deployments run the Alembic migrations.
    """
    engine = build_engine(settings.DATABASE_URL)
    if engine.dialect.name == "sqlite" and settings.ENV_SETTING != EnvSettingsOptions.production:
        await create_tables(engine)

    store = RecordStore(build_session_maker(engine))

    cache = build_cache(settings)
    await cache.connect()

    app.state.engine = engine
    app.state.cache = cache
    app.state.resolution_service = ResolutionService(
        store=store,
        cache=cache,
        cache_ttl=settings.REDIS_CACHE_TTL,
        code_length=settings.SHORT_CODE_LENGTH,
    )

    logger.info(
        f"Resources initialized: database={engine.dialect.name}, "
        f"cache_connected={cache.connected}"
    )


async def shutdown_resources(app: FastAPI) -> None:
    """Drain background work, then close the cache and the engine."""
    service = getattr(app.state, "resolution_service", None)
    if service is not None:
        await service.aclose()

    cache = getattr(app.state, "cache", None)
    if cache is not None:
        await cache.close()

    engine = getattr(app.state, "engine", None)
    if engine is not None:
        await engine.dispose()

    logger.info("All connections closed")
