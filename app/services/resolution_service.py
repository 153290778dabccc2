"""
Resolution Service

This service handles the core business logic for URL shortening:
- Creating short URLs (generated or custom codes)
- Resolving short codes back to URLs, cache first, database second
- Counting clicks on every successful resolution
- Reading per-code statistics

Design Decisions:
- Collaborators (record store, cache) are injected, so tests can pass fakes
- The cache is a soft projection of the store; it is written only after a
  successful create or a database read, and its failures never surface
- A cache hit returns immediately; the click increment for it runs as a
  supervised background task whose failure is only logged
- A cache hit does not check expires_at, so an expired link keeps
  resolving until its cache entry is evicted
"""

import asyncio
import logging
from typing import Optional, Set

from app.cache.redis_client import cache_key_for_code
from app.cache.safe_cache import SafeCache
from app.core.exceptions import CodeTakenError, DuplicateKeyError, InvalidURLError
from app.core.validators import is_valid_url
from app.db.models import UrlRecord
from app.db.record_store import RecordStore
from app.services.code_generator import DEFAULT_CODE_LENGTH, generate_short_code

logger = logging.getLogger(__name__)


class ResolutionService:
    """
    Orchestrates creation and lookup across cache and record store.

    Separated from API layer for testability and maintainability.
    """

    def __init__(
        self,
        store: RecordStore,
        cache: SafeCache,
        cache_ttl: int = 3600,
        code_length: int = DEFAULT_CODE_LENGTH,
    ):
        """
        Initialize the resolution service.

        Args:
            store: Durable record store (source of truth)
            cache: Best-effort cache
            cache_ttl: Seconds a code -> URL mapping stays cached
            code_length: Length of generated short codes
        """
        self.store = store
        self.cache = cache
        self.cache_ttl = cache_ttl
        self.code_length = code_length
        self._background_tasks: Set[asyncio.Task] = set()

    async def create_short_url(
        self,
        long_url: str,
        custom_code: Optional[str] = None
    ) -> UrlRecord:
        """
        Create a new short URL, or return the existing one for a generated code.

        Args:
            long_url: The long URL to shorten
            custom_code: Optional caller-chosen short code

        Returns:
            UrlRecord (newly created, or the existing record for the generated code)

        Raises:
            InvalidURLError: If URL format is invalid
            CodeTakenError: If custom_code is already in use
            DatabaseError: If a database operation fails
        """
        if not is_valid_url(long_url):
            raise InvalidURLError(
                long_url,
                reason="Invalid URL format. URL must use http:// or https:// and have a valid domain"
            )

        if custom_code:
            record = await self._create_with_custom_code(long_url, custom_code)
        else:
            short_code = generate_short_code(long_url, self.code_length)

            # Dedup on the code alone: the stored long_url is not compared
            existing = await self.store.find_by_code(short_code)
            if existing:
                return existing

            try:
                record = await self.store.create(short_code, long_url)
            except DuplicateKeyError:
                # A concurrent request for the same URL won the insert
                existing = await self.store.find_by_code(short_code)
                if existing is None:
                    raise
                return existing

        await self.cache.set(cache_key_for_code(record.short_code), record.long_url, self.cache_ttl)
        logger.info(f"Created short URL: {record.short_code} -> {record.long_url}")
        return record

    async def _create_with_custom_code(self, long_url: str, custom_code: str) -> UrlRecord:
        if await self.store.find_by_code(custom_code):
            raise CodeTakenError(custom_code)

        try:
            return await self.store.create(custom_code, long_url)
        except DuplicateKeyError:
            raise CodeTakenError(custom_code)

    async def get_long_url(self, short_code: str) -> Optional[str]:
        """
        Resolve a short code to its long URL and count the click.

        Args:
            short_code: The short code to look up

        Returns:
            The long URL, or None if the code is unknown or expired

        Raises:
            DatabaseError: If a database operation fails on the uncached path
        """
        cache_key = cache_key_for_code(short_code)

        cached_url = await self.cache.get(cache_key)
        if cached_url:
            logger.debug(f"Cache hit for {short_code}")
            self._spawn_click_increment(short_code)
            return cached_url

        record = await self.store.find_by_code(short_code)
        if record is None:
            return None

        if record.is_expired():
            logger.debug(f"Short code expired: {short_code}")
            return None

        await self.store.increment_click_count(short_code)
        await self.cache.set(cache_key, record.long_url, self.cache_ttl)
        return record.long_url

    async def get_url_stats(self, short_code: str) -> Optional[UrlRecord]:
        """
        Get the stored record for a short code.

        Reads the database directly; the cache holds no statistics.
        """
        return await self.store.find_by_code(short_code)

    async def aclose(self) -> None:
        """Wait for click increments that are still in flight."""
        if self._background_tasks:
            await asyncio.gather(*list(self._background_tasks), return_exceptions=True)

    def _spawn_click_increment(self, short_code: str) -> None:
        task = asyncio.create_task(
            self.store.increment_click_count(short_code),
            name=f"click-increment:{short_code}"
        )
        # Strong reference until done; the event loop only keeps weak ones
        self._background_tasks.add(task)
        task.add_done_callback(self._on_click_increment_done)

    def _on_click_increment_done(self, task: asyncio.Task) -> None:
        self._background_tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(
                f"Error updating click count ({task.get_name()}): {str(error)}",
                exc_info=error
            )
