"""Tests for the record store against a real SQLite database."""

from datetime import timedelta

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import NullPool

from app.core.exceptions import DatabaseError, DuplicateKeyError
from app.db.adapters import PostgreSQLAdapter, SQLiteAdapter, get_database_adapter
from app.db.models import UrlRecord, as_utc, utcnow
from app.db.record_store import RecordStore


class TestRecordStore:

    @pytest.mark.asyncio
    async def test_create_and_find(self, store):
        created = await store.create("abc1234", "https://example.com/a/b")

        assert created.short_code == "abc1234"
        assert created.long_url == "https://example.com/a/b"
        assert created.click_count == 0
        assert created.created_at is not None
        assert created.expires_at is None

        found = await store.find_by_code("abc1234")
        assert found is not None
        assert found.long_url == "https://example.com/a/b"

    @pytest.mark.asyncio
    async def test_find_unknown_returns_none(self, store):
        assert await store.find_by_code("nothere") is None

    @pytest.mark.asyncio
    async def test_duplicate_code_rejected(self, store):
        await store.create("taken", "https://example.com")

        with pytest.raises(DuplicateKeyError) as exc_info:
            await store.create("taken", "https://example.org")

        assert exc_info.value.short_code == "taken"
        found = await store.find_by_code("taken")
        assert found.long_url == "https://example.com"

    @pytest.mark.asyncio
    async def test_increment_click_count(self, store):
        await store.create("abc1234", "https://example.com")

        await store.increment_click_count("abc1234")
        await store.increment_click_count("abc1234")

        found = await store.find_by_code("abc1234")
        assert found.click_count == 2

    @pytest.mark.asyncio
    async def test_increment_unknown_code_is_noop(self, store):
        await store.increment_click_count("nothere")
        assert await store.find_by_code("nothere") is None

    @pytest.mark.asyncio
    async def test_expires_at_round_trip(self, store):
        expires_at = utcnow() + timedelta(days=1)
        await store.create("soon", "https://example.com", expires_at=expires_at)

        found = await store.find_by_code("soon")
        assert abs(as_utc(found.expires_at) - expires_at) < timedelta(seconds=1)
        assert not found.is_expired()

    @pytest.mark.asyncio
    async def test_query_failure_raises_database_error(self):
        class FailingSession:
            async def __aenter__(self):
                return self

            async def __aexit__(self, *exc_info):
                return False

            async def execute(self, statement):
                raise OperationalError("SELECT", {}, Exception("database is locked"))

        failing_store = RecordStore(lambda: FailingSession())

        with pytest.raises(DatabaseError):
            await failing_store.find_by_code("abc1234")


class TestUrlRecordExpiry:

    def test_no_expiry_never_expires(self):
        record = UrlRecord(short_code="a", long_url="https://example.com")
        assert not record.is_expired()

    def test_past_expiry(self):
        record = UrlRecord(
            short_code="a",
            long_url="https://example.com",
            expires_at=utcnow() - timedelta(seconds=1)
        )
        assert record.is_expired()

    def test_naive_timestamp_treated_as_utc(self):
        past = (utcnow() - timedelta(hours=1)).replace(tzinfo=None)
        record = UrlRecord(short_code="a", long_url="https://example.com", expires_at=past)
        assert record.is_expired()


class TestDatabaseAdapters:

    def test_sqlite_url_uses_null_pool(self):
        adapter = get_database_adapter("sqlite+aiosqlite:///./urlshortener.db")

        assert isinstance(adapter, SQLiteAdapter)
        assert adapter.get_pool_class() is NullPool
        assert adapter.get_connect_args() == {"check_same_thread": False}

    def test_postgresql_url_uses_queue_pool_settings(self):
        adapter = get_database_adapter("postgresql+asyncpg://user:pw@db:5432/urls")

        assert isinstance(adapter, PostgreSQLAdapter)
        assert adapter.get_pool_class() is None
        assert adapter.get_engine_kwargs()["pool_pre_ping"] is True
