"""
Record Store

Durable table of short code -> URL records; the source of truth.

Design Decisions:
- Each operation opens its own session from the factory, so concurrent
  requests and background tasks never share a session
- Uniqueness of short codes is left to the primary key: an IntegrityError
  on insert becomes DuplicateKeyError
- Click counts use a database-level UPDATE (no read-modify-write)
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from app.core.exceptions import DatabaseError, DuplicateKeyError
from app.db.models import UrlRecord, utcnow


class RecordStore:
    """Async access to the urls table."""

    def __init__(self, session_maker: async_sessionmaker):
        """
        Args:
            session_maker: Factory producing AsyncSession instances
        """
        self.session_maker = session_maker

    async def find_by_code(self, short_code: str) -> Optional[UrlRecord]:
        """
        Look up a record by short code.

        Returns:
            UrlRecord if found, None otherwise

        Raises:
            DatabaseError: If the query fails
        """
        try:
            async with self.session_maker() as session:
                statement = select(UrlRecord).where(UrlRecord.short_code == short_code)
                result = await session.execute(statement)
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to look up short code '{short_code}': {str(e)}",
                original_error=e
            )

    async def create(
        self,
        short_code: str,
        long_url: str,
        expires_at: Optional[datetime] = None
    ) -> UrlRecord:
        """
        Insert a new record.

        Args:
            short_code: Unique key for the record
            long_url: The validated target URL
            expires_at: Optional expiry timestamp

        Returns:
            The persisted UrlRecord (click_count 0)

        Raises:
            DuplicateKeyError: If a record with this short code already exists
            DatabaseError: If the insert fails for any other reason
        """
        record = UrlRecord(
            short_code=short_code,
            long_url=long_url,
            click_count=0,
            created_at=utcnow(),
            expires_at=expires_at
        )

        async with self.session_maker() as session:
            try:
                session.add(record)
                await session.commit()
                await session.refresh(record)
                return record
            except IntegrityError as e:
                await session.rollback()
                raise DuplicateKeyError(short_code, original_error=e)
            except SQLAlchemyError as e:
                await session.rollback()
                raise DatabaseError(
                    f"Failed to create short URL: {str(e)}",
                    original_error=e
                )

    async def increment_click_count(self, short_code: str) -> None:
        """
        Increment the click count for a record atomically.

        Silently does nothing if short_code doesn't exist.

        Raises:
            DatabaseError: If the update fails
        """
        statement = (
            update(UrlRecord)
            .where(UrlRecord.short_code == short_code)
            .values(click_count=UrlRecord.click_count + 1)
        )

        async with self.session_maker() as session:
            try:
                await session.execute(statement)
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise DatabaseError(
                    f"Failed to increment click count for '{short_code}': {str(e)}",
                    original_error=e
                )
