"""
Database Models for URL Shortener Service

This module defines the SQLModel database schema for:
- UrlRecord: Stores the mapping between short codes and original URLs

Design Decisions:
- short_code is the primary key, so uniqueness is enforced by the database
  itself and concurrent creators of the same code cannot both succeed
- click_count lives on the record for quick stats without joins
- expires_at is optional; an expired record is kept but no longer resolves
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlmodel import Field, SQLModel

SHORT_CODE_MAX_LENGTH = 32


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps (SQLite drops tzinfo on the way back)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class UrlRecord(SQLModel, table=True):
    """
    Main table storing URL shortening mappings.

    Fields:
    - short_code: Unique short code (generated digest prefix or custom)
    - long_url: The long URL that was shortened
    - click_count: Number of successful resolutions
    - created_at: Timestamp when URL was shortened
    - expires_at: Optional expiry; past values make the record unresolvable
    """
    __tablename__ = "urls"

    short_code: str = Field(
        sa_column=Column(String(SHORT_CODE_MAX_LENGTH), primary_key=True),
        max_length=SHORT_CODE_MAX_LENGTH
    )
    long_url: str = Field(sa_column=Column(Text, nullable=False))
    click_count: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0, server_default="0")
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True)
    )
    expires_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True)
    )

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        now = now or utcnow()
        return as_utc(now) > as_utc(self.expires_at)
