"""
Database module with abstraction layer.

This module provides:
- DatabaseAdapter interface: Abstract base class for database implementations
- SQLiteAdapter / PostgreSQLAdapter: backend-specific engine configuration
- Session management: engine and session factory construction
- RecordStore: the durable short code -> URL table
"""

from app.db.interface import DatabaseAdapter
from app.db.record_store import RecordStore
from app.db.session import build_engine, build_session_maker, create_tables

__all__ = [
    "DatabaseAdapter",
    "RecordStore",
    "build_engine",
    "build_session_maker",
    "create_tables",
]
