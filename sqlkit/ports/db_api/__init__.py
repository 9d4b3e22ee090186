"""DB-API adapter and dialect exports."""

from .async_database import AsyncDatabase, fetch_rows
from .dialects import Dialect, PostgresDialect, SQLiteDialect
from .pool_connector import AsyncPoolConnector

__all__ = [
    "AsyncDatabase",
    "AsyncPoolConnector",
    "Dialect",
    "PostgresDialect",
    "SQLiteDialect",
    "fetch_rows",
]
