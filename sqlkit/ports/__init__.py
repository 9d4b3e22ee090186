"""Public port exports for concrete adapter implementations."""

from .db_api import AsyncDatabase, AsyncPoolConnector, Dialect, PostgresDialect, SQLiteDialect

__all__ = [
    "AsyncDatabase",
    "AsyncPoolConnector",
    "Dialect",
    "PostgresDialect",
    "SQLiteDialect",
]
