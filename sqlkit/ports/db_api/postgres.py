"""PostgreSQL connections through psycopg 3."""

from __future__ import annotations

from typing import Any

import psycopg

from ...core.config import ConnectionConfig
from .dialects import PostgresDialect
from .pool_connector import AsyncPoolConnector


async def connect_postgres(**kwargs: Any) -> psycopg.AsyncConnection:
    """Open an autocommit async connection.

    `database` is accepted as an alias of libpq's `dbname`.
    """

    if "database" in kwargs:
        kwargs.setdefault("dbname", kwargs.pop("database"))
    kwargs.setdefault("autocommit", True)
    return await psycopg.AsyncConnection.connect(**kwargs)


def create_postgres_pool(config: ConnectionConfig) -> AsyncPoolConnector:
    """Default pool factory used by the connection registry."""

    return AsyncPoolConnector(
        connect_postgres,
        dialect=PostgresDialect(),
        max_size=config.max_size,
        **config.connect_kwargs(),
    )
