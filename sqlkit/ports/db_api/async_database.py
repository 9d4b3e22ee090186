"""Async adapter for a single DB-API connection shared by many callers."""

from __future__ import annotations

import asyncio
from typing import Any, Mapping

from ...core._async_utils import _maybe_await, _maybe_close
from ...core.types import QueryParams, RowMapping, Rows
from .dialects import Dialect


def _row_to_mapping(cursor: Any, row: Any) -> RowMapping:
    """Normalize row object to a dict.

    Supports mapping rows directly and tuple/list rows via
    `cursor.description`.
    """

    if isinstance(row, Mapping):
        return dict(row)

    if isinstance(row, (tuple, list)):
        desc = getattr(cursor, "description", None)
        if not desc:
            raise TypeError(
                "Cursor has no description; cannot map tuple rows to dict."
            )
        cols = [d[0] for d in desc]
        return dict(zip(cols, row, strict=True))

    try:
        return dict(row)
    except (TypeError, ValueError):
        pass

    raise TypeError(f"Unsupported row type: {type(row)}")


async def fetch_rows(conn: Any, sql: str, params: QueryParams = None) -> Rows:
    """Execute SQL on a sync or async DB-API connection and return all rows.

    Statements that produce no result set (DDL, plain DML) return an empty
    list. The cursor is always closed.
    """

    cur = await _maybe_await(conn.cursor())
    try:
        if params is None:
            await _maybe_await(cur.execute(sql))
        else:
            await _maybe_await(cur.execute(sql, params))
        if not getattr(cur, "description", None):
            return []
        rows = await _maybe_await(cur.fetchall())
        return [_row_to_mapping(cur, r) for r in rows]
    finally:
        await _maybe_close(cur)


class AsyncDatabase:
    """Query handle over one explicit connection.

    Calls issued concurrently through the same instance are serialized, since
    a DB-API connection runs one statement at a time.
    """

    def __init__(self, conn: Any, dialect: Dialect):
        """Create async database adapter.

        Args:
            conn: Async (or sync) DB-API connection object.
            dialect: Concrete SQL dialect instance.
        """

        self.conn = conn
        self.dialect = dialect
        self._closed = False
        self._lock = asyncio.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    async def query(self, sql: str, params: QueryParams = None) -> Rows:
        """Execute SQL with optional positional parameters and return rows."""

        if self._closed:
            raise RuntimeError("connection is closed")
        async with self._lock:
            return await fetch_rows(self.conn, sql, params)

    async def close(self) -> None:
        """Close the underlying connection. Safe to call twice."""

        if self._closed:
            return
        self._closed = True
        await _maybe_close(self.conn)

    async def __aenter__(self) -> AsyncDatabase:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        await self.close()
