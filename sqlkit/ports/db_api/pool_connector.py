"""Small asyncio pool for DB-API connection objects."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import AsyncIterator, Callable
from typing import Any

from ...core._async_utils import _maybe_await, _maybe_close
from ...core.types import QueryParams, Rows
from .async_database import fetch_rows
from .dialects import Dialect, PostgresDialect

logger = logging.getLogger(__name__)


class AsyncPoolConnector:
    """Fixed-size pool of DB-API connections usable from coroutines.

    `connect` may return a connection or an awaitable resolving to one, so
    both `sqlite3.connect` and `psycopg.AsyncConnection.connect` work.
    """

    def __init__(
        self,
        connect: Callable[..., Any],
        *connect_args: Any,
        dialect: Dialect | None = None,
        max_size: int = 10,
        transaction_guard: str = "rollback",
        strict_pool: bool = False,
        session_reset_hook: Callable[[Any], Any] | None = None,
        **connect_kwargs: Any,
    ):
        if max_size < 1:
            raise ValueError("max_size must be >= 1.")
        self._validate_transaction_guard(transaction_guard)

        self.dialect = dialect if dialect is not None else PostgresDialect()
        self._connect = connect
        self._connect_args = connect_args
        self._connect_kwargs = connect_kwargs
        self._max_size = max_size
        self._transaction_guard = transaction_guard
        self._strict_pool = strict_pool
        self._session_reset_hook = session_reset_hook

        self._idle: list[Any] = []
        self._borrowed_ids: set[int] = set()
        self._known_ids: set[int] = set()
        self._creating = 0
        self._closed = False
        self._condition = asyncio.Condition()

    def _validate_transaction_guard(self, transaction_guard: str) -> None:
        if transaction_guard not in {"rollback", "raise", "ignore", "discard"}:
            raise ValueError(
                "transaction_guard must be one of: "
                "'rollback', 'raise', 'ignore', 'discard'."
            )

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def size(self) -> int:
        """Number of live connections owned by the pool."""

        return len(self._known_ids)

    async def acquire(self, timeout: float | None = None) -> Any:
        """Borrow one connection from the pool."""

        async with self._condition:
            deadline = None if timeout is None else (time.monotonic() + timeout)

            while True:
                self._ensure_open()
                if self._idle:
                    conn = self._idle.pop()
                    self._borrowed_ids.add(id(conn))
                    return conn

                total_slots = len(self._known_ids) + self._creating
                if total_slots < self._max_size:
                    self._creating += 1
                    break

                if deadline is None:
                    await self._condition.wait()
                    continue

                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise TimeoutError("Timed out waiting for a pooled DB connection.")
                try:
                    await asyncio.wait_for(self._condition.wait(), remaining)
                except asyncio.TimeoutError:
                    raise TimeoutError(
                        "Timed out waiting for a pooled DB connection."
                    ) from None

        try:
            conn = await _maybe_await(
                self._connect(*self._connect_args, **self._connect_kwargs)
            )
        except BaseException:
            async with self._condition:
                self._creating -= 1
                self._condition.notify()
            raise

        should_close_because_closed = False
        async with self._condition:
            self._creating -= 1
            if self._closed:
                self._condition.notify()
                should_close_because_closed = True
            else:
                conn_id = id(conn)
                self._known_ids.add(conn_id)
                self._borrowed_ids.add(conn_id)
        if should_close_because_closed:
            await _maybe_close(conn)
            raise RuntimeError("AsyncPoolConnector is closed.")
        return conn

    async def release(self, conn: Any) -> None:
        """Return one borrowed connection to the pool."""

        conn_id = id(conn)
        async with self._condition:
            if conn_id not in self._borrowed_ids:
                raise ValueError("Connection was not acquired from this pool or already released.")
            self._borrowed_ids.remove(conn_id)

        cleanup_error: Exception | None = None
        should_close = False
        try:
            in_transaction = self._connection_in_transaction(conn)
            if in_transaction:
                await self._apply_transaction_guard(conn)
                if self._strict_pool or self._transaction_guard == "discard":
                    should_close = True
            if self._session_reset_hook is not None and not should_close:
                await _maybe_await(self._session_reset_hook(conn))
        except Exception as exc:
            cleanup_error = exc
            should_close = True

        async with self._condition:
            if self._closed or should_close:
                self._known_ids.discard(conn_id)
                should_close = True
            else:
                self._idle.append(conn)
            self._condition.notify()

        if should_close:
            logger.debug("Discarding pooled connection %#x.", conn_id)
            await _maybe_close(conn)
        if cleanup_error is not None:
            raise RuntimeError(
                "Failed to clean pooled DB connection before returning it."
            ) from cleanup_error

    @contextlib.asynccontextmanager
    async def connection(self, timeout: float | None = None) -> AsyncIterator[Any]:
        """Borrow and auto-release one connection."""

        conn = await self.acquire(timeout=timeout)
        try:
            yield conn
        finally:
            await self.release(conn)

    async def query(self, sql: str, params: QueryParams = None) -> Rows:
        """Run one statement on a borrowed connection and return its rows."""

        async with self.connection() as conn:
            return await fetch_rows(conn, sql, params)

    async def close(self) -> None:
        """Close all idle pooled connections and prevent future acquire.

        Borrowed connections are closed when they are released.
        """

        async with self._condition:
            if self._closed:
                return

            self._closed = True
            idle = list(self._idle)
            self._idle.clear()
            for conn in idle:
                self._known_ids.discard(id(conn))
            self._condition.notify_all()

        for conn in idle:
            await _maybe_close(conn)
        logger.debug("Connection pool closed; %d idle connection(s) released.", len(idle))

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("AsyncPoolConnector is closed.")

    def _connection_in_transaction(self, conn: Any) -> bool:
        in_tx = getattr(conn, "in_transaction", None)
        if isinstance(in_tx, bool):
            return in_tx

        info = getattr(conn, "info", None)
        tx_status = getattr(info, "transaction_status", None)
        if tx_status is not None:
            # psycopg3: 0 = idle.
            return tx_status != 0

        return False

    async def _apply_transaction_guard(self, conn: Any) -> None:
        if self._transaction_guard == "ignore":
            return
        if self._transaction_guard == "raise":
            raise RuntimeError(
                "Connection has an active transaction during release(). "
                "Commit/rollback before returning it to pool."
            )
        rollback = getattr(conn, "rollback", None)
        if not callable(rollback):
            raise RuntimeError("Connection has no rollback() for transaction cleanup.")
        await _maybe_await(rollback())
