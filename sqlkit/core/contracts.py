"""Core port contracts used by adapters, the registry, and the executor."""

from __future__ import annotations

from typing import Any, Protocol

from .types import QueryParams, Rows


class DialectPort(Protocol):
    """Dialect behavior required by placeholder binding."""

    name: str
    paramstyle: str

    def placeholder(self, position: int) -> str: ...


class QueryHandlePort(Protocol):
    """Connection handle accepted by the executor and stored by the registry.

    Pools and single shared connections both satisfy it. `close()` may be a
    plain method or a coroutine function.
    """

    dialect: DialectPort

    async def query(self, sql: str, params: QueryParams = None) -> Rows: ...

    def close(self) -> Any: ...


class DebugLogger(Protocol):
    """Optional debug sink. `logging.Logger` satisfies it."""

    def debug(self, msg: Any, *args: Any, **kwargs: Any) -> Any: ...
