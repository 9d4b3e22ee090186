"""Named connection pool registry.

A `ConnectionRegistry` owns at most one live handle per name. Handles are
created lazily on first use and shared by every caller until closed.

The module also keeps one process-wide `default_registry` and the
`create_connection` / `close_connection` / `register_logger` functions bound
to it. Code that wants explicit ownership builds its own registry and passes
it as `registry=` to the executor and statement builders.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any, Dict, List, Optional

from ._async_utils import _maybe_close
from .config import ConnectionConfig
from .contracts import DebugLogger, QueryHandlePort
from .errors import ConnectionNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_CONNECTION_NAME = "default"

PoolFactory = Callable[[ConnectionConfig], QueryHandlePort]
ConfigInput = ConnectionConfig | Mapping[str, Any]


def _default_pool_factory(config: ConnectionConfig) -> QueryHandlePort:
    from ..ports.db_api.postgres import create_postgres_pool

    return create_postgres_pool(config)


class ConnectionRegistry:
    """Registry of named connection pool handles."""

    def __init__(
        self,
        pool_factory: Optional[PoolFactory] = None,
        logger: Optional[DebugLogger] = None,
    ):
        """Create registry.

        Args:
            pool_factory: Builds a handle from a resolved config. Defaults to a
                psycopg-backed `AsyncPoolConnector`.
            logger: Optional debug sink receiving pool creation and query logs.
        """

        self._pool_factory = pool_factory or _default_pool_factory
        self._logger = logger
        self._pools: Dict[str, QueryHandlePort] = {}
        self._lock = threading.Lock()

    @property
    def logger(self) -> Optional[DebugLogger]:
        return self._logger

    def register_logger(self, logger: Optional[DebugLogger]) -> None:
        """Install (or clear, with `None`) the debug sink."""

        self._logger = logger

    def create_connection(
        self,
        config: Optional[ConfigInput] = None,
        name: Optional[str] = None,
    ) -> QueryHandlePort:
        """Return the handle registered under `name`, creating it if absent.

        When a handle already exists, `config` is ignored and the existing
        handle is returned unchanged. Without `config`, a new pool is
        configured from the environment (see `ConnectionConfig.from_env`).
        """

        name = name or DEFAULT_CONNECTION_NAME
        with self._lock:
            handle = self._pools.get(name)
            if handle is not None:
                if config is not None:
                    logger.debug(
                        "Connection pool %r already exists; supplied config ignored.", name
                    )
                return handle

            resolved = (
                ConnectionConfig.coerce(config)
                if config is not None
                else ConnectionConfig.from_env()
            )
            debug_logger = self._logger
            if debug_logger is not None:
                debug_logger.debug(
                    f"Creating a new connection pool {name!r} with {resolved.redacted()}"
                )
            handle = self._pool_factory(resolved)
            self._pools[name] = handle
            return handle

    def get_connection(self, name: Optional[str] = None) -> Optional[QueryHandlePort]:
        """Return the registered handle or `None` without creating one."""

        with self._lock:
            return self._pools.get(name or DEFAULT_CONNECTION_NAME)

    def names(self) -> List[str]:
        with self._lock:
            return list(self._pools)

    async def close_connection(self, name: Optional[str] = None) -> bool:
        """Close and evict the handle registered under `name`.

        The handle is evicted before it is closed, so a failing close never
        leaves a half-closed handle registered.

        Raises:
            ConnectionNotFoundError: No handle is registered under `name`.
        """

        name = name or DEFAULT_CONNECTION_NAME
        with self._lock:
            handle = self._pools.pop(name, None)
        if handle is None:
            raise ConnectionNotFoundError(name)
        await _maybe_close(handle)
        logger.debug("Connection pool %r closed.", name)
        return True

    async def close_all(self) -> None:
        """Close every registered handle."""

        with self._lock:
            handles = list(self._pools.items())
            self._pools.clear()
        for name, handle in handles:
            await _maybe_close(handle)
            logger.debug("Connection pool %r closed.", name)


default_registry = ConnectionRegistry()


def create_connection(
    config: Optional[ConfigInput] = None,
    name: Optional[str] = None,
) -> QueryHandlePort:
    """`ConnectionRegistry.create_connection` on the default registry."""

    return default_registry.create_connection(config, name)


async def close_connection(name: Optional[str] = None) -> bool:
    """`ConnectionRegistry.close_connection` on the default registry."""

    return await default_registry.close_connection(name)


def register_logger(logger: Optional[DebugLogger]) -> None:
    """Install the debug sink on the default registry."""

    default_registry.register_logger(logger)
