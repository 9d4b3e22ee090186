"""sqlkit: parametrized SQL helpers over named asyncio connection pools."""

from .core import (
    DEFAULT_CONNECTION_NAME,
    BindingError,
    ConnectionConfig,
    ConnectionNotFoundError,
    ConnectionRegistry,
    DynamicTemplate,
    NamedQuery,
    PositionalQuery,
    QueryOptions,
    SqlKitError,
    StaticTemplate,
    bind_named,
    close_connection,
    create_connection,
    default_registry,
    execute_query,
    register_logger,
    sql_delete,
    sql_insert,
    sql_query,
    sql_update,
)
from .ports import AsyncDatabase, AsyncPoolConnector, Dialect, PostgresDialect, SQLiteDialect
from .utils import to_sql_parameters

__all__ = [
    "AsyncDatabase",
    "AsyncPoolConnector",
    "BindingError",
    "ConnectionConfig",
    "ConnectionNotFoundError",
    "ConnectionRegistry",
    "DEFAULT_CONNECTION_NAME",
    "Dialect",
    "DynamicTemplate",
    "NamedQuery",
    "PositionalQuery",
    "PostgresDialect",
    "QueryOptions",
    "SQLiteDialect",
    "SqlKitError",
    "StaticTemplate",
    "bind_named",
    "close_connection",
    "create_connection",
    "default_registry",
    "execute_query",
    "register_logger",
    "sql_delete",
    "sql_insert",
    "sql_query",
    "sql_update",
    "to_sql_parameters",
]
