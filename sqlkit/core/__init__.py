"""Public core API: registry, binding, execution, and statement builders."""

from .binder import bind, bind_named, check_bindable
from .config import ConnectionConfig
from .contracts import DebugLogger, DialectPort, QueryHandlePort
from .errors import BindingError, ConnectionNotFoundError, SqlKitError
from .executor import execute_query
from .options import QueryOptions
from .records import record_values
from .registry import (
    DEFAULT_CONNECTION_NAME,
    ConnectionRegistry,
    close_connection,
    create_connection,
    default_registry,
    register_logger,
)
from .requests import DynamicTemplate, NamedQuery, PositionalQuery, StaticTemplate, as_request
from .statements import sql_delete, sql_insert, sql_query, sql_update

__all__ = [
    "BindingError",
    "ConnectionConfig",
    "ConnectionNotFoundError",
    "ConnectionRegistry",
    "DEFAULT_CONNECTION_NAME",
    "DebugLogger",
    "DialectPort",
    "DynamicTemplate",
    "NamedQuery",
    "PositionalQuery",
    "QueryHandlePort",
    "QueryOptions",
    "SqlKitError",
    "StaticTemplate",
    "as_request",
    "bind",
    "bind_named",
    "check_bindable",
    "close_connection",
    "create_connection",
    "default_registry",
    "execute_query",
    "record_values",
    "register_logger",
    "sql_delete",
    "sql_insert",
    "sql_query",
    "sql_update",
]
