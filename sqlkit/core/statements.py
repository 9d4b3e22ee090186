"""Statement builders for INSERT, UPDATE, DELETE and free-form queries.

Each builder takes a table name (or SQL) and default options and returns an
async callable that runs the statement through `execute_query`. Generated
statements end in `RETURNING *` so callers get the affected rows back.

Column order follows the record: mapping insertion order or dataclass field
order. Update values are bound as `i_<column>` and filter values as
`f_<column>`, so a column may appear in both without collision. Empty
records or filters produce invalid SQL; the driver reports the error.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import replace
from typing import Any, Dict, Optional

from .contracts import QueryHandlePort
from .executor import execute_query
from .options import QueryOptions
from .records import record_values
from .registry import ConnectionRegistry
from .requests import QueryInput

INPUT_PREFIX = "i_"
FILTER_PREFIX = "f_"


def _where_clause(filter_values: Dict[str, Any]) -> str:
    return " AND ".join(f"{c} = :{FILTER_PREFIX}{c}" for c in filter_values)


def _prefixed(prefix: str, values: Dict[str, Any]) -> Dict[str, Any]:
    return {f"{prefix}{c}": v for c, v in values.items()}


def insert_sql(table: str, values: Dict[str, Any]) -> str:
    columns = ", ".join(values)
    placeholders = ", ".join(f":{c}" for c in values)
    return f"INSERT INTO {table} ({columns}) VALUES ({placeholders}) RETURNING *"


def update_sql(table: str, values: Dict[str, Any], filter_values: Dict[str, Any]) -> str:
    assignments = ", ".join(f"{c} = :{INPUT_PREFIX}{c}" for c in values)
    return f"UPDATE {table} SET {assignments} WHERE {_where_clause(filter_values)} RETURNING *"


def delete_sql(table: str, filter_values: Dict[str, Any]) -> str:
    return f"DELETE FROM {table} WHERE {_where_clause(filter_values)} RETURNING *"


def sql_insert(
    table: str,
    options: Optional[QueryOptions] = None,
    *,
    registry: Optional[ConnectionRegistry] = None,
) -> Callable[..., Awaitable[Any]]:
    """Build an INSERT callable: `await insert(record, connection=None)`.

    The result is always a single record; `single=True` is forced on a copy of
    `options`. `options.in_converter` receives the record as passed, before
    its columns are read.
    """

    options = options or QueryOptions()
    in_converter = options.in_converter
    options = replace(options, single=True, in_converter=None)

    async def insert(record: Any, connection: Optional[QueryHandlePort] = None) -> Any:
        if in_converter is not None:
            record = in_converter(record)
        values = record_values(record)
        return await execute_query(
            insert_sql(table, values), values, options, connection, registry=registry
        )

    return insert


def sql_update(
    table: str,
    options: Optional[QueryOptions] = None,
    *,
    registry: Optional[ConnectionRegistry] = None,
) -> Callable[..., Awaitable[Any]]:
    """Build an UPDATE callable: `await update(record, filter_by, connection=None)`.

    Returns the updated rows, or one row/`None` with `options.single`.
    `options.in_converter` receives the prefixed parameter map
    (`i_<column>` and `f_<column>` keys).
    """

    async def update(
        record: Any,
        filter_by: Any,
        connection: Optional[QueryHandlePort] = None,
    ) -> Any:
        values = record_values(record)
        filter_values = record_values(filter_by)
        parameters = {
            **_prefixed(INPUT_PREFIX, values),
            **_prefixed(FILTER_PREFIX, filter_values),
        }
        return await execute_query(
            update_sql(table, values, filter_values),
            parameters,
            options,
            connection,
            registry=registry,
        )

    return update


def sql_delete(
    table: str,
    options: Optional[QueryOptions] = None,
    *,
    registry: Optional[ConnectionRegistry] = None,
) -> Callable[..., Awaitable[Any]]:
    """Build a DELETE callable: `await delete(filter_by, connection=None)`.

    `options.in_converter` receives the prefixed `f_<column>` parameter map.
    """

    async def delete(filter_by: Any, connection: Optional[QueryHandlePort] = None) -> Any:
        filter_values = record_values(filter_by)
        return await execute_query(
            delete_sql(table, filter_values),
            _prefixed(FILTER_PREFIX, filter_values),
            options,
            connection,
            registry=registry,
        )

    return delete


def sql_query(
    query: QueryInput,
    options: Optional[QueryOptions] = None,
    *,
    registry: Optional[ConnectionRegistry] = None,
) -> Callable[..., Awaitable[Any]]:
    """Build a query callable: `await run(parameters=None, connection=None)`."""

    async def run(parameters: Any = None, connection: Optional[QueryHandlePort] = None) -> Any:
        return await execute_query(query, parameters, options, connection, registry=registry)

    return run
