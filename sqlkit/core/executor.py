"""Query execution pipeline: convert, resolve, bind, run, shape."""

from __future__ import annotations

from typing import Any, Optional

from .binder import bind, check_bindable
from .contracts import QueryHandlePort
from .options import QueryOptions
from .registry import ConnectionRegistry, default_registry
from .requests import QueryInput, as_request


async def execute_query(
    query: QueryInput,
    parameters: Any = None,
    options: Optional[QueryOptions] = None,
    connection: Optional[QueryHandlePort] = None,
    *,
    registry: Optional[ConnectionRegistry] = None,
) -> Any:
    """Execute one statement and shape its result.

    Args:
        query: SQL template with `:name` placeholders, a generator callable,
            or a `StaticTemplate` / `DynamicTemplate`.
        parameters: Parameter map for the template. Defaults to `{}`.
        options: Result shaping and conversion hooks.
        connection: Explicit handle. Defaults to the registry's default pool.
        registry: Registry used for the default pool and the debug logger.
            Defaults to the process-wide registry.

    Returns:
        A list of records, or with `options.single` one record or `None`.

    Driver errors propagate unchanged.
    """

    options = options or QueryOptions()
    if parameters is None:
        parameters = {}
    registry = registry or default_registry

    query_parameters = options.in_converter(parameters) if options.in_converter else parameters
    request = as_request(query).resolve(query_parameters)

    handle = connection if connection is not None else registry.get_connection()
    if handle is None:
        # The default pool is created only for a request that binds.
        check_bindable(request, query_parameters)
        handle = registry.create_connection()
    statement = bind(request, query_parameters, handle.dialect)

    logger = registry.logger
    if logger is not None:
        logger.debug({"query": statement.sql, "parameters": statement.values})

    rows = await handle.query(statement.sql, statement.values or None)

    records = rows[:1] if options.single else rows
    if options.out_converter is not None:
        converted = (options.out_converter(record) for record in records)
        records = [record for record in converted if record is not None]

    if options.single:
        return records[0] if records else None
    return records
