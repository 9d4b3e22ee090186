"""Helpers for hand-built positional queries."""

from __future__ import annotations

from typing import Any, List, Optional, Union

from .core.contracts import DialectPort
from .ports.db_api.dialects import PostgresDialect


def to_sql_parameters(
    args: Any,
    as_list: bool = False,
    *,
    dialect: Optional[DialectPort] = None,
    start: int = 1,
) -> Union[str, List[str]]:
    """Return one positional placeholder per value in `args`.

    A non-list value counts as a single value. Meant for `IN (...)` clauses in
    `PositionalQuery` generators::

        PositionalQuery(f"... WHERE oid IN ({to_sql_parameters(oids)})", list(oids))

    Args:
        args: Value or list/tuple of values.
        as_list: Return the placeholders as a list instead of a joined string.
        dialect: Placeholder syntax. Defaults to `PostgresDialect`.
        start: Position of the first placeholder (matters for `$n` styles).
    """

    values = list(args) if isinstance(args, (list, tuple)) else [args]
    dialect = dialect or PostgresDialect()
    placeholders = [dialect.placeholder(start + i) for i in range(len(values))]
    return placeholders if as_list else ", ".join(placeholders)
