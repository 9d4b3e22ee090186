"""Named-to-positional parameter binding.

Templates reference values as `:name`. Binding rewrites each occurrence into
the dialect's positional placeholder and collects the values in occurrence
order. A name used twice is bound twice, at two positions, for every
paramstyle.
"""

from __future__ import annotations

import re
from typing import Any, Callable, List, Mapping

from .contracts import DialectPort
from .errors import BindingError
from .requests import NamedQuery, PositionalQuery, ResolvedQuery

_TOKEN_RE = re.compile(
    "|".join(
        (
            r"(?<![\w$])[Ee]'(?:[^'\\]|\\.|'')*'",
            r"'(?:[^']|'')*'",
            r'"(?:[^"]|"")*"',
            r"\$(?P<tag>[A-Za-z_]\w*|)\$.*?\$(?P=tag)\$",
            r"--[^\n]*",
            r"/\*.*?\*/",
            r"::",
            r":(?P<name>[A-Za-z_]\w*)",
        )
    ),
    re.DOTALL,
)


def _percent_escaper(dialect: DialectPort) -> Callable[[str], str]:
    if getattr(dialect, "escapes_percent", dialect.paramstyle == "format"):
        return lambda text: text.replace("%", "%%")
    return lambda text: text


def bind_named(sql: str, parameters: Mapping[str, Any], dialect: DialectPort) -> PositionalQuery:
    """Rewrite `:name` placeholders into positional ones.

    Placeholders inside string literals (backslash-escaped `E'...'` strings
    included), quoted identifiers, dollar-quoted bodies and comments are left
    alone, as are `::` casts. With the `format` paramstyle literal `%` is
    doubled, unless nothing was bound, in which case the SQL is returned
    unchanged.

    Raises:
        BindingError: A referenced name is missing from `parameters`.
    """

    escape = _percent_escaper(dialect)
    pieces: List[str] = []
    values: List[Any] = []
    pos = 0
    for match in _TOKEN_RE.finditer(sql):
        pieces.append(escape(sql[pos : match.start()]))
        pos = match.end()
        name = match.group("name")
        if name is None:
            pieces.append(escape(match.group(0)))
            continue
        if name not in parameters:
            raise BindingError(name, sql)
        values.append(parameters[name])
        pieces.append(dialect.placeholder(len(values)))

    if not values:
        return PositionalQuery(sql, [])
    pieces.append(escape(sql[pos:]))
    return PositionalQuery("".join(pieces), values)


def bind(request: ResolvedQuery, parameters: Mapping[str, Any], dialect: DialectPort) -> PositionalQuery:
    """Bind a resolved request; positional requests pass through untouched."""

    if isinstance(request, PositionalQuery):
        return request
    if request.parameters is not None:
        parameters = request.parameters
    return bind_named(request.sql, parameters, dialect)


def check_bindable(request: ResolvedQuery, parameters: Mapping[str, Any]) -> None:
    """Raise `BindingError` if `request` references a name `parameters` lacks.

    Runs the same scan as `bind_named` without a dialect.
    """

    if isinstance(request, PositionalQuery):
        return
    if request.parameters is not None:
        parameters = request.parameters
    for match in _TOKEN_RE.finditer(request.sql):
        name = match.group("name")
        if name is not None and name not in parameters:
            raise BindingError(name, request.sql)
