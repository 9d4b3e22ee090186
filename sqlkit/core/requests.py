"""Query request variants accepted by the executor.

A request is either a `StaticTemplate` (SQL with `:name` placeholders) or a
`DynamicTemplate` whose generator builds the statement from the converted
parameters. A generator returns one of:

- `NamedQuery`: SQL with `:name` placeholders, bound like a static template;
- `PositionalQuery`: SQL already in the driver's placeholder syntax plus its
  values, sent to the driver untouched;
- a plain `str`, shorthand for `NamedQuery(sql)`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from .types import NamedParams


@dataclass(frozen=True)
class NamedQuery:
    """SQL using `:name` placeholders.

    `parameters=None` means "bind against the call's converted parameters".
    """

    sql: str
    parameters: Optional[NamedParams] = None


@dataclass(frozen=True)
class PositionalQuery:
    """SQL in driver-native positional syntax with values in placeholder order."""

    sql: str
    values: List[Any] = field(default_factory=list)


ResolvedQuery = Union[NamedQuery, PositionalQuery]
QueryGenerator = Callable[[Any], Union[ResolvedQuery, str]]


@dataclass(frozen=True)
class StaticTemplate:
    sql: str

    def resolve(self, parameters: Any) -> ResolvedQuery:
        return NamedQuery(self.sql)


@dataclass(frozen=True)
class DynamicTemplate:
    generator: QueryGenerator

    def resolve(self, parameters: Any) -> ResolvedQuery:
        result = self.generator(parameters)
        if isinstance(result, str):
            return NamedQuery(result)
        if isinstance(result, (NamedQuery, PositionalQuery)):
            return result
        raise TypeError(
            "Query generator must return NamedQuery, PositionalQuery or str, "
            f"got {type(result)!r}."
        )


QueryRequest = Union[StaticTemplate, DynamicTemplate]
QueryInput = Union[QueryRequest, str, QueryGenerator]


def as_request(query: QueryInput) -> QueryRequest:
    """Coerce a SQL string or generator callable into a request variant."""

    if isinstance(query, (StaticTemplate, DynamicTemplate)):
        return query
    if isinstance(query, str):
        return StaticTemplate(query)
    if callable(query):
        return DynamicTemplate(query)
    raise TypeError(f"Unsupported query type: {type(query)!r}")
