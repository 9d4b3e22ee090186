"""Per-call behavior options for the query executor."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class QueryOptions:
    """Result shaping and conversion hooks.

    Attributes:
        single: Collapse the result to the first record, or `None`.
        in_converter: Applied to the parameters before binding.
        out_converter: Applied to each fetched record; records converted to
            `None` are dropped from the result.
    """

    single: bool = False
    in_converter: Optional[Callable[[Any], Any]] = None
    out_converter: Optional[Callable[[Any], Any]] = None
