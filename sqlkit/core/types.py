"""Shared core type aliases used across contracts, executor, and ports."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Union

NamedParams = Mapping[str, Any]
PositionalParams = List[Any]
QueryParams = Union[PositionalParams, None]

RowMapping = Dict[str, Any]
Rows = List[RowMapping]
