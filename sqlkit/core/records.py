"""Record and filter shapes used by the statement builders."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from typing import Any, Dict

_COLUMN_RE = re.compile(r"^[A-Za-z_]\w*$")


def record_values(record: Any) -> Dict[str, Any]:
    """Return `column -> value` for a mapping or dataclass instance.

    Mappings keep their insertion order, dataclasses their field declaration
    order. Dataclass fields marked `metadata={"auto": True}` are skipped while
    their value is `None`, so auto-generated keys are left to the database.
    """

    if isinstance(record, Mapping):
        values = dict(record)
    elif is_dataclass(record) and not isinstance(record, type):
        values = {}
        for f in fields(record):
            value = getattr(record, f.name)
            if value is None and f.metadata.get("auto"):
                continue
            values[f.name] = value
    else:
        raise TypeError(f"Record must be a mapping or dataclass instance, got {type(record)!r}.")

    for column in values:
        if not isinstance(column, str) or not _COLUMN_RE.match(column):
            raise ValueError(f"Invalid column name: {column!r}")
    return values
