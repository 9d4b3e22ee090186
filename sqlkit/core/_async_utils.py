"""Internal helpers for driving sync and async DB-API objects alike."""

from __future__ import annotations

import inspect
from typing import Any


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def _maybe_close(resource: Any) -> None:
    """Call `resource.close()` when present, awaiting coroutine closers."""

    close = getattr(resource, "close", None)
    if callable(close):
        await _maybe_await(close())
