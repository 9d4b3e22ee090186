"""CRUD with statement builders on an in-memory SQLite pool."""

from __future__ import annotations

import asyncio
import logging
import sqlite3
import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "sqlkit").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sqlkit import (
    AsyncPoolConnector,
    ConnectionRegistry,
    QueryOptions,
    SQLiteDialect,
    execute_query,
    sql_delete,
    sql_insert,
    sql_query,
    sql_update,
)


def _sqlite_pool(_config) -> AsyncPoolConnector:  # noqa: ANN001
    return AsyncPoolConnector(
        sqlite3.connect,
        ":memory:",
        dialect=SQLiteDialect(),
        max_size=1,
        isolation_level=None,
    )


async def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    registry = ConnectionRegistry(
        pool_factory=_sqlite_pool,
        logger=logging.getLogger("example.sql"),
    )

    await execute_query(
        "CREATE TABLE todo (id INTEGER PRIMARY KEY, title TEXT NOT NULL, done BOOLEAN DEFAULT 0)",
        registry=registry,
    )

    as_bool = QueryOptions(out_converter=lambda r: {**r, "done": bool(r["done"])})
    add_todo = sql_insert("todo", as_bool, registry=registry)
    mark_done = sql_update("todo", QueryOptions(single=True), registry=registry)
    remove_todo = sql_delete("todo", registry=registry)
    open_todos = sql_query("SELECT * FROM todo WHERE done = :done ORDER BY id", registry=registry)

    first = await add_todo({"title": "write docs"})
    await add_todo({"title": "ship release"})
    print("inserted:", first)

    print("done:", await mark_done({"done": True}, {"id": first["id"]}))
    print("open:", await open_todos({"done": False}))
    print("deleted:", await remove_todo({"id": first["id"]}))

    await registry.close_all()


if __name__ == "__main__":
    asyncio.run(main())
