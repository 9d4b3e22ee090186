"""Postgres example with the default registry (running server required).

Connection settings come from DB_HOST, DB_USER, DB_PASSWORD, DB_DATABASE and
DB_PORT.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any, Dict

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "sqlkit").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sqlkit import (
    PositionalQuery,
    QueryOptions,
    close_connection,
    create_connection,
    sql_query,
    to_sql_parameters,
)


def _relations_by_oid(params: Dict[str, Any]) -> PositionalQuery:
    oids = params["oids"]
    return PositionalQuery(
        f"SELECT oid::bigint AS oid, relname FROM pg_class WHERE oid::bigint IN ({to_sql_parameters(oids)})",
        list(oids),
    )


async def main() -> None:
    create_connection()

    server_year = sql_query(
        "SELECT date_part('year', now())::int AS year", QueryOptions(single=True)
    )
    relations = sql_query(_relations_by_oid)

    try:
        print("server year:", (await server_year())["year"])
        for row in await relations({"oids": [1247, 1249, 1259]}):
            print(row["oid"], row["relname"])
    except Exception as exc:
        print("Postgres example skipped:", exc)
    finally:
        await close_connection()


if __name__ == "__main__":
    asyncio.run(main())
