from __future__ import annotations

import sqlite3
import unittest

from sqlkit import to_sql_parameters
from sqlkit.ports.db_api.async_database import AsyncDatabase, _row_to_mapping, fetch_rows
from sqlkit.ports.db_api.dialects import Dialect, PostgresDialect, SQLiteDialect
from tests.db_test_helpers import FakeConn, NumericDialect


class _DummyCursor:
    def __init__(self, description=None):
        self.description = description


class _InvalidDialect(Dialect):
    paramstyle = "pyformat"


class DialectTests(unittest.TestCase):
    def test_builtin_dialect_properties(self) -> None:
        self.assertEqual(SQLiteDialect().placeholder(1), "?")
        self.assertEqual(PostgresDialect().placeholder(3), "%s")
        self.assertEqual(NumericDialect().placeholder(3), "$3")
        self.assertTrue(PostgresDialect().escapes_percent)
        self.assertFalse(SQLiteDialect().escapes_percent)

    def test_invalid_paramstyle_raises(self) -> None:
        with self.assertRaises(ValueError):
            _InvalidDialect().placeholder(1)


class ToSqlParametersTests(unittest.TestCase):
    def test_joined_placeholders_for_list(self) -> None:
        self.assertEqual(to_sql_parameters([112, 113, 174]), "%s, %s, %s")

    def test_scalar_is_wrapped(self) -> None:
        self.assertEqual(to_sql_parameters(5, as_list=True), ["%s"])

    def test_numeric_dialect_and_start(self) -> None:
        self.assertEqual(
            to_sql_parameters(["a", "b"], as_list=True, dialect=NumericDialect(), start=2),
            ["$2", "$3"],
        )


class RowMappingTests(unittest.TestCase):
    def test_tuple_row_uses_description(self) -> None:
        mapped = _row_to_mapping(_DummyCursor(description=[("id",), ("name",)]), (1, "a"))
        self.assertEqual(mapped, {"id": 1, "name": "a"})

    def test_tuple_without_description_raises(self) -> None:
        with self.assertRaises(TypeError):
            _row_to_mapping(_DummyCursor(description=None), (1,))

    def test_fallback_dict_and_unsupported_type(self) -> None:
        self.assertEqual(_row_to_mapping(_DummyCursor(), {("id", 1)}), {"id": 1})
        with self.assertRaises(TypeError):
            _row_to_mapping(_DummyCursor(), 12345)


class FetchRowsTests(unittest.IsolatedAsyncioTestCase):
    async def test_sqlite_rows_are_mapped(self) -> None:
        conn = sqlite3.connect(":memory:")
        try:
            await fetch_rows(conn, 'CREATE TABLE "t" ("id" INTEGER, "name" TEXT);')
            await fetch_rows(conn, 'INSERT INTO "t" VALUES (?, ?), (?, ?);', [1, "a", 2, "b"])
            rows = await fetch_rows(conn, 'SELECT * FROM "t" WHERE "id" > ? ORDER BY "id";', [0])
        finally:
            conn.close()
        self.assertEqual(rows, [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}])

    async def test_statement_without_result_set_returns_empty_list(self) -> None:
        conn = FakeConn()
        self.assertEqual(await fetch_rows(conn, "DROP TABLE x"), [])
        self.assertEqual(conn.executed, [("DROP TABLE x", None)])
        self.assertTrue(conn.cursors[0].closed)

    async def test_cursor_is_closed_when_execute_fails(self) -> None:
        conn = sqlite3.connect(":memory:")
        try:
            with self.assertRaises(sqlite3.OperationalError):
                await fetch_rows(conn, "SELECT * FROM missing_table")
        finally:
            conn.close()


class AsyncDatabaseTests(unittest.IsolatedAsyncioTestCase):
    async def test_query_and_close(self) -> None:
        conn = FakeConn()
        conn.result = (["answer"], [(42,)])
        db = AsyncDatabase(conn, PostgresDialect())

        rows = await db.query("SELECT %s AS answer", [42])
        self.assertEqual(rows, [{"answer": 42}])
        self.assertEqual(conn.executed, [("SELECT %s AS answer", [42])])

        await db.close()
        await db.close()
        self.assertTrue(conn.closed)
        with self.assertRaises(RuntimeError):
            await db.query("SELECT 1")

    async def test_context_manager_closes_connection(self) -> None:
        conn = FakeConn()
        async with AsyncDatabase(conn, SQLiteDialect()) as db:
            self.assertIs(db.conn, conn)
        self.assertTrue(conn.closed)


if __name__ == "__main__":
    unittest.main()
