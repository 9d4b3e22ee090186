from __future__ import annotations

import unittest
from dataclasses import dataclass, field, replace
from typing import Optional

from sqlkit import (
    ConnectionRegistry,
    QueryOptions,
    sql_delete,
    sql_insert,
    sql_query,
    sql_update,
)
from sqlkit.core.records import record_values
from sqlkit.ports.db_api.dialects import SQLiteDialect
from tests.db_test_helpers import RecordingHandle


@dataclass
class Item:
    id: Optional[int] = field(default=None, metadata={"auto": True})
    field1: str = ""
    field2: bool = True


class RecordValuesTests(unittest.TestCase):
    def test_mapping_keeps_insertion_order(self) -> None:
        self.assertEqual(list(record_values({"b": 1, "a": 2})), ["b", "a"])

    def test_dataclass_uses_declaration_order_and_skips_unset_auto_field(self) -> None:
        self.assertEqual(record_values(Item(field1="x")), {"field1": "x", "field2": True})
        self.assertEqual(
            list(record_values(Item(id=4, field1="x"))), ["id", "field1", "field2"]
        )

    def test_invalid_column_name_raises(self) -> None:
        with self.assertRaises(ValueError):
            record_values({"bad-name": 1})

    def test_unsupported_record_type_raises(self) -> None:
        with self.assertRaises(TypeError):
            record_values(["field1"])
        with self.assertRaises(TypeError):
            record_values(Item)


class StatementBuilderTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.handle = RecordingHandle(
            [{"id": 1, "field1": "x", "field2": True}, {"id": 2, "field1": "y", "field2": False}],
            dialect=SQLiteDialect(),
        )
        self.registry = ConnectionRegistry(pool_factory=lambda _config: self.handle)

    async def test_insert_builds_statement_and_forces_single(self) -> None:
        options = QueryOptions(single=False)
        insert = sql_insert("t", options, registry=self.registry)

        result = await insert({"field1": "x"})

        self.assertEqual(result, {"id": 1, "field1": "x", "field2": True})
        self.assertEqual(
            self.handle.calls, [("INSERT INTO t (field1) VALUES (?) RETURNING *", ["x"])]
        )
        self.assertFalse(options.single)

    async def test_insert_accepts_dataclass_records(self) -> None:
        insert = sql_insert("t", registry=self.registry)
        await insert(Item(field1="x", field2=False))
        self.assertEqual(
            self.handle.calls,
            [("INSERT INTO t (field1, field2) VALUES (?, ?) RETURNING *", ["x", False])],
        )

    async def test_insert_in_converter_receives_the_record_as_passed(self) -> None:
        seen = []

        def _upper(item):  # noqa: ANN001,ANN202
            seen.append(item)
            return replace(item, field1=item.field1.upper())

        insert = sql_insert("t", QueryOptions(in_converter=_upper), registry=self.registry)
        record = Item(field1="x")

        await insert(record)

        self.assertEqual(seen, [record])
        self.assertEqual(
            self.handle.calls,
            [("INSERT INTO t (field1, field2) VALUES (?, ?) RETURNING *", ["X", True])],
        )

    async def test_update_in_converter_receives_prefixed_parameters(self) -> None:
        seen = []
        update = sql_update(
            "t",
            QueryOptions(in_converter=lambda p: seen.append(dict(p)) or p),
            registry=self.registry,
        )
        await update({"field1": "y"}, {"id": 1})
        self.assertEqual(seen, [{"i_field1": "y", "f_id": 1}])

    async def test_update_namespaces_record_and_filter_values(self) -> None:
        update = sql_update("t", QueryOptions(single=True), registry=self.registry)

        result = await update({"id": 9, "field1": "y"}, {"id": 1})

        self.assertEqual(result["id"], 1)
        self.assertEqual(
            self.handle.calls,
            [("UPDATE t SET id = ?, field1 = ? WHERE id = ? RETURNING *", [9, "y", 1])],
        )

    async def test_update_without_single_returns_collection(self) -> None:
        update = sql_update("t", registry=self.registry)
        result = await update({"field2": False}, {"field1": "x", "field2": True})
        self.assertEqual(len(result), 2)
        self.assertEqual(
            self.handle.calls[0][0],
            "UPDATE t SET field2 = ? WHERE field1 = ? AND field2 = ? RETURNING *",
        )
        self.assertEqual(self.handle.calls[0][1], [False, "x", True])

    async def test_delete_joins_filters_with_and(self) -> None:
        delete = sql_delete("t", registry=self.registry)
        result = await delete({"id": 1, "field1": "x"})
        self.assertEqual(len(result), 2)
        self.assertEqual(
            self.handle.calls,
            [("DELETE FROM t WHERE id = ? AND field1 = ? RETURNING *", [1, "x"])],
        )

    async def test_builders_apply_out_converter(self) -> None:
        delete = sql_delete(
            "t",
            QueryOptions(out_converter=lambda r: r["id"] if r["field2"] else None),
            registry=self.registry,
        )
        self.assertEqual(await delete({"id": 1}), [1])

    async def test_query_builder_is_pass_through(self) -> None:
        lookup = sql_query(
            "SELECT * FROM t WHERE field1 = :name",
            QueryOptions(single=True),
            registry=self.registry,
        )
        result = await lookup({"name": "x"})
        self.assertEqual(result["id"], 1)
        self.assertEqual(self.handle.calls, [("SELECT * FROM t WHERE field1 = ?", ["x"])])

    async def test_explicit_connection_is_forwarded(self) -> None:
        other = RecordingHandle([{"id": 5}], dialect=SQLiteDialect())
        insert = sql_insert("t", registry=self.registry)
        self.assertEqual(await insert({"field1": "z"}, other), {"id": 5})
        self.assertEqual(self.handle.calls, [])
        self.assertEqual(len(other.calls), 1)


if __name__ == "__main__":
    unittest.main()
