import unittest

from logtables import tables
from logtables.errors import SchemaDriftError, TableConsistencyError
from logtables.models import LogDocument, LogRecord


def _updates(*pairs):
    return [{"key": k, "value": v} for k, v in pairs]


def _record(name, old=(), new=(), info=()):
    return {"update-name": name, "old": _updates(*old), "new": _updates(*new), "info": _updates(*info)}


def _document(*files):
    return LogDocument.model_validate([{"file-name": name, "log": list(records)} for name, records in files])


class TestHeaderAndRow(unittest.TestCase):
    def test_header_uses_old_keys_and_info_keys(self) -> None:
        record = LogRecord.model_validate(
            _record(
                "chmod",
                old=[("mode", "644"), ("owner", "root")],
                new=[("mode", "755"), ("user", "deploy")],
                info=[("reason", "x")],
            )
        )
        self.assertEqual(
            tables.make_header_row(record),
            ["file-name", "old_mode", "new_mode", "old_owner", "new_owner", "reason"],
        )

    def test_row_pairs_old_and_new_positionally(self) -> None:
        record = LogRecord.model_validate(
            _record("r", old=[("k1", "v1"), ("k2", "v2")], new=[("k1", "w1"), ("k2", "w2")], info=[("k3", "x")])
        )
        self.assertEqual(tables.project_row("f.txt", record), ["f.txt", "v1", "w1", "v2", "w2", "x"])

    def test_row_truncates_to_shorter_pairing(self) -> None:
        record = LogRecord.model_validate(_record("r", old=[("a", "1"), ("b", "2")], new=[("a", "3")]))
        self.assertEqual(tables.project_row("f.txt", record), ["f.txt", "1", "3"])


class TestBuildTables(unittest.TestCase):
    def test_single_rename_record(self) -> None:
        doc = _document(("f1.txt", [_record("rename", old=[("path", "/a")], new=[("path", "/b")])]))
        table_set = tables.build_tables(doc)
        self.assertEqual(len(table_set), 1)
        rename = table_set["rename"]
        self.assertEqual(rename.columns, ["file-name", "old_path", "new_path"])
        self.assertEqual(rename.rows, [["f1.txt", "/a", "/b"]])
        self.assertEqual(table_set.notices, [])

    def test_rows_accumulate_across_files_in_order(self) -> None:
        doc = _document(
            ("f1.txt", [_record("rename", old=[("path", "/a")], new=[("path", "/b")])]),
            ("f2.txt", [_record("rename", old=[("path", "/c")], new=[("path", "/d")])]),
        )
        rename = tables.build_tables(doc)["rename"]
        self.assertEqual(rename.rows, [["f1.txt", "/a", "/b"], ["f2.txt", "/c", "/d"]])

    def test_empty_log_creates_no_table(self) -> None:
        doc = _document(("empty.txt", []), ("f1.txt", [_record("touch", info=[("at", "noon")])]))
        table_set = tables.build_tables(doc)
        self.assertEqual(list(table_set.tables), ["touch"])
        self.assertEqual(table_set["touch"].rows, [["f1.txt", "noon"]])

    def test_first_record_fixes_header(self) -> None:
        doc = _document(
            ("f1.txt", [_record("edit", old=[("a", "1")], new=[("a", "2")])]),
            ("f2.txt", [_record("edit", old=[("a", "3"), ("b", "4")], new=[("a", "5"), ("b", "6")])]),
        )
        table_set = tables.build_tables(doc)
        edit = table_set["edit"]
        self.assertEqual(edit.columns, ["file-name", "old_a", "new_a"])
        self.assertEqual(edit.rows[1], ["f2.txt", "3", "5", "4", "6"])
        self.assertEqual(len(table_set.notices), 1)
        notice = table_set.notices[0]
        self.assertEqual(notice.kind, tables.SCHEMA_DRIFT)
        self.assertEqual((notice.file_name, notice.record_index), ("f2.txt", 0))
        self.assertEqual((notice.expected, notice.actual), (3, 5))
        self.assertEqual(table_set.drift_counts(), {"edit": 1})

    def test_same_width_different_shape_is_drift(self) -> None:
        doc = _document(
            (
                "f1.txt",
                [
                    _record("edit", old=[("a", "1")], new=[("a", "2")]),
                    _record("edit", info=[("x", "1"), ("y", "2")]),
                ],
            ),
        )
        table_set = tables.build_tables(doc)
        self.assertEqual([n.kind for n in table_set.notices], [tables.SCHEMA_DRIFT])
        message = table_set.notices[0].message
        self.assertIn("record has 0 old and 2 info entries", message)
        self.assertIn("header expects 1 old and 0 info", message)
        self.assertNotIn("row has 3 values", message)

    def test_table_set_iterates_tables(self) -> None:
        doc = _document(("f1.txt", [_record("a"), _record("b")]))
        self.assertEqual([t.category for t in iter(tables.build_tables(doc))], ["a", "b"])

    def test_pairing_mismatch_is_reported(self) -> None:
        doc = _document(("f1.txt", [_record("edit", old=[("a", "1"), ("b", "2")], new=[("a", "3")])]))
        table_set = tables.build_tables(doc)
        kinds = [n.kind for n in table_set.notices]
        self.assertIn(tables.PAIRING_MISMATCH, kinds)
        self.assertEqual(table_set["edit"].rows, [["f1.txt", "1", "3"]])

    def test_strict_mode_raises_on_drift(self) -> None:
        doc = _document(
            ("f1.txt", [_record("edit", old=[("a", "1")], new=[("a", "2")]), _record("edit")]),
        )
        with self.assertRaises(SchemaDriftError):
            tables.build_tables(doc, strict=True)

    def test_strict_mode_passes_consistent_input(self) -> None:
        doc = _document(
            ("f1.txt", [_record("edit", old=[("a", "1")], new=[("a", "2")])]),
            ("f2.txt", [_record("edit", old=[("a", "3")], new=[("a", "4")])]),
        )
        self.assertEqual(tables.build_tables(doc, strict=True)["edit"].row_count, 2)

    def test_categories_keep_first_encounter_order(self) -> None:
        doc = _document(
            ("f1.txt", [_record("b"), _record("a")]),
            ("f2.txt", [_record("c"), _record("a")]),
        )
        table_set = tables.build_tables(doc)
        self.assertEqual([t.category for t in table_set], ["b", "a", "c"])
        self.assertEqual(table_set["a"].row_count, 2)

    def test_rows_without_header_are_a_consistency_error(self) -> None:
        with self.assertRaises(TableConsistencyError):
            tables.assemble_tables({}, {"ghost": [["f1.txt"]]})


if __name__ == "__main__":
    unittest.main()
