"""
Schema inference and table accumulation
---------------------------------------
Each update category becomes one table. The first record seen for a category
fixes the column layout:

  file-name, old_<k1>, new_<k1>, old_<k2>, new_<k2>, ..., <info1>, <info2>, ...

Every record (including the first) is projected into a row in the same
positional order. Rows are never re-aligned by name, so a later record with a
different field composition yields a row that disagrees with the header. Such
rows are kept as projected and reported as drift notices; strict mode turns
the first notice into a SchemaDriftError.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from logtables.errors import SchemaDriftError, TableConsistencyError
from logtables.models import LogDocument, LogRecord

FILE_NAME_COLUMN = "file-name"

SCHEMA_DRIFT = "schema_drift"
PAIRING_MISMATCH = "pairing_mismatch"


@dataclass
class Table:
    category: str
    columns: List[str]
    rows: List[List[str]] = field(default_factory=list)

    def add_rows(self, rows: List[List[str]]) -> None:
        self.rows.extend(rows)

    @property
    def row_count(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class DriftNotice:
    kind: str
    category: str
    file_name: str
    record_index: int
    expected: int
    actual: int
    # (old count, info count) of the category's first record and of this one
    expected_shape: Tuple[int, int] = (0, 0)
    actual_shape: Tuple[int, int] = (0, 0)

    @property
    def message(self) -> str:
        where = f"{self.file_name} record {self.record_index} ({self.category})"
        if self.kind == PAIRING_MISMATCH:
            return f"{where}: old has {self.expected} entries but new has {self.actual}; unmatched entries dropped"
        if self.expected == self.actual:
            return (
                f"{where}: record has {self.actual_shape[0]} old and {self.actual_shape[1]} info entries "
                f"but header expects {self.expected_shape[0]} old and {self.expected_shape[1]} info"
            )
        return f"{where}: row has {self.actual} values but header has {self.expected} columns"


@dataclass
class TableSet:
    tables: Dict[str, Table]
    notices: List[DriftNotice] = field(default_factory=list)

    def __iter__(self) -> Iterator[Table]:
        return iter(self.tables.values())

    def __len__(self) -> int:
        return len(self.tables)

    def __getitem__(self, category: str) -> Table:
        return self.tables[category]

    def drift_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for notice in self.notices:
            counts[notice.category] = counts.get(notice.category, 0) + 1
        return counts


def make_header_row(record: LogRecord) -> List[str]:
    """Column names for a category, keyed off the old entries and info entries."""
    header = [FILE_NAME_COLUMN]
    for update in record.old:
        header.append(f"old_{update.key}")
        header.append(f"new_{update.key}")
    for update in record.info:
        header.append(update.key)
    return header


def project_row(file_name: str, record: LogRecord) -> List[str]:
    """Values for one record; old/new are paired by position, not by key."""
    row = [file_name]
    for old, new in zip(record.old, record.new):
        row.append(old.value)
        row.append(new.value)
    for update in record.info:
        row.append(update.value)
    return row


def _shape(record: LogRecord) -> Tuple[int, int]:
    # (header pairs, info count); the header uses len(old) even if new is shorter.
    return len(record.old), len(record.info)


def _check_record(
    category: str,
    file_name: str,
    index: int,
    record: LogRecord,
    header: List[str],
    first_shape: Tuple[int, int],
    row: List[str],
) -> List[DriftNotice]:
    notices: List[DriftNotice] = []
    if len(record.old) != len(record.new):
        notices.append(
            DriftNotice(PAIRING_MISMATCH, category, file_name, index, len(record.old), len(record.new))
        )
    shape = _shape(record)
    if len(row) != len(header) or shape != first_shape:
        notices.append(
            DriftNotice(SCHEMA_DRIFT, category, file_name, index, len(header), len(row), first_shape, shape)
        )
    return notices


def collect_headers_and_rows(
    document: LogDocument,
) -> Tuple[Dict[str, List[str]], Dict[str, List[List[str]]], List[DriftNotice]]:
    """Single pass over files then records, filling two category-keyed maps."""
    headers: Dict[str, List[str]] = {}
    shapes: Dict[str, Tuple[int, int]] = {}
    rows: Dict[str, List[List[str]]] = {}
    notices: List[DriftNotice] = []

    for source in document.files:
        for index, record in enumerate(source.logs):
            category = record.name
            if category not in headers:
                headers[category] = make_header_row(record)
                shapes[category] = _shape(record)
            row = project_row(source.name, record)
            notices.extend(
                _check_record(category, source.name, index, record, headers[category], shapes[category], row)
            )
            rows.setdefault(category, []).append(row)
    return headers, rows, notices


def assemble_tables(headers: Dict[str, List[str]], rows: Dict[str, List[List[str]]]) -> Dict[str, Table]:
    tables = {category: Table(category=category, columns=columns) for category, columns in headers.items()}
    for category, category_rows in rows.items():
        table = tables.get(category)
        if table is None:
            raise TableConsistencyError(f"Rows produced for category {category!r} with no header")
        table.add_rows(category_rows)
    return tables


def build_tables(document: LogDocument, strict: bool = False) -> TableSet:
    headers, rows, notices = collect_headers_and_rows(document)
    if strict and notices:
        raise SchemaDriftError(notices[0].message)
    return TableSet(tables=assemble_tables(headers, rows), notices=notices)
