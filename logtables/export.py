from __future__ import annotations

import csv
from pathlib import Path
from typing import List

import pandas as pd

from logtables.errors import OutputDirectoryError, OutputWriteError
from logtables.tables import Table, TableSet

SUMMARY_COLUMNS = ["category", "file_name", "column_count", "row_count", "drift_count"]


def table_path(outdir: Path, category: str) -> Path:
    """<category>.csv directly inside outdir; categories naming other locations are rejected."""
    outdir = Path(outdir)
    out_path = outdir / f"{category}.csv"
    if (
        Path(category).name != category
        or category in {".", ".."}
        or out_path.resolve().parent != outdir.resolve()
    ):
        raise OutputWriteError(f"Category {category!r} does not name a file inside {outdir}")
    return out_path


def ensure_outdir(outdir: Path) -> Path:
    outdir = Path(outdir)
    try:
        outdir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputDirectoryError(f"Unable to create output directory {outdir}: {exc}") from exc
    return outdir


def write_table(table: Table, out_path: Path) -> Path:
    # csv.writer keeps drifted rows exactly as projected, whatever their width.
    try:
        with open(out_path, "w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle)
            writer.writerow(table.columns)
            writer.writerows(table.rows)
    except OSError as exc:
        raise OutputWriteError(f"Unable to write {out_path}: {exc}") from exc
    return out_path


def export_tables(table_set: TableSet, outdir: Path) -> List[Path]:
    """Write one <category>.csv per table; stops at the first failing file."""
    outdir = ensure_outdir(outdir)
    written: List[Path] = []
    for table in table_set:
        written.append(write_table(table, table_path(outdir, table.category)))
    return written


def summarize_tables(table_set: TableSet) -> pd.DataFrame:
    drift = table_set.drift_counts()
    records = [
        {
            "category": table.category,
            "file_name": f"{table.category}.csv",
            "column_count": len(table.columns),
            "row_count": table.row_count,
            "drift_count": drift.get(table.category, 0),
        }
        for table in table_set
    ]
    return pd.DataFrame(records, columns=SUMMARY_COLUMNS)


def write_summary(table_set: TableSet, out_path: Path) -> Path:
    out_path = Path(out_path)
    ensure_outdir(out_path.parent)
    try:
        summarize_tables(table_set).to_csv(out_path, index=False)
    except OSError as exc:
        raise OutputWriteError(f"Unable to write summary {out_path}: {exc}") from exc
    return out_path
