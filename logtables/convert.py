#!/usr/bin/env python3
"""
Log Document -> Per-Category CSV Tables
---------------------------------------
Purpose
  Convert a JSON log of per-source-file update records into one CSV table per
  update category. Columns come from the first record seen for each category.

Input
  [{"file-name": "...", "log": [{"update-name": "...",
     "old": [{"key": "...", "value": "..."}], "new": [...], "info": [...]}]}]

How to run
  python -m logtables.convert data_raw/updates.json artifacts/tables
  Optional: --strict_drift true to fail on schema drift,
            --summary artifacts/tables/_summary.csv for a per-table summary.

Exit codes
  0 success, 1 unreadable or malformed input (or strict drift), 2 output error.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from logtables.errors import (
    InputReadError,
    MalformedInput,
    OutputDirectoryError,
    OutputWriteError,
    SchemaDriftError,
)
from logtables.export import export_tables, write_summary
from logtables.parser import load_log_document
from logtables.tables import TableSet, build_tables
from logtables.utils import error, log, parse_bool, warn

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_OUTPUT_ERROR = 2


@dataclass(frozen=True)
class ConvertConfig:
    input_file: Path
    output_dir: Path
    strict_drift: bool
    summary_path: Optional[Path]
    quiet: bool


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert a JSON update log into per-category CSV tables.")
    parser.add_argument("input_file", help="Path to the JSON log document.")
    parser.add_argument("output_dir", help="Directory for <category>.csv outputs (created if absent).")
    parser.add_argument("--strict_drift", default="false", help="Fail when a record disagrees with its header.")
    parser.add_argument("--summary", default=None, help="Optional path for a per-table summary CSV.")
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output.")
    return parser.parse_args(argv)


def run(config: ConvertConfig) -> tuple[TableSet, List[Path]]:
    say = (lambda msg: None) if config.quiet else log
    say(f"Input: {config.input_file}")
    say(f"Output dir: {config.output_dir}")
    document = load_log_document(config.input_file)
    record_total = sum(len(source.logs) for source in document.files)
    say(f"Parsed {len(document.files)} source files, {record_total} records")

    table_set = build_tables(document, strict=config.strict_drift)
    for notice in table_set.notices:
        warn(notice.message)

    written = export_tables(table_set, config.output_dir)
    for table in table_set:
        say(f"{table.category}: {len(table.columns)} columns, {table.row_count} rows")
    if config.summary_path is not None:
        say(f"Summary: {write_summary(table_set, config.summary_path)}")
    return table_set, written


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    config = ConvertConfig(
        input_file=Path(args.input_file),
        output_dir=Path(args.output_dir),
        strict_drift=parse_bool(args.strict_drift),
        summary_path=Path(args.summary) if args.summary else None,
        quiet=args.quiet,
    )
    try:
        table_set, written = run(config)
    except (InputReadError, MalformedInput, SchemaDriftError) as exc:
        error(str(exc))
        return EXIT_INPUT_ERROR
    except (OutputDirectoryError, OutputWriteError) as exc:
        error(str(exc))
        return EXIT_OUTPUT_ERROR

    if not config.quiet:
        log(f"Wrote {len(written)} tables to {config.output_dir}")
        if table_set.notices:
            log(f"Drift notices: {len(table_set.notices)}")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
