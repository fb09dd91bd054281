from __future__ import annotations

from pathlib import Path
from typing import List

from pydantic import ValidationError

from logtables.errors import InputReadError, MalformedInput
from logtables.models import LogDocument

MAX_REPORTED_ERRORS = 5


def read_log_file(path: Path) -> str:
    """Read the raw log document text."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputReadError(f"Unable to read input file {path}: {exc}") from exc


def _describe_errors(exc: ValidationError) -> str:
    parts: List[str] = []
    for err in exc.errors()[:MAX_REPORTED_ERRORS]:
        loc = "/".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    remaining = exc.error_count() - len(parts)
    if remaining > 0:
        parts.append(f"... and {remaining} more")
    return "; ".join(parts)


def parse_log_document(text: str | bytes) -> LogDocument:
    """Decode the nested file/record/update structure in one eager pass."""
    try:
        return LogDocument.model_validate_json(text)
    except ValidationError as exc:
        raise MalformedInput(f"Log document does not match expected shape: {_describe_errors(exc)}") from exc


def load_log_document(path: Path) -> LogDocument:
    return parse_log_document(read_log_file(path))
