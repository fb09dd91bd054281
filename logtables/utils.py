from __future__ import annotations

import sys


LOG_PREFIX = "[LOGTABLES]"


def parse_bool(value: str | bool | None, default: bool = False) -> bool:
    """Parse common CLI truthy/falsey strings."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in {"1", "true", "t", "yes", "y"}:
        return True
    if normalized in {"0", "false", "f", "no", "n"}:
        return False
    return default


def log(msg: str) -> None:
    """Lightweight logger for terminal visibility during runs."""
    print(f"{LOG_PREFIX} {msg}")


def warn(msg: str) -> None:
    print(f"[WARN] {msg}")


def error(msg: str) -> None:
    sys.stderr.write(f"[ERROR] {msg}\n")
