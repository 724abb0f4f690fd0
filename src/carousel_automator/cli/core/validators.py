"""Pure validation functions for CLI arguments."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .types import Failure, Result, Success


def validate_file(path: Path | None, label: str) -> Result[Path | None]:
    """Validate that an optional input file exists.

    Pure function - only reads filesystem, no side effects.

    Args:
        path: File path, or None when the option was not given
        label: Human-readable name used in the error message

    Returns:
        Result containing the path or failure
    """
    if path is None:
        return Success(None)
    if not path.exists():
        return Failure(f"{label} not found: {path}", {"path": str(path)})
    if not path.is_file():
        return Failure(f"{label} is not a file: {path}", {"path": str(path)})
    return Success(path)


def validate_choice(value: str | None, choices: Iterable[str], label: str) -> Result[str | None]:
    """Validate an optional value against a set of allowed names.

    Args:
        value: Value to validate, None is always accepted
        choices: Allowed values
        label: Human-readable name used in the error message

    Returns:
        Result containing the value or failure
    """
    allowed = sorted(choices)
    if value is not None and value not in allowed:
        return Failure(f"Invalid {label}: {value}", {"valid": ", ".join(allowed)})
    return Success(value)
