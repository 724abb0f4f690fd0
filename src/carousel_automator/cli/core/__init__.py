"""Core utilities for CLI - pure functions and shared types."""

from .console import console
from .types import Failure, Result, Success
from .validators import validate_choice, validate_file

__all__ = [
    # Types
    "Result",
    "Success",
    "Failure",
    # Validators
    "validate_file",
    "validate_choice",
    # Console
    "console",
]
