"""Command line interface - modular, feature-based, stateless architecture.

- core/: Shared utilities (types, validators, console)
- carousel/: Carousel generation and job inspection

Usage:
    python -m carousel_automator.cli --help
    python -m carousel_automator.cli generate slides.json --content-id post-42
"""

from .app import app, main

__all__ = ["app", "main"]
