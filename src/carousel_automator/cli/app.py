"""Typer app configuration and logging setup."""

from __future__ import annotations

import logging
import warnings
from pathlib import Path

import typer
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Suppress httpx/asyncio cleanup warnings
warnings.filterwarnings("ignore", message=".*Event loop is closed.*")

# Create Typer app
app = typer.Typer(
    name="carousel",
    help="Carousel slide image generator",
    add_completion=False,
)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
LOG_FILE_NAME = "carousel.log"


def register_commands() -> None:
    """Register all commands from feature modules."""
    from .carousel.commands import cleanup, generate, job, jobs, styles

    app.command(name="generate")(generate)
    app.command(name="job")(job)
    app.command(name="jobs")(jobs)
    app.command(name="cleanup")(cleanup)
    app.command(name="styles")(styles)


def setup_logging(log_dir: Path | None = None) -> Path:
    """Configure logging for CLI.

    - Suppresses console output from libraries
    - Sets up file logging for job events and AI calls

    Args:
        log_dir: Directory for the log file (default: settings.log_dir)

    Returns:
        Path of the log file.
    """
    if log_dir is None:
        from ..config import get_settings

        log_dir = get_settings().log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILE_NAME

    # Remove any default console handlers from root logger
    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(logging.CRITICAL)

    # Suppress loggers that might print to console
    for logger_name in ["httpx", "httpcore", "asyncio"]:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.WARNING)
        logger.propagate = False

    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    for logger_name in ["carousel_jobs", "ai_calls"]:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        logger.handlers = []  # Clear any existing handlers
        logger.addHandler(file_handler)

    return log_path


# Register all commands
register_commands()


def main() -> None:
    """CLI entry point."""
    setup_logging()
    app()
