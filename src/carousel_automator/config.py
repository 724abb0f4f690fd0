"""Runtime settings loaded from the environment and ``.env``."""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

from .design.fonts import DEFAULT_FONT_URL
from .providers.config import DEFAULT_IMAGE_MODEL

# Load .env file
load_dotenv()


class CarouselSettings(BaseSettings):
    """Carousel Automator settings.

    Every field can be set through a ``CAROUSEL_``-prefixed environment
    variable, e.g. ``CAROUSEL_STORAGE_DIR=/var/carousels``.
    """

    model_config = SettingsConfigDict(
        env_prefix="CAROUSEL_",
        env_file=".env",
        extra="ignore",
    )

    storage_dir: Path = Path("data")
    font_url: str = DEFAULT_FONT_URL
    font_path: Path | None = None
    font_timeout_seconds: float = 30.0
    providers_config: Path | None = None
    image_model: str = DEFAULT_IMAGE_MODEL
    log_dir: Path = Path("logs")


_settings: CarouselSettings | None = None


def get_settings() -> CarouselSettings:
    """Get the process-wide settings instance."""
    global _settings
    if _settings is None:
        _settings = CarouselSettings()
    return _settings
