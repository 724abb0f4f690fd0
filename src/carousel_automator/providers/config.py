"""Image provider configuration loading and validation."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file
load_dotenv()


# Friendly model keys accepted by requests, mapped to generator model ids
IMAGE_MODELS: dict[str, str] = {
    "gemini-2.0-flash": "gemini-2.0-flash-exp",
    "gemini-3-pro": "gemini-3-pro-image-preview",
}

DEFAULT_IMAGE_MODEL = "gemini-3-pro"


def resolve_image_model(model_key: str | None) -> str:
    """Map a model key to its model id, falling back to the default."""
    if model_key and model_key in IMAGE_MODELS:
        return IMAGE_MODELS[model_key]
    return IMAGE_MODELS[DEFAULT_IMAGE_MODEL]


class ProviderSettings(BaseModel):
    """Global provider settings."""

    timeout_seconds: int = 90
    max_retries: int = 3  # attempts per HTTP request, including the first
    fallback_on_error: bool = True


class ImageProviderConfig(BaseModel):
    """Configuration for an image provider."""

    priority: int
    enabled: bool = True
    type: Literal["gemini", "openai", "fal"]
    model: str
    api_key_env: str | None = None
    base_url: str | None = None
    timeout: int = 90
    cost_per_image: float = 0.0
    settings: dict[str, Any] = Field(default_factory=dict)

    def get_api_key(self) -> str | None:
        """Get API key from environment."""
        if self.api_key_env:
            return os.getenv(self.api_key_env) or None
        return None


class ProviderConfig(BaseModel):
    """Full image provider configuration."""

    provider_settings: ProviderSettings = Field(default_factory=ProviderSettings)
    image_providers: dict[str, ImageProviderConfig] = Field(default_factory=dict)

    def get_enabled_image_providers(self) -> list[tuple[str, ImageProviderConfig]]:
        """Get enabled image providers sorted by priority."""
        enabled = [
            (name, config)
            for name, config in self.image_providers.items()
            if config.enabled
        ]
        return sorted(enabled, key=lambda x: x[1].priority)

    def has_credentials(self) -> bool:
        """Whether any enabled provider has an API key available."""
        return any(config.get_api_key() for _, config in self.get_enabled_image_providers())


def default_provider_config() -> ProviderConfig:
    """Configuration used when no providers file exists: Gemini only."""
    return ProviderConfig(
        image_providers={
            "gemini": ImageProviderConfig(
                priority=1,
                type="gemini",
                model=IMAGE_MODELS[DEFAULT_IMAGE_MODEL],
                api_key_env="GOOGLE_API_KEY",
            ),
        },
    )


def load_provider_config(config_path: Path | None = None) -> ProviderConfig:
    """Load provider configuration from YAML file."""
    if config_path is None:
        # Default to config/providers.yaml relative to project root
        config_path = Path(__file__).parent.parent.parent.parent / "config" / "providers.yaml"

    if not config_path.exists():
        return default_provider_config()

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return ProviderConfig(**data)
