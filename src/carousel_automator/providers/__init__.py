"""Image generation providers."""

from .config import (
    DEFAULT_IMAGE_MODEL,
    IMAGE_MODELS,
    ImageProviderConfig,
    ProviderConfig,
    default_provider_config,
    load_provider_config,
    resolve_image_model,
)
from .image import ImageProvider, get_image_provider

__all__ = [
    "IMAGE_MODELS",
    "DEFAULT_IMAGE_MODEL",
    "ImageProviderConfig",
    "ProviderConfig",
    "default_provider_config",
    "load_provider_config",
    "resolve_image_model",
    "ImageProvider",
    "get_image_provider",
]
