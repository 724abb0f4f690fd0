"""Shared background acquisition."""

from .prompts import BACKGROUND_CATEGORIES, BACKGROUND_PROMPTS, build_background_prompt
from .provider import (
    BackgroundProvider,
    BackgroundResult,
    BrandColorHints,
    decode_background_image,
    verify_background_image,
)

__all__ = [
    "BACKGROUND_CATEGORIES",
    "BACKGROUND_PROMPTS",
    "build_background_prompt",
    "BackgroundProvider",
    "BackgroundResult",
    "BrandColorHints",
    "decode_background_image",
    "verify_background_image",
]
