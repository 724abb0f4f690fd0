"""Carousel-specific validators."""

from __future__ import annotations

from ...background.prompts import BACKGROUND_PROMPTS
from ...constants import VisualStyle
from ...design.presets import DESIGN_PRESETS, TEXT_STYLE_PRESETS
from ...providers.config import IMAGE_MODELS
from ..core.types import Failure, Result, Success
from ..core.validators import validate_choice, validate_file
from .params import CarouselGenerationParams

VALID_VISUAL_STYLES: list[str] = [style.value for style in VisualStyle]


def validate_carousel_generation_params(
    params: CarouselGenerationParams,
) -> Result[CarouselGenerationParams]:
    """Validate all carousel generation parameters.

    Returns Result with params if valid, or Failure with error.
    """
    if not params.content_id.strip():
        return Failure("Content id must not be empty")

    # Input files
    files = (
        (params.slides_file, "Slides file"),
        (params.background_image, "Background image"),
        (params.brand_config, "Brand config"),
        (params.logo, "Logo"),
    )
    for path, label in files:
        result = validate_file(path, label)
        if isinstance(result, Failure):
            return result

    # Named choices
    choices = (
        (params.visual_style, VALID_VISUAL_STYLES, "visual style"),
        (params.text_style, TEXT_STYLE_PRESETS, "text style"),
        (params.background_style, BACKGROUND_PROMPTS, "background style"),
        (params.design_preset, DESIGN_PRESETS, "design preset"),
        (params.model, IMAGE_MODELS, "image model"),
    )
    for value, allowed, label in choices:
        result = validate_choice(value, allowed, label)
        if isinstance(result, Failure):
            return result

    # A background image makes the background style irrelevant
    if params.background_image and params.background_style:
        return Failure(
            "Use either --background-image or --background-style, not both",
            {"hint": "A supplied background is never regenerated"},
        )

    if params.total_slides is not None and params.total_slides < 1:
        return Failure(
            f"Invalid total slides: {params.total_slides}",
            {"hint": "Total slides must be at least 1"},
        )

    return Success(params)
