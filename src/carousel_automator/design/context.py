"""Design context resolution.

A design context is the single set of colors, typography and aesthetic
values applied to every slide and to the background prompt of one
carousel job. It is computed once per job by ``resolve_design_context``
and never mutated afterwards.

Resolution runs as an ordered list of steps, each one a pure function
taking the input and the draft values and returning the updated draft:

    1. style defaults      (colors + aesthetic of the normalized visual style)
    2. design preset       (named legacy preset replaces colors + aesthetic)
    3. typography          (text-style preset, brand never overrides sizing)
    4. brand accent        (brand primary color becomes the accent)
    5. brand prompt        (master brand prompt appended to the aesthetic)
"""

from __future__ import annotations

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..constants import DEFAULT_FONT_FAMILY, PADDING_X, PADDING_Y, VisualStyle
from .presets import DESIGN_PRESETS, STYLE_DEFAULTS, get_text_style_preset

BRAND_DIRECTION_SEPARATOR = ". Brand direction: "


class BrandVisualConfig(BaseModel):
    """Brand visual settings as stored with a brand record."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    primary_color: str | None = None
    accent_color: str | None = None
    secondary_color: str | None = None
    image_style: str | None = None
    fonts: dict[str, str] = Field(default_factory=dict)
    master_brand_prompt: str | None = None


class DesignContextInput(BaseModel):
    """Inputs to design resolution."""

    model_config = ConfigDict(frozen=True)

    visual_style: str | None = None
    text_style: str | None = None
    design_preset: str | None = None
    brand_visual_config: BrandVisualConfig | None = None


class DesignContext(BaseModel):
    """Resolved, immutable visual settings for one carousel."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    visual_style: VisualStyle
    primary_color: str
    accent_color: str
    background_color: str
    font_family: str = DEFAULT_FONT_FAMILY
    headline_font_size: int
    body_font_size: int
    headline_font_weight: int
    body_font_weight: int
    padding_x: int = PADDING_X
    padding_y: int = PADDING_Y
    aesthetic: str
    master_brand_prompt: str | None = None


def normalize_visual_style(style: str | None) -> VisualStyle:
    """Map free-form style input to a known visual style.

    Exact values match directly. Otherwise substrings are checked in
    order ("photo"/"realistic", "3d"/"render", "abstract"/"art",
    "illust") and anything else becomes typography.

    Args:
        style: Raw style string, may be None.

    Returns:
        Normalized visual style.
    """
    if not style:
        return VisualStyle.TYPOGRAPHY

    normalized = style.lower().strip()
    for candidate in VisualStyle:
        if candidate.value == normalized:
            return candidate

    if "photo" in normalized or "realistic" in normalized:
        return VisualStyle.PHOTOREALISTIC
    if "3d" in normalized or "render" in normalized:
        return VisualStyle.RENDER_3D
    if "abstract" in normalized or "art" in normalized:
        return VisualStyle.ABSTRACT_ART
    if "illust" in normalized:
        return VisualStyle.ILLUSTRATION
    return VisualStyle.TYPOGRAPHY


ResolutionStep = Callable[[DesignContextInput, dict[str, Any]], dict[str, Any]]


def _apply_style_defaults(inp: DesignContextInput, draft: dict[str, Any]) -> dict[str, Any]:
    visual_style = normalize_visual_style(inp.visual_style)
    defaults = STYLE_DEFAULTS[visual_style]
    return {
        **draft,
        "visual_style": visual_style,
        "primary_color": defaults.primary_color,
        "accent_color": defaults.accent_color,
        "background_color": defaults.background_color,
        "aesthetic": defaults.aesthetic,
    }


def _apply_design_preset(inp: DesignContextInput, draft: dict[str, Any]) -> dict[str, Any]:
    preset = DESIGN_PRESETS.get(inp.design_preset or "")
    if preset is None:
        return draft
    return {
        **draft,
        "primary_color": preset.primary_color,
        "accent_color": preset.accent_color,
        "background_color": preset.background_color,
        "aesthetic": preset.aesthetic,
    }


def _apply_typography(inp: DesignContextInput, draft: dict[str, Any]) -> dict[str, Any]:
    preset = get_text_style_preset(inp.text_style)
    return {
        **draft,
        "font_family": DEFAULT_FONT_FAMILY,
        "headline_font_size": preset.headline_font_size,
        "body_font_size": preset.body_font_size,
        "headline_font_weight": preset.headline_font_weight,
        "body_font_weight": preset.body_font_weight,
    }


def _apply_brand_accent(inp: DesignContextInput, draft: dict[str, Any]) -> dict[str, Any]:
    # Brand color only ever lands on the accent; primary and background keep legibility
    brand = inp.brand_visual_config
    if brand is None or not brand.primary_color:
        return draft
    return {**draft, "accent_color": brand.primary_color}


def _apply_brand_prompt(inp: DesignContextInput, draft: dict[str, Any]) -> dict[str, Any]:
    brand = inp.brand_visual_config
    if brand is None or not brand.master_brand_prompt:
        return draft
    return {
        **draft,
        "aesthetic": f"{draft['aesthetic']}{BRAND_DIRECTION_SEPARATOR}{brand.master_brand_prompt}",
        "master_brand_prompt": brand.master_brand_prompt,
    }


RESOLUTION_STEPS: tuple[ResolutionStep, ...] = (
    _apply_style_defaults,
    _apply_design_preset,
    _apply_typography,
    _apply_brand_accent,
    _apply_brand_prompt,
)


def resolve_design_context(
    inp: DesignContextInput | None = None,
    steps: tuple[ResolutionStep, ...] = RESOLUTION_STEPS,
) -> DesignContext:
    """Resolve the design context for a carousel.

    Pure and deterministic: identical input yields an equal context.

    Args:
        inp: Style selection and brand configuration.
        steps: Resolution steps, applied in order.

    Returns:
        Frozen design context.

    Usage:
        context = resolve_design_context(DesignContextInput(
            visual_style="3d",
            text_style="dramatic",
            brand_visual_config=BrandVisualConfig(primary_color="#ff0000"),
        ))
    """
    inp = inp or DesignContextInput()
    draft: dict[str, Any] = {
        "padding_x": PADDING_X,
        "padding_y": PADDING_Y,
    }
    for step in steps:
        draft = step(inp, draft)
    return DesignContext(**draft)
