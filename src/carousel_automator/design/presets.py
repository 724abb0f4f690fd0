"""Fixed design tables: style defaults, typography and color presets."""

from __future__ import annotations

from dataclasses import dataclass

from ..constants import VisualStyle


@dataclass(frozen=True)
class StyleDefaults:
    """Colors and aesthetic description for a visual style."""

    background_color: str
    primary_color: str
    accent_color: str
    aesthetic: str


@dataclass(frozen=True)
class TextStylePreset:
    """Typography preset selected by the ``text_style`` option."""

    id: str
    name: str
    headline_font_size: int
    body_font_size: int
    headline_font_weight: int
    body_font_weight: int
    aesthetic: str


@dataclass(frozen=True)
class TextColorPreset:
    """Text and accent color pairing."""

    id: str
    name: str
    primary_color: str
    accent_color: str
    for_dark_bg: bool


@dataclass(frozen=True)
class DesignPreset:
    """Named legacy design system (colors and aesthetic)."""

    id: str
    background_color: str
    primary_color: str
    accent_color: str
    aesthetic: str


STYLE_DEFAULTS: dict[VisualStyle, StyleDefaults] = {
    VisualStyle.TYPOGRAPHY: StyleDefaults(
        background_color="#1a1a1a",
        primary_color="#ffffff",
        accent_color="#ff6b6b",
        aesthetic="bold, editorial, text-focused with striking typography",
    ),
    VisualStyle.PHOTOREALISTIC: StyleDefaults(
        background_color="rgba(0, 0, 0, 0.6)",
        primary_color="#ffffff",
        accent_color="#ff6b6b",
        aesthetic="cinematic, professional, photo-centric with text overlays",
    ),
    VisualStyle.ILLUSTRATION: StyleDefaults(
        background_color="#faf8f5",
        primary_color="#1a2744",
        accent_color="#ff6b6b",
        aesthetic="artistic, hand-crafted, warm illustration style",
    ),
    VisualStyle.RENDER_3D: StyleDefaults(
        background_color="#0f0f1a",
        primary_color="#ffffff",
        accent_color="#9f7aea",
        aesthetic="futuristic, dimensional, premium 3D renders",
    ),
    VisualStyle.ABSTRACT_ART: StyleDefaults(
        background_color="#1a1a1a",
        primary_color="#ffffff",
        accent_color="#ff6b6b",
        aesthetic="creative, expressive, artistic abstract compositions",
    ),
    VisualStyle.COLLAGE: StyleDefaults(
        background_color="#f5f5f5",
        primary_color="#1a1a1a",
        accent_color="#ff6b6b",
        aesthetic="layered, eclectic, mixed-media collage style",
    ),
}


DEFAULT_TEXT_STYLE = "bold-editorial"

TEXT_STYLE_PRESETS: dict[str, TextStylePreset] = {
    "bold-editorial": TextStylePreset(
        id="bold-editorial",
        name="Bold Editorial",
        headline_font_size=72,
        body_font_size=36,
        headline_font_weight=700,
        body_font_weight=400,
        aesthetic="bold, editorial, premium",
    ),
    "clean-modern": TextStylePreset(
        id="clean-modern",
        name="Clean Modern",
        headline_font_size=64,
        body_font_size=32,
        headline_font_weight=600,
        body_font_weight=400,
        aesthetic="clean, modern, professional",
    ),
    "dramatic": TextStylePreset(
        id="dramatic",
        name="Dramatic",
        headline_font_size=84,
        body_font_size=34,
        headline_font_weight=800,
        body_font_weight=400,
        aesthetic="dramatic, impactful, attention-grabbing",
    ),
    "minimal": TextStylePreset(
        id="minimal",
        name="Minimal",
        headline_font_size=56,
        body_font_size=28,
        headline_font_weight=500,
        body_font_weight=400,
        aesthetic="minimal, elegant, understated",
    ),
    "statement": TextStylePreset(
        id="statement",
        name="Statement",
        headline_font_size=96,
        body_font_size=38,
        headline_font_weight=700,
        body_font_weight=500,
        aesthetic="statement, bold, commanding",
    ),
}


TEXT_COLOR_PRESETS: dict[str, TextColorPreset] = {
    "white-coral": TextColorPreset("white-coral", "White & Coral", "#ffffff", "#ff6b6b", True),
    "white-teal": TextColorPreset("white-teal", "White & Teal", "#ffffff", "#20b2aa", True),
    "white-gold": TextColorPreset("white-gold", "White & Gold", "#f5f5dc", "#d4af37", True),
    "white-blue": TextColorPreset("white-blue", "White & Blue", "#ffffff", "#3b82f6", True),
    "dark-coral": TextColorPreset("dark-coral", "Dark & Coral", "#1a1a1a", "#ff6b6b", False),
    "dark-blue": TextColorPreset("dark-blue", "Dark & Blue", "#1a1a1a", "#2563eb", False),
}


def _from_color_preset(
    preset_id: str,
    colors: TextColorPreset,
    aesthetic: str,
    background_color: str = "#1a1a1a",
) -> DesignPreset:
    return DesignPreset(
        id=preset_id,
        background_color=background_color,
        primary_color=colors.primary_color,
        accent_color=colors.accent_color,
        aesthetic=aesthetic,
    )


DESIGN_PRESETS: dict[str, DesignPreset] = {
    "dark-coral": _from_color_preset(
        "dark-coral",
        TEXT_COLOR_PRESETS["white-coral"],
        TEXT_STYLE_PRESETS["bold-editorial"].aesthetic,
    ),
    "navy-gold": DesignPreset(
        id="navy-gold",
        background_color="#1a1f3c",
        primary_color="#f5f5dc",
        accent_color="#d4af37",
        aesthetic="sophisticated, luxury, professional",
    ),
    "light-minimal": DesignPreset(
        id="light-minimal",
        background_color="#fafafa",
        primary_color="#1a1a1a",
        accent_color="#2563eb",
        aesthetic="clean, modern, minimal",
    ),
    "teal-cream": DesignPreset(
        id="teal-cream",
        background_color="#0d4d4d",
        primary_color="#ffffff",
        accent_color="#f5f5dc",
        aesthetic="sophisticated, tech-forward, premium",
    ),
}


def get_text_style_preset(text_style: str | None) -> TextStylePreset:
    """Look up a typography preset, falling back to bold-editorial."""
    return TEXT_STYLE_PRESETS.get(text_style or DEFAULT_TEXT_STYLE) or TEXT_STYLE_PRESETS[DEFAULT_TEXT_STYLE]
