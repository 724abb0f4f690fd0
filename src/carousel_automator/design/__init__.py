"""Design resolution, slide layouts and compositing."""

from .colors import parse_color
from .compositor import SlideCompositor, cover_fit
from .context import (
    BrandVisualConfig,
    DesignContext,
    DesignContextInput,
    normalize_visual_style,
    resolve_design_context,
)
from .fonts import DEFAULT_FONT_URL, FontResource, clear_font_cache, load_font_resource
from .layout import LayoutTree, build_layout, select_template
from .presets import (
    DESIGN_PRESETS,
    STYLE_DEFAULTS,
    TEXT_COLOR_PRESETS,
    TEXT_STYLE_PRESETS,
)
from .renderer import LayoutRenderer

__all__ = [
    "BrandVisualConfig",
    "DesignContext",
    "DesignContextInput",
    "normalize_visual_style",
    "resolve_design_context",
    "STYLE_DEFAULTS",
    "TEXT_STYLE_PRESETS",
    "TEXT_COLOR_PRESETS",
    "DESIGN_PRESETS",
    "parse_color",
    "LayoutTree",
    "build_layout",
    "select_template",
    "LayoutRenderer",
    "FontResource",
    "DEFAULT_FONT_URL",
    "load_font_resource",
    "clear_font_cache",
    "SlideCompositor",
    "cover_fit",
]
