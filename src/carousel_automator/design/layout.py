"""Declarative slide layouts.

A layout tree describes what a slide shows and how it is arranged,
without touching pixels. The four templates share one design context
and differ only in arrangement:

- hook:     centered large headline, optional accent line, accent underline
- content:  top-aligned headline, optional accent line, body
- numbered: large zero-padded slide number, headline, body
- cta:      centered headline, call-to-action pill, optional secondary text
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from ..constants import TEXT_BACKING_COLOR, TemplateKind
from ..content.models import SlideContent
from .context import DesignContext


@dataclass(frozen=True)
class TextNode:
    """A block of wrapped text."""

    text: str
    font_size: int
    font_weight: int
    color: str
    line_height: float = 1.2
    opacity: float = 1.0
    margin_top: int = 0


@dataclass(frozen=True)
class RuleNode:
    """A solid horizontal bar."""

    width: int
    height: int
    color: str
    margin_top: int = 0


@dataclass(frozen=True)
class PillNode:
    """Rounded button-like label."""

    text: str
    font_size: int
    font_weight: int
    text_color: str
    fill: str
    padding_x: int = 36
    padding_y: int = 14
    radius: int = 8
    margin_top: int = 0


LayoutNode = Union[TextNode, RuleNode, PillNode]


@dataclass(frozen=True)
class LayoutTree:
    """Complete layout of one slide."""

    template: TemplateKind
    width: int
    height: int
    padding_x: int
    padding_y: int
    children: tuple[LayoutNode, ...]
    vertical_align: Literal["center", "top"] = "center"
    text_align: Literal["center", "left"] = "center"
    max_width_ratio: float = 0.9
    backing: str | None = None


def select_template(index: int, total: int, use_numbering: bool) -> TemplateKind:
    """Pick the template for a slide position.

    The first slide is always the hook, so a single-slide carousel is a
    hook rather than a CTA.

    Args:
        index: Zero-based slide position.
        total: Number of slides in the carousel.
        use_numbering: Whether middle slides use the numbered template.

    Returns:
        Template kind for the slide.
    """
    if index == 0:
        return TemplateKind.HOOK
    if index == total - 1:
        return TemplateKind.CTA
    if use_numbering:
        return TemplateKind.NUMBERED
    return TemplateKind.CONTENT


def _scaled(size: int, factor: float) -> int:
    return int(round(size * factor))


def _hook_nodes(content: SlideContent, design: DesignContext) -> list[LayoutNode]:
    nodes: list[LayoutNode] = []
    if content.headline:
        nodes.append(TextNode(
            text=content.headline,
            font_size=design.headline_font_size,
            font_weight=design.headline_font_weight,
            color=design.primary_color,
        ))
    if content.accent_text:
        nodes.append(TextNode(
            text=content.accent_text,
            font_size=_scaled(design.body_font_size, 1.2),
            font_weight=design.body_font_weight,
            color=design.accent_color,
            margin_top=24,
        ))
    nodes.append(RuleNode(width=80, height=4, color=design.accent_color, margin_top=30))
    return nodes


def _content_nodes(content: SlideContent, design: DesignContext) -> list[LayoutNode]:
    nodes: list[LayoutNode] = []
    if content.headline:
        nodes.append(TextNode(
            text=content.headline,
            font_size=_scaled(design.headline_font_size, 0.85),
            font_weight=design.headline_font_weight,
            color=design.primary_color,
        ))
    if content.accent_text:
        nodes.append(TextNode(
            text=content.accent_text,
            font_size=_scaled(design.body_font_size, 1.15),
            font_weight=design.body_font_weight,
            color=design.accent_color,
            margin_top=20,
        ))
    if content.body:
        nodes.append(TextNode(
            text=content.body,
            font_size=design.body_font_size,
            font_weight=design.body_font_weight,
            color=design.primary_color,
            line_height=1.5,
            opacity=0.9,
            margin_top=28,
        ))
    return nodes


def _numbered_nodes(content: SlideContent, design: DesignContext) -> list[LayoutNode]:
    nodes: list[LayoutNode] = [TextNode(
        text=f"{content.slide_number:02d}",
        font_size=_scaled(design.headline_font_size, 1.3),
        font_weight=design.headline_font_weight,
        color=design.accent_color,
        line_height=1.0,
    )]
    if content.headline:
        nodes.append(TextNode(
            text=content.headline,
            font_size=_scaled(design.headline_font_size, 0.75),
            font_weight=design.headline_font_weight,
            color=design.primary_color,
            margin_top=16,
        ))
    if content.body:
        nodes.append(TextNode(
            text=content.body,
            font_size=design.body_font_size,
            font_weight=design.body_font_weight,
            color=design.primary_color,
            line_height=1.5,
            opacity=0.85,
            margin_top=24,
        ))
    return nodes


def _cta_nodes(content: SlideContent, design: DesignContext) -> list[LayoutNode]:
    nodes: list[LayoutNode] = []
    if content.headline:
        nodes.append(TextNode(
            text=content.headline,
            font_size=_scaled(design.headline_font_size, 0.8),
            font_weight=design.headline_font_weight,
            color=design.primary_color,
        ))
    if content.cta_text:
        nodes.append(PillNode(
            text=content.cta_text,
            font_size=design.body_font_size,
            font_weight=design.headline_font_weight,
            text_color="#ffffff",
            fill=design.accent_color,
            margin_top=40,
        ))
    if content.body:
        nodes.append(TextNode(
            text=content.body,
            font_size=_scaled(design.body_font_size, 0.9),
            font_weight=design.body_font_weight,
            color=design.primary_color,
            line_height=1.5,
            opacity=0.8,
            margin_top=32,
        ))
    return nodes


_BUILDERS = {
    TemplateKind.HOOK: _hook_nodes,
    TemplateKind.CONTENT: _content_nodes,
    TemplateKind.NUMBERED: _numbered_nodes,
    TemplateKind.CTA: _cta_nodes,
}


def build_layout(
    template: TemplateKind,
    content: SlideContent,
    design: DesignContext,
    dimensions: tuple[int, int],
    has_background: bool = False,
) -> LayoutTree:
    """Build the layout tree for one slide.

    Args:
        template: Template kind to arrange the slide with.
        content: Slide text content.
        design: Design context shared by the whole carousel.
        dimensions: Canvas (width, height).
        has_background: Whether text sits over a background image, in
            which case a translucent backing panel is added.

    Returns:
        Layout tree ready for rendering.
    """
    width, height = dimensions
    children = tuple(_BUILDERS[template](content, design))
    is_side_aligned = template in (TemplateKind.CONTENT, TemplateKind.NUMBERED)

    return LayoutTree(
        template=template,
        width=width,
        height=height,
        padding_x=design.padding_x,
        padding_y=design.padding_y,
        children=children,
        vertical_align="top" if template == TemplateKind.CONTENT else "center",
        text_align="left" if is_side_aligned else "center",
        max_width_ratio=0.85 if is_side_aligned else 0.9,
        backing=TEXT_BACKING_COLOR if has_background else None,
    )
