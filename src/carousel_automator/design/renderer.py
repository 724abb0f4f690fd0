"""Layout tree rendering with Pillow.

Turns a ``LayoutTree`` into a transparent RGBA layer of the canvas size.
Nodes are stacked vertically inside the padded content box; text is
wrapped to the box width.
"""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image, ImageDraw, ImageFont

from ..constants import TEXT_BACKING_PADDING, TEXT_BACKING_RADIUS
from ..exceptions import RenderError
from .colors import parse_color, with_opacity
from .fonts import FontResource
from .layout import LayoutNode, LayoutTree, PillNode, RuleNode, TextNode


@dataclass
class _Measured:
    node: LayoutNode
    width: int
    height: int
    lines: list[str]
    font: ImageFont.FreeTypeFont | None
    line_step: int = 0


class LayoutRenderer:
    """Render layout trees to transparent raster layers.

    Usage:
        renderer = LayoutRenderer(font_resource)
        layer = renderer.render(build_layout(kind, content, design, (1080, 1350)))
    """

    def __init__(self, fonts: FontResource):
        """Initialize the renderer.

        Args:
            fonts: Shared font resource.
        """
        self.fonts = fonts

    def _font(self, size: int, weight: int) -> ImageFont.FreeTypeFont:
        return self.fonts.get(size, weight)

    def _stroke_for(self, size: int, weight: int) -> int:
        """Synthetic emboldening for fonts without a weight axis."""
        if self.fonts.supports_weight or weight < 600:
            return 0
        return max(1, size // 48)

    def _wrap_text(self, text: str, font: ImageFont.FreeTypeFont, max_width: int) -> list[str]:
        """Wrap text to fit within max width."""
        lines: list[str] = []
        for paragraph in text.split("\n"):
            words = paragraph.split()
            current_line: list[str] = []
            for word in words:
                test_line = " ".join(current_line + [word])
                if font.getlength(test_line) <= max_width or not current_line:
                    current_line.append(word)
                else:
                    lines.append(" ".join(current_line))
                    current_line = [word]
            if current_line:
                lines.append(" ".join(current_line))
        return lines

    def _measure(self, node: LayoutNode, max_width: int) -> _Measured:
        if isinstance(node, TextNode):
            font = self._font(node.font_size, node.font_weight)
            lines = self._wrap_text(node.text, font, max_width)
            line_step = int(round(node.font_size * node.line_height))
            width = max((int(font.getlength(line)) for line in lines), default=0)
            return _Measured(node, width, line_step * len(lines), lines, font, line_step)

        if isinstance(node, RuleNode):
            return _Measured(node, node.width, node.height, [], None)

        if isinstance(node, PillNode):
            font = self._font(node.font_size, node.font_weight)
            text_width = int(font.getlength(node.text))
            width = min(text_width + 2 * node.padding_x, max_width)
            height = node.font_size + 2 * node.padding_y
            return _Measured(node, width, height, [node.text], font)

        raise RenderError(f"Unknown layout node: {type(node).__name__}")

    def render(self, tree: LayoutTree) -> Image.Image:
        """Render a layout tree.

        Args:
            tree: Layout to render.

        Returns:
            RGBA image with a fully transparent background.

        Raises:
            RenderError: If the layout cannot be drawn.
        """
        layer = Image.new("RGBA", (tree.width, tree.height), (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)

        content_width = tree.width - 2 * tree.padding_x
        max_width = int(content_width * tree.max_width_ratio)
        backing_px, backing_py = TEXT_BACKING_PADDING
        if tree.backing:
            max_width -= 2 * backing_px
        if max_width <= 0:
            raise RenderError(f"No room for text in {tree.width}px canvas")

        measured = [self._measure(node, max_width) for node in tree.children]
        block_height = sum(m.height + m.node.margin_top for m in measured)
        if measured:
            # First node's top margin does not push the block down
            block_height -= measured[0].node.margin_top
        block_width = max((m.width for m in measured), default=0)

        inner_top = tree.padding_y + (backing_py if tree.backing else 0)
        inner_height = tree.height - 2 * inner_top
        if tree.vertical_align == "center":
            top = inner_top + max((inner_height - block_height) // 2, 0)
        else:
            top = inner_top

        if tree.text_align == "center":
            block_left = (tree.width - block_width) // 2
        else:
            block_left = tree.padding_x + (backing_px if tree.backing else 0)

        if tree.backing and measured:
            draw.rounded_rectangle(
                (
                    block_left - backing_px,
                    top - backing_py,
                    block_left + block_width + backing_px,
                    top + block_height + backing_py,
                ),
                radius=TEXT_BACKING_RADIUS,
                fill=parse_color(tree.backing),
            )

        y = top
        for i, m in enumerate(measured):
            if i > 0:
                y += m.node.margin_top
            self._draw_node(draw, m, y, block_left, block_width, tree.text_align)
            y += m.height

        return layer

    def _x_for(self, width: int, block_left: int, block_width: int, align: str) -> int:
        if align == "center":
            return block_left + (block_width - width) // 2
        return block_left

    def _draw_node(
        self,
        draw: ImageDraw.ImageDraw,
        m: _Measured,
        y: int,
        block_left: int,
        block_width: int,
        align: str,
    ) -> None:
        node = m.node

        if isinstance(node, TextNode):
            fill = with_opacity(parse_color(node.color), node.opacity)
            stroke = self._stroke_for(node.font_size, node.font_weight)
            for line in m.lines:
                line_width = int(m.font.getlength(line))
                x = self._x_for(line_width, block_left, block_width, align)
                draw.text(
                    (x, y),
                    line,
                    font=m.font,
                    fill=fill,
                    stroke_width=stroke,
                    stroke_fill=fill,
                )
                y += m.line_step
            return

        if isinstance(node, RuleNode):
            x = self._x_for(node.width, block_left, block_width, align)
            draw.rectangle(
                (x, y, x + node.width - 1, y + node.height - 1),
                fill=parse_color(node.color),
            )
            return

        if isinstance(node, PillNode):
            x = self._x_for(m.width, block_left, block_width, align)
            draw.rounded_rectangle(
                (x, y, x + m.width, y + m.height),
                radius=node.radius,
                fill=parse_color(node.fill),
            )
            text_fill = parse_color(node.text_color)
            stroke = self._stroke_for(node.font_size, node.font_weight)
            draw.text(
                (x + m.width // 2, y + m.height // 2),
                node.text,
                font=m.font,
                fill=text_fill,
                anchor="mm",
                stroke_width=stroke,
                stroke_fill=text_fill,
            )
