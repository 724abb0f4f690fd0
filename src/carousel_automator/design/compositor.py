"""Slide compositor: text layer over a background image or solid fill."""

from __future__ import annotations

import logging
from io import BytesIO

from PIL import Image

from ..constants import (
    CAROUSEL_HEIGHT,
    CAROUSEL_WIDTH,
    LOGO_MARGIN,
    LOGO_OPACITY,
    LOGO_WIDTH_RATIO,
    TemplateKind,
)
from ..content.models import SlideContent
from ..exceptions import RenderError
from .colors import parse_color
from .context import DesignContext
from .fonts import FontResource
from .layout import build_layout
from .renderer import LayoutRenderer

_logger = logging.getLogger("carousel_jobs")


def cover_fit(image: Image.Image, size: tuple[int, int]) -> Image.Image:
    """Scale an image to cover ``size`` and center crop the overflow."""
    target_width, target_height = size
    if image.size == size:
        return image

    img_ratio = image.width / image.height
    target_ratio = target_width / target_height

    if img_ratio > target_ratio:
        # Wider than target - fit height, crop width
        new_height = target_height
        new_width = max(int(round(new_height * img_ratio)), target_width)
    else:
        # Taller than target - fit width, crop height
        new_width = target_width
        new_height = max(int(round(new_width / img_ratio)), target_height)

    resized = image.resize((new_width, new_height), Image.Resampling.LANCZOS)
    left = (new_width - target_width) // 2
    top = (new_height - target_height) // 2
    return resized.crop((left, top, left + target_width, top + target_height))


class SlideCompositor:
    """Composite carousel slides.

    Renders the slide's layout tree to a transparent layer and overlays
    it on the shared background (cover-fit) or on a canvas filled with
    the design's background color. Composition is CPU-bound and
    synchronous.

    Usage:
        compositor = SlideCompositor(font_resource)
        png_bytes = compositor.composite(
            background=background_bytes,  # or None for solid fill
            content=slide_content,
            design=design_context,
            template=TemplateKind.HOOK,
        )
    """

    def __init__(self, fonts: FontResource, logo: bytes | None = None):
        """Initialize the compositor.

        Args:
            fonts: Shared font resource.
            logo: Optional logo image placed bottom-right on every slide.
        """
        self.renderer = LayoutRenderer(fonts)
        self._logo_bytes = logo
        self._logo: Image.Image | None = None
        self._background_source: bytes | None = None
        self._background_fitted: Image.Image | None = None

    def _load_logo(self) -> Image.Image:
        if self._logo is not None:
            return self._logo
        try:
            self._logo = Image.open(BytesIO(self._logo_bytes)).convert("RGBA")
            return self._logo
        except OSError as e:
            raise RenderError(f"Invalid logo image: {e}") from e

    def _prepare_background(self, background: bytes, size: tuple[int, int]) -> Image.Image:
        # The shared buffer is decoded and fitted once per job
        fitted = self._background_fitted
        if background is self._background_source and fitted is not None and fitted.size == size:
            return fitted.copy()

        try:
            image = Image.open(BytesIO(background))
            image.load()
        except OSError as e:
            raise RenderError(f"Invalid background image: {e}") from e

        fitted = cover_fit(image.convert("RGBA"), size)
        self._background_source = background
        self._background_fitted = fitted
        return fitted.copy()

    def _add_logo(self, canvas: Image.Image) -> None:
        logo = self._load_logo()
        target_width = max(int(canvas.width * LOGO_WIDTH_RATIO), 1)
        target_height = max(int(logo.height * target_width / logo.width), 1)
        resized = logo.resize((target_width, target_height), Image.Resampling.LANCZOS)

        alpha = resized.getchannel("A").point(lambda a: int(a * LOGO_OPACITY))
        resized.putalpha(alpha)

        position = (
            canvas.width - target_width - LOGO_MARGIN,
            canvas.height - target_height - LOGO_MARGIN,
        )
        canvas.alpha_composite(resized, dest=position)

    def compose_image(
        self,
        background: bytes | None,
        content: SlideContent,
        design: DesignContext,
        template: TemplateKind,
        dimensions: tuple[int, int] = (CAROUSEL_WIDTH, CAROUSEL_HEIGHT),
    ) -> Image.Image:
        """Composite a slide and return the RGBA image.

        Args:
            background: Shared background image bytes, or None.
            content: Slide text content.
            design: Design context of the carousel.
            template: Template kind for the slide.
            dimensions: Canvas (width, height).

        Returns:
            Final RGBA image of exactly ``dimensions``.

        Raises:
            RenderError: If rendering or compositing fails.
        """
        tree = build_layout(template, content, design, dimensions, has_background=background is not None)
        text_layer = self.renderer.render(tree)

        if background is not None:
            canvas = self._prepare_background(background, dimensions)
        else:
            canvas = Image.new("RGBA", dimensions, parse_color(design.background_color))

        canvas.alpha_composite(text_layer, dest=(0, 0))

        if self._logo_bytes:
            self._add_logo(canvas)

        return canvas

    def composite(
        self,
        background: bytes | None,
        content: SlideContent,
        design: DesignContext,
        template: TemplateKind,
        dimensions: tuple[int, int] = (CAROUSEL_WIDTH, CAROUSEL_HEIGHT),
    ) -> bytes:
        """Composite a slide and encode it as PNG.

        Args:
            background: Shared background image bytes, or None.
            content: Slide text content.
            design: Design context of the carousel.
            template: Template kind for the slide.
            dimensions: Canvas (width, height).

        Returns:
            PNG bytes.
        """
        image = self.compose_image(background, content, design, template, dimensions)

        output = BytesIO()
        image.save(output, format="PNG", optimize=True)
        _logger.debug(
            f"COMPOSITE | slide:{content.slide_number} | template:{template.value} | "
            f"background:{background is not None} | bytes:{output.tell()}"
        )
        return output.getvalue()
