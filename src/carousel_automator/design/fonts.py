"""Font resource loading with a process-wide cache.

The font buffer is fetched once per process and shared read-only by
every job. Sized/weighted font objects are cached per resource.
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path

import httpx
from PIL import ImageFont

from ..exceptions import FontLoadError

_logger = logging.getLogger("carousel_jobs")

DEFAULT_FONT_URL = "https://github.com/google/fonts/raw/main/ofl/inter/Inter%5Bopsz,wght%5D.ttf"
"""Inter variable font (weight axis) from the Google Fonts repository."""

BUILTIN_FONT_SOURCE = "builtin"
"""Source name of Pillow's bundled scalable font."""


class FontResource:
    """A loaded font buffer that hands out sized font objects.

    Variable fonts get their weight axis set per requested weight.
    Static fonts (and Pillow's built-in font) render every weight the
    same and report ``supports_weight = False`` so callers can embolden.

    Usage:
        resource = await load_font_resource(url=DEFAULT_FONT_URL)
        font = resource.get(72, weight=700)
    """

    def __init__(self, data: bytes | None, source: str):
        """Initialize the resource.

        Args:
            data: Raw TTF/OTF bytes, or None for Pillow's built-in font.
            source: URL, path or ``builtin``, for logging.
        """
        self.data = data
        self.source = source
        self._cache: dict[tuple[int, int], ImageFont.FreeTypeFont] = {}
        self._weight_axis: int | None = None
        self.supports_weight = False

        if data is not None:
            probe = ImageFont.truetype(BytesIO(data), 12)
            try:
                axes = probe.get_variation_axes()
            except OSError:
                axes = []
            for i, axis in enumerate(axes):
                name = axis.get("name")
                if name in (b"Weight", "Weight"):
                    self._weight_axis = i
                    self.supports_weight = True
                    break

    def get(self, size: int, weight: int = 400) -> ImageFont.FreeTypeFont:
        """Get a font object for a size and weight, with caching."""
        cache_key = (size, weight if self.supports_weight else 0)
        if cache_key in self._cache:
            return self._cache[cache_key]

        if self.data is None:
            font = ImageFont.load_default(size=size)
        else:
            font = ImageFont.truetype(BytesIO(self.data), size)
            if self._weight_axis is not None:
                self._apply_weight(font, weight)

        self._cache[cache_key] = font
        return font

    def _apply_weight(self, font: ImageFont.FreeTypeFont, weight: int) -> None:
        axes = font.get_variation_axes()
        values = []
        for i, axis in enumerate(axes):
            if i == self._weight_axis:
                values.append(min(max(weight, axis["minimum"]), axis["maximum"]))
            else:
                values.append(axis["default"])
        font.set_variation_by_axes(values)


# Process-wide cache keyed by source
_font_cache: dict[str, FontResource] = {}


async def load_font_resource(
    url: str | None = None,
    path: Path | None = None,
    timeout: float = 30.0,
    client: httpx.AsyncClient | None = None,
) -> FontResource:
    """Load a font resource, reusing the cached one for the same source.

    A local path takes precedence over a URL. With neither, or with
    ``url == "builtin"``, Pillow's bundled font is used.

    Args:
        url: Font download URL.
        path: Local font file.
        timeout: Download timeout in seconds.
        client: Optional HTTP client to download with.

    Returns:
        Loaded font resource.

    Raises:
        FontLoadError: If the font cannot be fetched or parsed.
    """
    if path is not None:
        source = str(path)
    elif url and url != BUILTIN_FONT_SOURCE:
        source = url
    else:
        source = BUILTIN_FONT_SOURCE

    cached = _font_cache.get(source)
    if cached is not None:
        return cached

    if source == BUILTIN_FONT_SOURCE:
        data = None
    elif path is not None:
        try:
            data = path.read_bytes()
        except OSError as e:
            raise FontLoadError(f"Failed to read font {path}: {e}") from e
    else:
        data = await _download_font(source, timeout, client)

    try:
        resource = FontResource(data, source)
        resource.get(12)
    except (OSError, ValueError) as e:
        raise FontLoadError(f"Invalid font data from {source}: {e}") from e

    _logger.info(f"FONT | LOADED | source:{source} | variable:{resource.supports_weight}")
    _font_cache[source] = resource
    return resource


async def _download_font(url: str, timeout: float, client: httpx.AsyncClient | None) -> bytes:
    owns_client = client is None
    http = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
    try:
        response = await http.get(url, timeout=timeout)
        response.raise_for_status()
        return response.content
    except httpx.HTTPError as e:
        raise FontLoadError(f"Failed to download font from {url}: {e}") from e
    finally:
        if owns_client:
            await http.aclose()


def clear_font_cache() -> None:
    """Drop all cached font resources."""
    _font_cache.clear()
