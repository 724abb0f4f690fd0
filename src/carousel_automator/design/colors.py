"""Color parsing for design values.

Design contexts carry CSS color strings: hex, named colors, ``hsl()``
and ``rgba(0, 0, 0, 0.6)``. Pillow's ``ImageColor`` handles everything
except a fractional or percentage alpha in ``rgb()``/``rgba()``, so that
one form is parsed here.
"""

from __future__ import annotations

import re

from PIL import ImageColor

RGBA = tuple[int, int, int, int]

_FUNC_PATTERN = re.compile(r"^rgba?\(\s*([^)]*)\)$", re.IGNORECASE)


def _parse_alpha(raw: str) -> int:
    raw = raw.strip()
    if raw.endswith("%"):
        fraction = float(raw[:-1]) / 100
    else:
        fraction = float(raw)
    fraction = min(max(fraction, 0.0), 1.0)
    return round(fraction * 255)


def _parse_rgb_function(color: str, body: str) -> RGBA:
    parts = body.replace("/", ",").split(",")
    if len(parts) not in (3, 4):
        raise ValueError(f"Unsupported color: {color}")
    try:
        r, g, b = (min(max(int(float(p.strip())), 0), 255) for p in parts[:3])
        a = _parse_alpha(parts[3]) if len(parts) == 4 else 255
    except ValueError as e:
        raise ValueError(f"Unsupported color: {color}") from e
    return (r, g, b, a)


def parse_color(color: str) -> RGBA:
    """Parse a CSS color string into an RGBA tuple.

    Args:
        color: Hex (``#rgb`` through ``#rrggbbaa``), a CSS color name,
            ``hsl()``/``hsv()``, or ``rgb()``/``rgba()`` with ``a`` in
            0..1 or a percentage.

    Returns:
        Tuple of four ints in 0..255.

    Raises:
        ValueError: If the string is not a recognized color.

    Usage:
        parse_color("coral")                 # (255, 127, 80, 255)
        parse_color("rgba(0, 0, 0, 0.6)")    # (0, 0, 0, 153)
    """
    text = color.strip()

    match = _FUNC_PATTERN.match(text)
    if match:
        return _parse_rgb_function(color, match.group(1))

    try:
        return ImageColor.getcolor(text, "RGBA")
    except ValueError as e:
        raise ValueError(f"Unsupported color: {color}") from e


def with_opacity(color: RGBA, opacity: float) -> RGBA:
    """Scale a color's alpha channel by ``opacity``."""
    r, g, b, a = color
    return (r, g, b, round(a * min(max(opacity, 0.0), 1.0)))
