"""Background acquisition with graceful degradation."""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass
from io import BytesIO

from PIL import Image

from ..constants import CAROUSEL_ASPECT_RATIO
from ..providers.image import ImageProvider
from .prompts import build_background_prompt

_logger = logging.getLogger("carousel_jobs")


@dataclass(frozen=True)
class BrandColorHints:
    """Brand inputs that steer background generation."""

    primary_color: str | None = None
    master_brand_prompt: str | None = None


@dataclass(frozen=True)
class BackgroundResult:
    """Outcome of background acquisition.

    ``image`` is None when no background is available; callers then
    fill the canvas with the design's background color. ``error`` is set
    only when a generation was attempted and failed.
    """

    image: bytes | None = None
    generated: bool = False
    error: str | None = None
    prompt: str | None = None

    @property
    def is_present(self) -> bool:
        return self.image is not None

    @classmethod
    def none(cls, error: str | None = None, prompt: str | None = None) -> "BackgroundResult":
        return cls(image=None, generated=False, error=error, prompt=prompt)


def decode_background_image(value: bytes | str) -> bytes:
    """Decode a caller-supplied background.

    Accepts raw bytes, a ``data:image/...;base64,`` URL or bare base64.

    Raises:
        ValueError: If the string is not valid base64.
    """
    if isinstance(value, bytes):
        return value
    payload = value.split(",", 1)[1] if value.startswith("data:") else value
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Background image is not valid base64: {e}") from e


def verify_background_image(data: bytes) -> None:
    """Check that background bytes decode as a raster image.

    Raises:
        ValueError: If Pillow cannot decode the data.
    """
    try:
        with Image.open(BytesIO(data)) as image:
            image.load()
    except (OSError, Image.DecompressionBombError) as e:
        raise ValueError(f"Invalid background image: {e}") from e


class BackgroundProvider:
    """Acquire the single shared background for a carousel.

    A supplied background is returned unchanged. Otherwise one image is
    requested from the image provider. Any failure yields an empty result
    instead of an exception: missing credentials, a non-2xx response or
    timeout, empty data, or bytes that do not decode as an image.

    Usage:
        provider = BackgroundProvider(get_image_provider())
        result = await provider.acquire("gradient-dark", BrandColorHints("#ff0000"))
        background = result.image  # bytes or None
    """

    def __init__(self, image_provider: ImageProvider | None, model: str | None = None):
        """Initialize the background provider.

        Args:
            image_provider: Image generation provider. May be None when
                only supplied backgrounds are used.
            model: Optional model id for generation.
        """
        self.image_provider = image_provider
        self.model = model

    async def acquire(
        self,
        style_key: str | None,
        hints: BrandColorHints | None = None,
        supplied: bytes | None = None,
    ) -> BackgroundResult:
        """Return the background for the carousel.

        Args:
            style_key: Background style key; None means no generation.
            hints: Brand color and master prompt.
            supplied: Caller-supplied background image.

        Returns:
            Background result.
        """
        if supplied is not None:
            try:
                verify_background_image(supplied)
            except ValueError as e:
                _logger.warning(f"BACKGROUND | INVALID_SUPPLIED | error:{e}")
                return BackgroundResult.none(error=str(e))
            return BackgroundResult(image=supplied, generated=False)

        if not style_key:
            return BackgroundResult.none()

        hints = hints or BrandColorHints()
        prompt = build_background_prompt(
            style_key,
            color_hint=hints.primary_color,
            master_brand_prompt=hints.master_brand_prompt,
        )

        try:
            image = await self.image_provider.generate(
                prompt,
                aspect_ratio=CAROUSEL_ASPECT_RATIO,
                model=self.model,
            )
        except Exception as e:
            _logger.warning(f"BACKGROUND | FAILED | style:{style_key} | error:{e}")
            return BackgroundResult.none(error=str(e), prompt=prompt)

        if not image:
            _logger.warning(f"BACKGROUND | EMPTY | style:{style_key}")
            return BackgroundResult.none(error="Image generation returned no data", prompt=prompt)

        try:
            verify_background_image(image)
        except ValueError as e:
            _logger.warning(f"BACKGROUND | UNDECODABLE | style:{style_key} | error:{e}")
            return BackgroundResult.none(error=str(e), prompt=prompt)

        _logger.info(f"BACKGROUND | GENERATED | style:{style_key} | bytes:{len(image)}")
        return BackgroundResult(image=image, generated=True, prompt=prompt)
