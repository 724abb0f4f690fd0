"""Shared test fixtures and configuration.

Provides stores, fonts, mocks and sample inputs for testing the
carousel pipeline components. Fonts come from Pillow's bundled
scalable font so no test touches the network.
"""

from __future__ import annotations

import sys
from io import BytesIO
from pathlib import Path
from typing import Callable
from unittest.mock import AsyncMock

import pytest
from PIL import Image

# Import from src since tests is outside the package
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from carousel_automator.config import CarouselSettings
from carousel_automator.content import SlideInput
from carousel_automator.design import FontResource, clear_font_cache
from carousel_automator.design.fonts import BUILTIN_FONT_SOURCE
from carousel_automator.storage import InMemoryContentStore


def make_png(
    color: tuple[int, int, int] | tuple[int, int, int, int],
    size: tuple[int, int] = (1080, 1350),
) -> bytes:
    """Encode a solid-color PNG.

    Args:
        color: RGB or RGBA fill.
        size: Image (width, height).

    Returns:
        PNG bytes.
    """
    mode = "RGBA" if len(color) == 4 else "RGB"
    output = BytesIO()
    Image.new(mode, size, color).save(output, format="PNG")
    return output.getvalue()


def open_png(data: bytes) -> Image.Image:
    """Decode PNG bytes into an RGBA image."""
    return Image.open(BytesIO(data)).convert("RGBA")


def assert_color_close(actual: tuple[int, ...], expected: tuple[int, ...], tolerance: int = 2) -> None:
    """Assert two RGBA pixels match within a per-channel tolerance."""
    assert len(actual) == len(expected), f"{actual} vs {expected}"
    for a, e in zip(actual, expected):
        assert abs(a - e) <= tolerance, f"{actual} != {expected}"


@pytest.fixture(autouse=True)
def reset_font_cache():
    """Keep the process-wide font cache isolated between tests."""
    clear_font_cache()
    yield
    clear_font_cache()


@pytest.fixture
def builtin_fonts() -> FontResource:
    """Font resource backed by Pillow's built-in scalable font."""
    return FontResource(None, BUILTIN_FONT_SOURCE)


@pytest.fixture
def font_loader(builtin_fonts: FontResource) -> AsyncMock:
    """Async font loader returning the built-in font resource."""
    return AsyncMock(return_value=builtin_fonts)


@pytest.fixture
def memory_store() -> InMemoryContentStore:
    """Empty in-memory content store."""
    return InMemoryContentStore()


@pytest.fixture
def background_png() -> bytes:
    """Solid teal background at carousel size."""
    return make_png((0, 128, 128))


@pytest.fixture
def mock_image_provider(background_png: bytes) -> AsyncMock:
    """Create a mock ImageProvider.

    Returns:
        AsyncMock whose ``generate`` returns a solid-color PNG.
    """
    provider = AsyncMock()
    provider.generate.return_value = background_png
    provider.current_provider = "mock"
    return provider


@pytest.fixture
def test_settings(tmp_path: Path) -> CarouselSettings:
    """Settings pointing at temporary directories and the built-in font."""
    return CarouselSettings(
        storage_dir=tmp_path / "data",
        font_url=BUILTIN_FONT_SOURCE,
        log_dir=tmp_path / "logs",
        providers_config=tmp_path / "missing-providers.yaml",
    )


@pytest.fixture
def sample_slides() -> list[SlideInput]:
    """Five slides as produced by the text-generation step."""
    return [
        SlideInput(slide_number=1, text="5 habits of calm founders. Number 3 surprised me."),
        SlideInput(slide_number=2, text="Plan tomorrow tonight\nWrite three priorities before you log off."),
        SlideInput(slide_number=3, text="Batch your meetings. Protect two deep-work blocks a day."),
        SlideInput(slide_number=4, text="Say no faster. Every yes is a no to something else."),
        SlideInput(slide_number=5, text="Save this for your next busy week."),
    ]


@pytest.fixture
def mock_progress_callback() -> AsyncMock:
    """Create a mock job callback.

    Returns:
        AsyncMock that records the progress of every update.
    """
    callback = AsyncMock()
    callback.progress_values = []

    async def record_update(job):
        callback.progress_values.append(job.progress)

    callback.side_effect = record_update
    return callback


@pytest.fixture
def png_factory() -> Callable[..., bytes]:
    """Expose ``make_png`` to tests."""
    return make_png
