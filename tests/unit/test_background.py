"""Unit tests for background prompts and acquisition.

Tests that background acquisition:
- Returns a supplied image unchanged without calling the provider
- Skips generation when no style is requested
- Turns every provider failure into an empty result with an error
- Rejects bytes that do not decode as an image
"""

from __future__ import annotations

import base64
from unittest.mock import AsyncMock

import pytest

from carousel_automator.background import (
    BACKGROUND_CATEGORIES,
    BACKGROUND_PROMPTS,
    BackgroundProvider,
    BackgroundResult,
    BrandColorHints,
    build_background_prompt,
    decode_background_image,
    verify_background_image,
)
from carousel_automator.background.prompts import BACKGROUND_ONLY_REQUIREMENTS
from carousel_automator.exceptions import BackgroundGenerationError, MissingCredentialsError


class TestBuildBackgroundPrompt:
    """Tests for build_background_prompt."""

    def test_known_style(self):
        """Test that a known key returns its template."""
        assert build_background_prompt("bokeh-dark") == BACKGROUND_PROMPTS["bokeh-dark"]

    def test_unknown_style_falls_back(self):
        """Test that unknown keys use gradient-dark."""
        assert build_background_prompt("no-such-style") == BACKGROUND_PROMPTS["gradient-dark"]
        assert build_background_prompt(None) == BACKGROUND_PROMPTS["gradient-dark"]

    def test_color_hint_appended(self):
        """Test that the brand color is woven into the prompt."""
        prompt = build_background_prompt("gradient-warm", color_hint="#ff0000")

        assert prompt.startswith(BACKGROUND_PROMPTS["gradient-warm"])
        assert prompt.endswith(" Incorporate subtle tones of #ff0000 into the design.")

    def test_master_prompt_replaces_template(self):
        """Test that a master brand prompt replaces the style template."""
        prompt = build_background_prompt(
            "gradient-dark",
            color_hint="#ff0000",
            master_brand_prompt="  Soft pastel paper textures  ",
        )

        assert prompt.startswith("Soft pastel paper textures")
        assert prompt.endswith(BACKGROUND_ONLY_REQUIREMENTS)
        assert BACKGROUND_PROMPTS["gradient-dark"] not in prompt
        assert "#ff0000" not in prompt

    def test_categories_cover_all_styles(self):
        """Test that every visual style has background keys."""
        assert set(BACKGROUND_CATEGORIES) == {
            "typography", "photorealistic", "illustration", "3d-render", "abstract-art", "collage",
        }
        assert "gradient-dark" in BACKGROUND_CATEGORIES["typography"]
        assert all(BACKGROUND_CATEGORIES.values())


class TestDecodeBackgroundImage:
    """Tests for decode_background_image."""

    def test_bytes_passthrough(self):
        """Test that raw bytes are returned as-is."""
        assert decode_background_image(b"\x89PNG") == b"\x89PNG"

    def test_data_url(self):
        """Test decoding of a data URL."""
        encoded = base64.b64encode(b"image-bytes").decode()

        assert decode_background_image(f"data:image/png;base64,{encoded}") == b"image-bytes"

    def test_bare_base64(self):
        """Test decoding of a bare base64 string."""
        assert decode_background_image(base64.b64encode(b"abc").decode()) == b"abc"

    def test_invalid_base64(self):
        """Test that invalid base64 raises ValueError."""
        with pytest.raises(ValueError):
            decode_background_image("not base64 at all!!")


class TestBackgroundResult:
    """Tests for BackgroundResult."""

    def test_none(self):
        """Test the empty result."""
        result = BackgroundResult.none(error="boom")

        assert result.image is None
        assert result.is_present is False
        assert result.generated is False
        assert result.error == "boom"


class TestBackgroundProvider:
    """Tests for BackgroundProvider.acquire."""

    @pytest.mark.asyncio
    async def test_supplied_background_not_regenerated(self, mock_image_provider: AsyncMock, background_png: bytes):
        """Test that a supplied image is returned without generation."""
        provider = BackgroundProvider(mock_image_provider)

        result = await provider.acquire("gradient-dark", supplied=background_png)

        assert result.image is background_png
        assert result.generated is False
        assert result.error is None
        mock_image_provider.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_style_no_generation(self, mock_image_provider: AsyncMock):
        """Test that no style means no background and no error."""
        result = await BackgroundProvider(mock_image_provider).acquire(None)

        assert result == BackgroundResult.none()
        mock_image_provider.generate.assert_not_called()

    @pytest.mark.asyncio
    async def test_generates_once(self, mock_image_provider: AsyncMock, background_png: bytes):
        """Test a successful generation."""
        provider = BackgroundProvider(mock_image_provider, model="gemini-2.0-flash-exp")

        result = await provider.acquire("bokeh-dark", BrandColorHints(primary_color="#00ff00"))

        assert result.image == background_png
        assert result.generated is True
        assert result.error is None
        assert "#00ff00" in result.prompt
        mock_image_provider.generate.assert_awaited_once_with(
            result.prompt,
            aspect_ratio="4:5",
            model="gemini-2.0-flash-exp",
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        MissingCredentialsError("GOOGLE_API_KEY not set"),
        BackgroundGenerationError("HTTP 500"),
        TimeoutError("timed out"),
    ])
    async def test_failures_degrade(self, mock_image_provider: AsyncMock, error: Exception):
        """Test that provider errors yield no background and an error string."""
        mock_image_provider.generate.side_effect = error

        result = await BackgroundProvider(mock_image_provider).acquire("gradient-dark")

        assert result.image is None
        assert result.generated is False
        assert result.error == str(error)

    @pytest.mark.asyncio
    async def test_empty_result_is_error(self, mock_image_provider: AsyncMock):
        """Test that empty image data counts as a failure."""
        mock_image_provider.generate.return_value = b""

        result = await BackgroundProvider(mock_image_provider).acquire("gradient-dark")

        assert result.image is None
        assert result.error

    @pytest.mark.asyncio
    async def test_undecodable_generated_image_is_error(self, mock_image_provider: AsyncMock):
        """Test that generated bytes Pillow cannot open yield no background."""
        mock_image_provider.generate.return_value = b"not-an-image"

        result = await BackgroundProvider(mock_image_provider).acquire("gradient-dark")

        assert result.image is None
        assert result.generated is False
        assert result.error.startswith("Invalid background image")
        assert result.prompt == BACKGROUND_PROMPTS["gradient-dark"]

    @pytest.mark.asyncio
    async def test_undecodable_supplied_image_is_error(self, mock_image_provider: AsyncMock):
        """Test that supplied bytes that are not an image yield no background."""
        result = await BackgroundProvider(mock_image_provider).acquire(None, supplied=b"plain text")

        assert result.image is None
        assert result.error.startswith("Invalid background image")
        mock_image_provider.generate.assert_not_called()


class TestVerifyBackgroundImage:
    """Tests for verify_background_image."""

    def test_accepts_png(self, background_png: bytes):
        """Test that a real PNG passes."""
        verify_background_image(background_png)

    @pytest.mark.parametrize("data", [b"", b"not-an-image", b"<svg></svg>"])
    def test_rejects_garbage(self, data: bytes):
        """Test that undecodable data raises ValueError."""
        with pytest.raises(ValueError, match="Invalid background image"):
            verify_background_image(data)
