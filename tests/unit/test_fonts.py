"""Unit tests for font resource loading."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from carousel_automator.design import FontResource, load_font_resource
from carousel_automator.design.fonts import BUILTIN_FONT_SOURCE
from carousel_automator.exceptions import FontLoadError


class TestFontResource:
    """Tests for FontResource."""

    def test_builtin_has_no_weight_axis(self, builtin_fonts: FontResource):
        """Test that Pillow's bundled font reports no weight support."""
        assert builtin_fonts.supports_weight is False

    def test_get_is_cached(self, builtin_fonts: FontResource):
        """Test that sized fonts are reused."""
        assert builtin_fonts.get(40) is builtin_fonts.get(40)

    def test_weights_share_static_font(self, builtin_fonts: FontResource):
        """Test that a static font ignores the weight in its cache key."""
        assert builtin_fonts.get(40, weight=700) is builtin_fonts.get(40, weight=400)

    def test_sizes_differ(self, builtin_fonts: FontResource):
        """Test that different sizes give different font objects."""
        assert builtin_fonts.get(40) is not builtin_fonts.get(80)


class TestLoadFontResource:
    """Tests for load_font_resource."""

    @pytest.mark.asyncio
    async def test_builtin_when_no_source(self):
        """Test that no url or path loads the built-in font."""
        resource = await load_font_resource()

        assert resource.source == BUILTIN_FONT_SOURCE
        assert resource.data is None

    @pytest.mark.asyncio
    async def test_process_wide_cache(self):
        """Test that the same source returns the same resource."""
        first = await load_font_resource(url=BUILTIN_FONT_SOURCE)
        second = await load_font_resource(url=BUILTIN_FONT_SOURCE)

        assert first is second

    @pytest.mark.asyncio
    async def test_missing_path(self, tmp_path: Path):
        """Test that an unreadable font file raises FontLoadError."""
        with pytest.raises(FontLoadError):
            await load_font_resource(path=tmp_path / "missing.ttf")

    @pytest.mark.asyncio
    async def test_invalid_font_file(self, tmp_path: Path):
        """Test that a file that is not a font raises FontLoadError."""
        bad_font = tmp_path / "bad.ttf"
        bad_font.write_bytes(b"definitely not a font")

        with pytest.raises(FontLoadError):
            await load_font_resource(path=bad_font)

    @pytest.mark.asyncio
    async def test_download_http_error(self):
        """Test that a failed download raises FontLoadError."""
        transport = httpx.MockTransport(lambda request: httpx.Response(404))

        async with httpx.AsyncClient(transport=transport) as client:
            with pytest.raises(FontLoadError):
                await load_font_resource(url="https://fonts.example/Inter.ttf", client=client)

    @pytest.mark.asyncio
    async def test_download_invalid_data(self):
        """Test that downloaded bytes that are not a font raise FontLoadError."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

        async with httpx.AsyncClient(transport=transport) as client:
            with pytest.raises(FontLoadError):
                await load_font_resource(url="https://fonts.example/Inter.ttf", client=client)

    @pytest.mark.asyncio
    async def test_failures_not_cached(self, tmp_path: Path):
        """Test that a failed load does not poison the cache."""
        font_path = tmp_path / "later.ttf"
        with pytest.raises(FontLoadError):
            await load_font_resource(path=font_path)

        with pytest.raises(FontLoadError):
            await load_font_resource(path=font_path)
