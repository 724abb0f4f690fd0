"""Unit tests for the carousel CLI.

Tests validators, input loading and the commands through Typer's
runner. Generation runs against a temporary file store with the
built-in font and no background generation, so nothing hits the
network.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

import carousel_automator.config as config_module
from carousel_automator.cli import app
from carousel_automator.cli.carousel.params import CarouselGenerationParams
from carousel_automator.cli.carousel.service import CarouselService, load_brand_config, load_slides
from carousel_automator.cli.carousel.validators import validate_carousel_generation_params
from carousel_automator.cli.core.types import Failure, Success
from carousel_automator.cli.core.validators import validate_choice, validate_file
from carousel_automator.constants import JobStatus

runner = CliRunner()


@pytest.fixture
def slides_file(tmp_path: Path) -> Path:
    """Slides file with three plain-text slides."""
    path = tmp_path / "slides.json"
    path.write_text(json.dumps([
        "3 ways to sleep better. Number 2 is free.",
        "Dim the lights\nAn hour before bed, lower every light in the room.",
        "Save this for tonight.",
    ]), encoding="utf-8")
    return path


@pytest.fixture
def cli_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point settings at temporary directories and the built-in font."""
    store_dir = tmp_path / "store"
    monkeypatch.setenv("CAROUSEL_FONT_URL", "builtin")
    monkeypatch.setenv("CAROUSEL_STORAGE_DIR", str(store_dir))
    monkeypatch.setenv("CAROUSEL_PROVIDERS_CONFIG", str(tmp_path / "missing.yaml"))
    monkeypatch.setattr(config_module, "_settings", None)
    return store_dir


def _params(slides_file: Path, store_dir: Path, **overrides) -> CarouselGenerationParams:
    return CarouselGenerationParams.from_cli(
        slides_file=slides_file,
        content_id=overrides.pop("content_id", "post-1"),
        store_dir=store_dir,
        **overrides,
    )


class TestCoreValidators:
    """Tests for shared validators."""

    def test_optional_file(self):
        """Test that an absent optional file is valid."""
        assert validate_file(None, "Logo") == Success(None)

    def test_missing_file(self, tmp_path: Path):
        """Test that a missing file fails with its path."""
        result = validate_file(tmp_path / "nope.png", "Logo")

        assert isinstance(result, Failure)
        assert "Logo not found" in result.error

    def test_directory_is_not_a_file(self, tmp_path: Path):
        """Test that a directory is rejected."""
        assert isinstance(validate_file(tmp_path, "Logo"), Failure)

    def test_choice(self):
        """Test choice validation and the listed alternatives."""
        assert validate_choice(None, ["a"], "style") == Success(None)
        assert validate_choice("a", ["a", "b"], "style") == Success("a")

        result = validate_choice("c", ["b", "a"], "style")
        assert isinstance(result, Failure)
        assert result.details == {"valid": "a, b"}


class TestGenerationValidators:
    """Tests for validate_carousel_generation_params."""

    def test_valid(self, slides_file: Path, tmp_path: Path):
        """Test a valid parameter set."""
        params = _params(slides_file, tmp_path, visual_style="typography", text_style="dramatic")

        assert validate_carousel_generation_params(params) == Success(params)

    @pytest.mark.parametrize("overrides", [
        {"content_id": "  "},
        {"visual_style": "oil-painting"},
        {"text_style": "shouty"},
        {"background_style": "gradient-plaid"},
        {"design_preset": "neon"},
        {"model": "dall-e-9"},
        {"total_slides": 0},
    ])
    def test_invalid(self, slides_file: Path, tmp_path: Path, overrides: dict):
        """Test that each invalid option fails validation."""
        params = _params(slides_file, tmp_path, **overrides)

        assert isinstance(validate_carousel_generation_params(params), Failure)

    def test_missing_slides_file(self, tmp_path: Path):
        """Test that the slides file must exist."""
        params = _params(tmp_path / "missing.json", tmp_path)

        assert isinstance(validate_carousel_generation_params(params), Failure)

    def test_background_image_excludes_style(self, slides_file: Path, tmp_path: Path, png_factory):
        """Test that a supplied image and a style cannot be combined."""
        image = tmp_path / "bg.png"
        image.write_bytes(png_factory((0, 0, 0)))
        params = _params(slides_file, tmp_path, background_image=image, background_style="gradient-dark")

        result = validate_carousel_generation_params(params)

        assert isinstance(result, Failure)
        assert "not both" in result.error


class TestInputLoading:
    """Tests for slides and brand config loading."""

    def test_plain_strings_are_numbered(self, slides_file: Path):
        """Test that string slides are numbered from 1."""
        slides = load_slides(slides_file)

        assert [s["slideNumber"] for s in slides] == [1, 2, 3]
        assert slides[0]["text"].startswith("3 ways")

    def test_object_with_slides_key(self, tmp_path: Path):
        """Test the wrapped object form."""
        path = tmp_path / "slides.json"
        path.write_text(json.dumps({"slides": [{"slideNumber": 4, "headline": "Hi"}]}), encoding="utf-8")

        assert load_slides(path) == [{"slideNumber": 4, "headline": "Hi"}]

    def test_rejects_other_shapes(self, tmp_path: Path):
        """Test that unsupported content raises ValueError."""
        path = tmp_path / "slides.json"
        path.write_text(json.dumps([1, 2]), encoding="utf-8")

        with pytest.raises(ValueError):
            load_slides(path)

    def test_brand_config_yaml(self, tmp_path: Path):
        """Test loading a brand config from YAML."""
        path = tmp_path / "brand.yaml"
        path.write_text("primaryColor: '#123456'\nimageStyle: photorealistic\n", encoding="utf-8")

        brand = load_brand_config(path)

        assert brand.primary_color == "#123456"
        assert brand.image_style == "photorealistic"


class TestCarouselService:
    """Tests for CarouselService."""

    @pytest.mark.asyncio
    async def test_invalid_request(self, tmp_path: Path):
        """Test that duplicate slide numbers become a Failure."""
        path = tmp_path / "slides.json"
        path.write_text(json.dumps([{"slideNumber": 1, "text": "a"}, {"slideNumber": 1, "text": "b"}]), encoding="utf-8")

        result = await CarouselService().generate(_params(path, tmp_path / "store"))

        assert isinstance(result, Failure)
        assert result.error == "Invalid carousel request"

    @pytest.mark.asyncio
    async def test_unreadable_slides(self, tmp_path: Path):
        """Test that malformed JSON becomes a Failure."""
        path = tmp_path / "slides.json"
        path.write_text("{broken", encoding="utf-8")

        result = await CarouselService().generate(_params(path, tmp_path / "store"))

        assert isinstance(result, Failure)
        assert result.error.startswith("Could not read input")

    @pytest.mark.asyncio
    async def test_generate_into_file_store(self, slides_file: Path, cli_env: Path):
        """Test a full generation through the service."""
        service = CarouselService()

        result = await service.generate(_params(slides_file, cli_env))

        assert isinstance(result, Success)
        assert result.value.success is True
        assert [img.template for img in result.value.images] == ["hook", "content", "cta"]
        assert all(Path(img.image_url).exists() for img in result.value.images)


class TestCommands:
    """Tests for the Typer commands."""

    def test_styles(self):
        """Test that the styles command lists presets."""
        result = runner.invoke(app, ["styles"])

        assert result.exit_code == 0
        assert "bold-editorial" in result.output
        assert "dark-coral" in result.output

    def test_generate_rejects_invalid_style(self, slides_file: Path, cli_env: Path):
        """Test that validation errors exit with status 1."""
        result = runner.invoke(app, ["generate", str(slides_file), "-c", "post-1", "-v", "oil-painting"])

        assert result.exit_code == 1
        assert "Invalid visual style" in result.output

    def test_generate_then_inspect(self, slides_file: Path, cli_env: Path):
        """Test generating a carousel and inspecting its job."""
        result = runner.invoke(app, ["generate", str(slides_file), "-c", "post-1", "--job-id", "job-cli"])

        assert result.exit_code == 0, result.output
        assert "Complete" in result.output
        assert len(list((cli_env / "content" / "post-1").glob("slide_*.png"))) == 3

        job_result = runner.invoke(app, ["job", "job-cli"])
        assert job_result.exit_code == 0
        assert JobStatus.COMPLETED.value in job_result.output

        jobs_result = runner.invoke(app, ["jobs", "post-1"])
        assert jobs_result.exit_code == 0
        assert "job-cli" in jobs_result.output

        cleanup_result = runner.invoke(app, ["cleanup", "post-1"])
        assert cleanup_result.exit_code == 0
        assert "Deleted 1" in cleanup_result.output

    def test_unknown_job(self, cli_env: Path):
        """Test that a missing job exits with status 1."""
        result = runner.invoke(app, ["job", "missing-job"])

        assert result.exit_code == 1
        assert "Job not found" in result.output
