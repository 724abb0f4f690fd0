"""Carousel CLI commands - thin wrappers orchestrating params, validation, display, and service."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from ...background.prompts import BACKGROUND_CATEGORIES
from ...design.presets import DESIGN_PRESETS, TEXT_STYLE_PRESETS
from ...jobs.models import GenerationJob
from ..core.console import console
from ..core.types import Failure
from .display import (
    show_carousel_error,
    show_cleanup_result,
    show_generation_config,
    show_generation_result,
    show_job,
    show_jobs_table,
    show_styles,
)
from .params import CarouselGenerationParams, JobQueryParams
from .service import CarouselService
from .validators import VALID_VISUAL_STYLES, validate_carousel_generation_params

_STORE_OPTION_HELP = "Store directory (default: CAROUSEL_STORAGE_DIR or ./data)"


def generate(
    slides_file: Path = typer.Argument(..., help="JSON file with the slides"),
    content_id: str = typer.Option(..., "--content-id", "-c", help="Content item the carousel belongs to"),
    visual_style: Optional[str] = typer.Option(None, "--visual-style", "-v", help="Visual style"),
    text_style: Optional[str] = typer.Option(None, "--text-style", "-t", help="Typography preset"),
    background_style: Optional[str] = typer.Option(None, "--background-style", "-b", help="Background to generate"),
    background_image: Optional[Path] = typer.Option(None, "--background-image", help="Use this image as background"),
    design_preset: Optional[str] = typer.Option(None, "--design-preset", "-d", help="Named design preset"),
    numbered: bool = typer.Option(False, "--numbered", help="Use numbered templates for middle slides"),
    job_id: Optional[str] = typer.Option(None, "--job-id", help="Reuse or create a job with this id"),
    brand_config: Optional[Path] = typer.Option(None, "--brand-config", help="Brand visual config YAML"),
    logo: Optional[Path] = typer.Option(None, "--logo", help="Logo image placed on every slide"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Image model for background generation"),
    total_slides: Optional[int] = typer.Option(None, "--total-slides", help="Slides in the full carousel"),
    store_dir: Optional[Path] = typer.Option(None, "--store-dir", "-s", help=_STORE_OPTION_HELP),
) -> None:
    """Generate carousel slide images from a slides file.

    The slides file is a JSON list of strings, or of objects with
    slideNumber and text (or headline/body/accentText/ctaText).

    Examples:
        # Typography carousel with a solid background
        carousel generate slides.json -c post-42 -v typography

        # Generate a shared background with the brand's colors
        carousel generate slides.json -c post-42 -b gradient-warm --brand-config brand.yaml
    """
    # Build immutable params from CLI args
    params = CarouselGenerationParams.from_cli(
        slides_file=slides_file,
        content_id=content_id,
        store_dir=store_dir,
        visual_style=visual_style,
        text_style=text_style,
        background_style=background_style,
        background_image=background_image,
        design_preset=design_preset,
        numbered=numbered,
        job_id=job_id,
        brand_config=brand_config,
        logo=logo,
        model=model,
        total_slides=total_slides,
    )

    # Validate params
    validation = validate_carousel_generation_params(params)
    if isinstance(validation, Failure):
        show_carousel_error(console, validation.error, validation.details)
        raise typer.Exit(1)

    # Display configuration
    show_generation_config(console, params)

    service = CarouselService()

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        TimeElapsedColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("Queued", total=100)

        async def on_update(job: GenerationJob) -> None:
            progress.update(task, completed=job.progress, description=job.current_step or job.status.value)

        result = asyncio.run(service.generate(params, progress_callback=on_update))

    if isinstance(result, Failure):
        show_carousel_error(console, result.error, result.details)
        raise typer.Exit(1)

    show_generation_result(console, result.value)

    if not result.value.success:
        raise typer.Exit(1)


def job(
    job_id: str = typer.Argument(..., help="Job id"),
    store_dir: Optional[Path] = typer.Option(None, "--store-dir", "-s", help=_STORE_OPTION_HELP),
) -> None:
    """Show a job's status and slide statuses."""
    params = JobQueryParams.from_cli(store_dir=store_dir, job_id=job_id)

    result = asyncio.run(CarouselService().get_job(params))
    if isinstance(result, Failure):
        show_carousel_error(console, result.error, result.details)
        raise typer.Exit(1)

    show_job(console, result.value)


def jobs(
    content_id: str = typer.Argument(..., help="Content id"),
    active_only: bool = typer.Option(False, "--active-only", "-a", help="Only pending or generating jobs"),
    store_dir: Optional[Path] = typer.Option(None, "--store-dir", "-s", help=_STORE_OPTION_HELP),
) -> None:
    """List generation jobs for a content item."""
    params = JobQueryParams.from_cli(store_dir=store_dir, content_id=content_id, active_only=active_only)

    result = asyncio.run(CarouselService().list_jobs(params))
    if isinstance(result, Failure):
        show_carousel_error(console, result.error, result.details)
        raise typer.Exit(1)

    show_jobs_table(console, content_id, result.value)


def cleanup(
    content_id: str = typer.Argument(..., help="Content id"),
    store_dir: Optional[Path] = typer.Option(None, "--store-dir", "-s", help=_STORE_OPTION_HELP),
) -> None:
    """Delete completed and failed jobs for a content item."""
    params = JobQueryParams.from_cli(store_dir=store_dir, content_id=content_id)

    result = asyncio.run(CarouselService().cleanup(params))
    if isinstance(result, Failure):
        show_carousel_error(console, result.error, result.details)
        raise typer.Exit(1)

    show_cleanup_result(console, content_id, result.value)


def styles() -> None:
    """List visual styles, text styles, background styles and design presets."""
    show_styles(
        console,
        visual_styles=VALID_VISUAL_STYLES,
        text_styles={name: preset.aesthetic for name, preset in TEXT_STYLE_PRESETS.items()},
        background_styles={category: list(keys) for category, keys in BACKGROUND_CATEGORIES.items()},
        design_presets=list(DESIGN_PRESETS),
    )
