"""Stateless service for carousel generation and job inspection."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ...design.context import BrandVisualConfig
from ...exceptions import CarouselError
from ...jobs.models import GenerationJob
from ...jobs.tracker import JobCallback
from ...pipeline import CarouselPipeline, CarouselRequest, CarouselResult
from ...storage import FileContentStore
from ..core.types import Failure, Result, Success
from .params import CarouselGenerationParams, JobQueryParams


def load_slides(path: Path) -> list[dict[str, Any]]:
    """Load slide definitions from a JSON file.

    The file holds either a list of slides or an object with a
    ``slides`` key. A list of plain strings is numbered from 1.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("slides", [])
    if not isinstance(data, list):
        raise ValueError("Slides file must contain a list of slides")

    slides = []
    for index, item in enumerate(data, start=1):
        if isinstance(item, str):
            slides.append({"slideNumber": index, "text": item})
        elif isinstance(item, dict):
            slides.append(item)
        else:
            raise ValueError(f"Slide #{index} must be a string or an object")
    return slides


def load_brand_config(path: Path) -> BrandVisualConfig:
    """Load a brand visual configuration from a YAML file."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return BrandVisualConfig.model_validate(data)


class CarouselService:
    """Stateless service for carousel commands.

    All state is passed via params - no instance state.
    """

    def build_request(self, params: CarouselGenerationParams) -> CarouselRequest:
        """Build a pipeline request from CLI params.

        Raises:
            ValueError: If an input file is malformed.
            ValidationError: If the request is invalid.
        """
        return CarouselRequest(
            content_id=params.content_id,
            slides=load_slides(params.slides_file),
            visual_style=params.visual_style,
            text_style=params.text_style,
            background_style=params.background_style,
            background_image=params.background_image.read_bytes() if params.background_image else None,
            design_preset=params.design_preset,
            use_numbered_slides=params.numbered,
            job_id=params.job_id,
            brand_visual_config=load_brand_config(params.brand_config) if params.brand_config else None,
            logo_image=params.logo.read_bytes() if params.logo else None,
            model=params.model,
            total_slides=params.total_slides,
        )

    async def generate(
        self,
        params: CarouselGenerationParams,
        progress_callback: JobCallback | None = None,
    ) -> Result[CarouselResult]:
        """Generate a carousel into the file store.

        Returns:
            Result containing the pipeline result or Failure
        """
        try:
            request = self.build_request(params)
        except ValidationError as e:
            errors = {".".join(str(p) for p in err["loc"]) or "request": err["msg"] for err in e.errors()}
            return Failure("Invalid carousel request", errors)
        except (OSError, ValueError, yaml.YAMLError) as e:
            return Failure(f"Could not read input: {e}")

        pipeline = CarouselPipeline(
            store=FileContentStore(params.store_dir),
            progress_callback=progress_callback,
        )
        try:
            result = await pipeline.generate(request)
        except CarouselError as e:
            return Failure(str(e), {"type": type(e).__name__})

        return Success(result)

    async def get_job(self, params: JobQueryParams) -> Result[GenerationJob]:
        """Load one job by id."""
        store = FileContentStore(params.store_dir)
        try:
            job = await store.get_job(params.job_id or "")
        except CarouselError as e:
            return Failure(str(e))
        if job is None:
            return Failure(f"Job not found: {params.job_id}", {"store": str(params.store_dir)})
        return Success(job)

    async def list_jobs(self, params: JobQueryParams) -> Result[list[GenerationJob]]:
        """List jobs of a content item, newest first."""
        store = FileContentStore(params.store_dir)
        try:
            jobs = await store.list_jobs(params.content_id or "", active_only=params.active_only)
        except CarouselError as e:
            return Failure(str(e))
        return Success(jobs)

    async def cleanup(self, params: JobQueryParams) -> Result[int]:
        """Delete finished jobs of a content item."""
        store = FileContentStore(params.store_dir)
        try:
            deleted = await store.delete_finished_jobs(params.content_id or "")
        except CarouselError as e:
            return Failure(str(e))
        return Success(deleted)
