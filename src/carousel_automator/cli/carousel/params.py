"""Immutable parameter dataclasses for carousel commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class CarouselGenerationParams:
    """Immutable parameters for carousel generation."""

    slides_file: Path
    content_id: str
    store_dir: Path
    visual_style: Optional[str]
    text_style: Optional[str]
    background_style: Optional[str]
    background_image: Optional[Path]
    design_preset: Optional[str]
    numbered: bool
    job_id: Optional[str]
    brand_config: Optional[Path]
    logo: Optional[Path]
    model: Optional[str]
    total_slides: Optional[int]

    @classmethod
    def from_cli(
        cls,
        slides_file: Path,
        content_id: str,
        store_dir: Optional[Path] = None,
        visual_style: Optional[str] = None,
        text_style: Optional[str] = None,
        background_style: Optional[str] = None,
        background_image: Optional[Path] = None,
        design_preset: Optional[str] = None,
        numbered: bool = False,
        job_id: Optional[str] = None,
        brand_config: Optional[Path] = None,
        logo: Optional[Path] = None,
        model: Optional[str] = None,
        total_slides: Optional[int] = None,
        **kwargs,
    ) -> "CarouselGenerationParams":
        """Create from CLI arguments with defaults from settings."""
        from ...config import get_settings

        return cls(
            slides_file=slides_file,
            content_id=content_id,
            store_dir=store_dir or get_settings().storage_dir,
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


@dataclass(frozen=True)
class JobQueryParams:
    """Immutable parameters for job inspection and cleanup."""

    store_dir: Path
    job_id: Optional[str] = None
    content_id: Optional[str] = None
    active_only: bool = False

    @classmethod
    def from_cli(
        cls,
        store_dir: Optional[Path] = None,
        job_id: Optional[str] = None,
        content_id: Optional[str] = None,
        active_only: bool = False,
        **kwargs,
    ) -> "JobQueryParams":
        """Create from CLI arguments with defaults from settings."""
        from ...config import get_settings

        return cls(
            store_dir=store_dir or get_settings().storage_dir,
            job_id=job_id,
            content_id=content_id,
            active_only=active_only,
        )
