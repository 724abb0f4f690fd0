"""Carousel feature - generation and job inspection commands."""

from .commands import cleanup, generate, job, jobs, styles
from .params import CarouselGenerationParams, JobQueryParams
from .service import CarouselService

__all__ = [
    "generate",
    "job",
    "jobs",
    "cleanup",
    "styles",
    "CarouselGenerationParams",
    "JobQueryParams",
    "CarouselService",
]
