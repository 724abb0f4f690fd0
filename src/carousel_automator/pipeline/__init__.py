"""Carousel generation pipeline."""

from .models import CarouselRequest, CarouselResult, DesignSummary, SlideError, SlideImageResult
from .orchestrator import CarouselPipeline

__all__ = [
    "CarouselPipeline",
    "CarouselRequest",
    "CarouselResult",
    "DesignSummary",
    "SlideError",
    "SlideImageResult",
]
