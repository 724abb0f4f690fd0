"""Carousel Automator - consistent multi-slide social carousels.

Resolves one design context per carousel, acquires one shared
background, and composites every slide's text onto it while tracking
job progress for polling clients.

Usage:
    from carousel_automator import CarouselPipeline, CarouselRequest, SlideInput
    from carousel_automator.storage import FileContentStore

    pipeline = CarouselPipeline(store=FileContentStore(Path("data")))
    result = await pipeline.generate(CarouselRequest(
        content_id="post-42",
        slides=[SlideInput(slide_number=1, text="Hook line.")],
    ))
"""

from .content import SlideInput
from .pipeline import CarouselPipeline, CarouselRequest, CarouselResult

__version__ = "0.1.0"

__all__ = [
    "CarouselPipeline",
    "CarouselRequest",
    "CarouselResult",
    "SlideInput",
    "__version__",
]
