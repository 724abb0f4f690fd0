"""Carousel pipeline orchestrating design, background, fonts and slides.

Sequence for one request:

    1. open the job (pending) and start it (generating)
    2. resolve the design context once
    3. acquire the shared background once
    4. load the font resource once (failure aborts the job)
    5. for each slide in ascending slide number: mark generating,
       composite, persist, mark completed or failed
    6. aggregate slide outcomes into the terminal job state

Slides are processed sequentially; a failing slide never stops the loop.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from ..background.provider import (
    BackgroundProvider,
    BackgroundResult,
    BrandColorHints,
    decode_background_image,
)
from ..config import CarouselSettings, get_settings
from ..constants import (
    CAROUSEL_HEIGHT,
    CAROUSEL_WIDTH,
    SLIDE_PROMPT_TEXT_LIMIT,
    ErrorCode,
    JobStatus,
)
from ..content.models import parse_slide_content
from ..design.compositor import SlideCompositor
from ..design.context import DesignContext, DesignContextInput, resolve_design_context
from ..design.fonts import FontResource, load_font_resource
from ..design.layout import select_template
from ..design.presets import DESIGN_PRESETS
from ..exceptions import FontLoadError, StoreError
from ..jobs.models import ContentImage, GenerationJob, ImageDimensions
from ..jobs.tracker import GenerationJobTracker, JobCallback
from ..providers.config import load_provider_config, resolve_image_model
from ..providers.image import ImageProvider
from ..storage.base import ContentStore
from .models import (
    CarouselRequest,
    CarouselResult,
    DesignSummary,
    SlideError,
    SlideImageResult,
)

# Logger
_logger = logging.getLogger("carousel_jobs")

FontLoader = Callable[[], Awaitable[FontResource]]
CompositorFactory = Callable[[FontResource, "bytes | None"], SlideCompositor]


class CarouselPipeline:
    """Generate a carousel of visually consistent slide images.

    Usage:
        pipeline = CarouselPipeline(store=FileContentStore(Path("data")))
        result = await pipeline.generate(CarouselRequest(
            content_id="content-123",
            slides=[
                SlideInput(slide_number=1, text="Hook line."),
                SlideInput(slide_number=2, text="Body line one. Body line two."),
            ],
            visual_style="typography",
        ))
        print(result.to_response())
    """

    def __init__(
        self,
        store: ContentStore,
        image_provider: ImageProvider | None = None,
        settings: CarouselSettings | None = None,
        font_loader: FontLoader | None = None,
        compositor_factory: CompositorFactory = SlideCompositor,
        progress_callback: JobCallback | None = None,
        dimensions: tuple[int, int] = (CAROUSEL_WIDTH, CAROUSEL_HEIGHT),
    ):
        """Initialize the pipeline.

        Args:
            store: Persistent store for jobs and images.
            image_provider: Image generation provider. Created from the
                providers config on first use when omitted, and then
                closed by the pipeline at the end of each run.
            settings: Runtime settings. Defaults to the environment.
            font_loader: Coroutine returning the font resource.
            compositor_factory: Builds the compositor from fonts and logo.
            progress_callback: Called with the job after every update.
            dimensions: Slide canvas (width, height).
        """
        self.store = store
        self.settings = settings or get_settings()
        self._image_provider = image_provider
        self._owns_image_provider = image_provider is None
        self._font_loader = font_loader or self._load_fonts
        self.compositor_factory = compositor_factory
        self.progress_callback = progress_callback
        self.dimensions = dimensions

    @property
    def image_provider(self) -> ImageProvider:
        """Image provider, created lazily from the providers config."""
        if self._image_provider is None:
            self._image_provider = ImageProvider(load_provider_config(self.settings.providers_config))
        return self._image_provider

    async def _close_owned_provider(self) -> None:
        if self._owns_image_provider and self._image_provider is not None:
            await self._image_provider.close()
            self._image_provider = None

    async def _load_fonts(self) -> FontResource:
        return await load_font_resource(
            url=self.settings.font_url,
            path=self.settings.font_path,
            timeout=self.settings.font_timeout_seconds,
        )

    def _design_input(self, request: CarouselRequest) -> DesignContextInput:
        brand = request.brand_visual_config
        visual_style = request.visual_style or (brand.image_style if brand else None)
        return DesignContextInput(
            visual_style=visual_style,
            text_style=request.text_style,
            design_preset=request.design_preset,
            brand_visual_config=brand,
        )

    async def _acquire_background(self, request: CarouselRequest) -> BackgroundResult:
        supplied = None
        if request.background_image is not None:
            try:
                supplied = decode_background_image(request.background_image)
            except ValueError as e:
                _logger.warning(f"BACKGROUND | INVALID_SUPPLIED | error:{e}")
                return BackgroundResult.none(error=str(e))

        # Only build a provider when a generation can actually happen
        if supplied is None and not request.background_style:
            return BackgroundResult.none()

        brand = request.brand_visual_config
        hints = BrandColorHints(
            primary_color=brand.primary_color if brand else None,
            master_brand_prompt=brand.master_brand_prompt if brand else None,
        )
        provider = BackgroundProvider(
            self.image_provider if supplied is None else None,
            model=resolve_image_model(request.model or self.settings.image_model),
        )
        return await provider.acquire(request.background_style, hints, supplied=supplied)

    async def generate(self, request: CarouselRequest) -> CarouselResult:
        """Run the full pipeline for one request.

        Args:
            request: Carousel request.

        Returns:
            Result with generated images, design and error summary.

        Raises:
            JobStateError: If ``request.job_id`` names a non-pending job.
            StoreError: If the job record cannot be persisted.
        """
        tracker = await GenerationJobTracker.open(
            self.store,
            content_id=request.content_id,
            slide_numbers=[s.slide_number for s in request.slides],
            job_id=request.job_id,
            callback=self.progress_callback,
        )
        job_id = tracker.job_id
        preset_label = request.design_preset if request.design_preset in DESIGN_PRESETS else "custom"

        _logger.info(
            f"JOB:{job_id} | PIPELINE_START | content:{request.content_id} | "
            f"slides:{len(request.slides)} | style:{request.visual_style} | "
            f"background:{request.background_style}"
        )

        try:
            await tracker.begin("Resolving design")
            design = resolve_design_context(self._design_input(request))
            summary = DesignSummary(preset=preset_label, system=design)

            await tracker.set_step("Generating background")
            background = await self._acquire_background(request)

            await tracker.set_step("Loading fonts")
            try:
                fonts = await self._font_loader()
            except FontLoadError as e:
                job = await tracker.fail(ErrorCode.FONT_ERROR, str(e))
                return self._build_result(job, [], summary, background)

            compositor = self.compositor_factory(fonts, request.logo_image)
            images = await self._composite_slides(request, tracker, compositor, design, background)

            job = await tracker.finalize(background_error=background.error)

        except StoreError:
            raise
        except Exception as e:
            if not tracker.job.status.is_terminal:
                await tracker.fail(ErrorCode.PIPELINE_ERROR, str(e) or type(e).__name__)
            raise
        finally:
            await self._close_owned_provider()

        _logger.info(
            f"JOB:{job_id} | PIPELINE_DONE | status:{job.status.value} | "
            f"images:{len(images)}/{len(request.slides)}"
        )
        return self._build_result(job, images, summary, background)

    async def _composite_slides(
        self,
        request: CarouselRequest,
        tracker: GenerationJobTracker,
        compositor: SlideCompositor,
        design: DesignContext,
        background: BackgroundResult,
    ) -> list[SlideImageResult]:
        """Composite and persist every slide in ascending slide number."""
        width, height = self.dimensions
        slides = request.ordered_slides
        total = len(slides)
        carousel_length = request.carousel_length
        images: list[SlideImageResult] = []

        for position, slide in enumerate(slides, start=1):
            slide_number = slide.slide_number
            template = select_template(slide_number - 1, carousel_length, request.use_numbered_slides)

            await tracker.start_slide(slide_number, position, total)

            try:
                content = parse_slide_content(slide, template)
                png_bytes = compositor.composite(
                    background.image,
                    content,
                    design,
                    template,
                    (width, height),
                )
                record = ContentImage(
                    content_id=request.content_id,
                    slide_number=slide_number,
                    prompt=f"[Slide {slide_number}] Composite: {slide.source_text[:SLIDE_PROMPT_TEXT_LIMIT]}",
                    is_primary=slide_number == 1,
                    dimensions=ImageDimensions(width=width, height=height),
                )
                saved = await self.store.save_image(record, png_bytes)
            except Exception as e:
                # One slide's failure never stops the remaining slides
                await tracker.fail_slide(slide_number, position, total, str(e) or type(e).__name__)
                continue

            await tracker.complete_slide(slide_number, position, total)
            images.append(SlideImageResult(
                slide_number=slide_number,
                image_url=saved.url or "",
                saved_image_id=saved.id,
                template=template.value,
            ))

        return images

    def _build_result(
        self,
        job: GenerationJob,
        images: list[SlideImageResult],
        design: DesignSummary,
        background: BackgroundResult,
    ) -> CarouselResult:
        slide_errors = [
            SlideError(slide_number=s.slide_number, error=s.error or "Unknown error")
            for s in job.failed_slides
        ]
        return CarouselResult(
            success=job.status == JobStatus.COMPLETED,
            job_id=job.id,
            images=images,
            design=design,
            background_generated=background.generated,
            background_error=background.error,
            slide_errors=slide_errors,
            error=job.error_message if job.status == JobStatus.FAILED else None,
            error_code=job.error_code,
        )
