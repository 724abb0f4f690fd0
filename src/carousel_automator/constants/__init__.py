"""Global constants package for Carousel Automator.

PACKAGE STRUCTURE:
-----------------
- carousel.py : Canvas dimensions, layout padding, progress milestones
- status.py   : Job/slide status enums, template kinds, visual styles, error codes

USAGE EXAMPLES:
--------------
    from carousel_automator.constants import CAROUSEL_WIDTH, CAROUSEL_HEIGHT
    from carousel_automator.constants import JobStatus, TemplateKind
"""

from .carousel import (
    CAROUSEL_ASPECT_RATIO,
    CAROUSEL_HEIGHT,
    CAROUSEL_WIDTH,
    DEFAULT_CTA_TEXT,
    DEFAULT_FONT_FAMILY,
    GENERATOR_TAG,
    IMAGE_FORMAT,
    JOB_TYPE_COMPOSITE,
    LOGO_MARGIN,
    LOGO_OPACITY,
    LOGO_WIDTH_RATIO,
    PADDING_X,
    PADDING_Y,
    PROGRESS_DONE,
    PROGRESS_LOOP_BASE,
    PROGRESS_LOOP_SPAN,
    PROGRESS_SETUP,
    SLIDE_PROMPT_TEXT_LIMIT,
    TEXT_BACKING_COLOR,
    TEXT_BACKING_PADDING,
    TEXT_BACKING_RADIUS,
)
from .status import (
    ACTIVE_JOB_STATUSES,
    ErrorCode,
    JobStatus,
    SlideStatusValue,
    TemplateKind,
    VisualStyle,
)

__all__ = [
    # Canvas
    "CAROUSEL_WIDTH",
    "CAROUSEL_HEIGHT",
    "CAROUSEL_ASPECT_RATIO",
    # Layout
    "DEFAULT_FONT_FAMILY",
    "PADDING_X",
    "PADDING_Y",
    "TEXT_BACKING_COLOR",
    "TEXT_BACKING_RADIUS",
    "TEXT_BACKING_PADDING",
    "LOGO_WIDTH_RATIO",
    "LOGO_MARGIN",
    "LOGO_OPACITY",
    # Content
    "DEFAULT_CTA_TEXT",
    "SLIDE_PROMPT_TEXT_LIMIT",
    # Progress
    "PROGRESS_SETUP",
    "PROGRESS_LOOP_BASE",
    "PROGRESS_LOOP_SPAN",
    "PROGRESS_DONE",
    # Artifacts
    "IMAGE_FORMAT",
    "GENERATOR_TAG",
    "JOB_TYPE_COMPOSITE",
    # Status
    "JobStatus",
    "SlideStatusValue",
    "ACTIVE_JOB_STATUSES",
    "ErrorCode",
    "TemplateKind",
    "VisualStyle",
]
