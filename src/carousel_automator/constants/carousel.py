"""Carousel constants for Carousel Automator.

This module contains the fixed values every carousel job shares:
- Canvas dimensions and aspect ratio
- Layout padding and default font family
- Progress milestones for job tracking
- Persisted artifact metadata

MODIFICATION GUIDE:
------------------
- CAROUSEL_* dimensions follow the Instagram 4:5 portrait format
- PROGRESS_* values must stay ordered: SETUP < LOOP_BASE < LOOP_BASE + LOOP_SPAN <= DONE
"""

from typing import Final

# =============================================================================
# CANVAS
# =============================================================================

CAROUSEL_WIDTH: Final[int] = 1080
"""Width of every carousel slide in pixels."""

CAROUSEL_HEIGHT: Final[int] = 1350
"""Height of every carousel slide in pixels."""

CAROUSEL_ASPECT_RATIO: Final[str] = "4:5"
"""Aspect ratio hint sent to image generators and stored with each image."""


# =============================================================================
# LAYOUT
# =============================================================================

DEFAULT_FONT_FAMILY: Final[str] = "Inter"
"""Font family name recorded in every design context."""

PADDING_X: Final[int] = 60
"""Horizontal padding of the slide layout."""

PADDING_Y: Final[int] = 80
"""Vertical padding of the slide layout."""

TEXT_BACKING_COLOR: Final[str] = "rgba(0, 0, 0, 0.55)"
"""Translucent panel drawn behind text when a background image is present."""

TEXT_BACKING_RADIUS: Final[int] = 16
"""Corner radius of the text backing panel."""

TEXT_BACKING_PADDING: Final[tuple[int, int]] = (50, 40)
"""Horizontal and vertical padding inside the text backing panel."""

LOGO_WIDTH_RATIO: Final[float] = 0.12
"""Logo width as a fraction of the canvas width."""

LOGO_MARGIN: Final[int] = 20
"""Distance between the logo and the canvas edges."""

LOGO_OPACITY: Final[float] = 0.9
"""Opacity applied to the logo overlay."""


# =============================================================================
# SLIDE CONTENT
# =============================================================================

DEFAULT_CTA_TEXT: Final[str] = "Follow for More"
"""Call-to-action label used when a CTA slide supplies none."""

SLIDE_PROMPT_TEXT_LIMIT: Final[int] = 100
"""Characters of slide text kept in a persisted image prompt."""


# =============================================================================
# PROGRESS
# =============================================================================

PROGRESS_SETUP: Final[int] = 5
"""Progress reported once work starts."""

PROGRESS_LOOP_BASE: Final[int] = 10
"""Progress reserved for setup before the slide loop."""

PROGRESS_LOOP_SPAN: Final[int] = 80
"""Progress range covered by the slide loop."""

PROGRESS_DONE: Final[int] = 100
"""Progress of a job in a terminal state."""


# =============================================================================
# PERSISTED ARTIFACTS
# =============================================================================

IMAGE_FORMAT: Final[str] = "png"
"""Encoding of composited slides."""

GENERATOR_TAG: Final[str] = "composite"
"""Generator tag stored with composited slide images."""

JOB_TYPE_COMPOSITE: Final[str] = "composite"
"""Job type for carousel composite generation."""
