"""Status enums and state constants for Carousel Automator.

This module contains the enums shared across the pipeline:
- Job and slide lifecycle states
- Template kinds and visual styles
- Error codes surfaced on failed or partially failed jobs

AI CONTEXT:
-----------
Job status is a small state machine:
  PENDING -> GENERATING -> COMPLETED
                  |
                  v
               FAILED

COMPLETED and FAILED are terminal. A completed job may still carry an
error message and details when some slides (or the background) failed.

MODIFICATION GUIDE:
------------------
- Add new enum values at the END to maintain backwards compatibility
- Values are persisted in job records, do not rename existing ones
"""

from enum import Enum
from typing import Final


# =============================================================================
# JOB LIFECYCLE
# =============================================================================

class JobStatus(str, Enum):
    """Status of a generation job.

    Workflow:
        PENDING -> GENERATING -> COMPLETED | FAILED
    """

    PENDING = "pending"
    """Job created, work not started."""

    GENERATING = "generating"
    """Background, fonts or slides are being produced."""

    COMPLETED = "completed"
    """At least one slide was produced."""

    FAILED = "failed"
    """No slide was produced or a fatal error aborted the job."""

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition is allowed."""
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


class SlideStatusValue(str, Enum):
    """Status of one slide inside a job."""

    PENDING = "pending"
    GENERATING = "generating"
    COMPLETED = "completed"
    FAILED = "failed"


ACTIVE_JOB_STATUSES: Final[tuple[JobStatus, ...]] = (
    JobStatus.PENDING,
    JobStatus.GENERATING,
)
"""Statuses of jobs still in progress."""


# =============================================================================
# ERROR CODES
# =============================================================================

class ErrorCode(str, Enum):
    """Error codes recorded on jobs."""

    FONT_ERROR = "FONT_ERROR"
    """Font resource could not be loaded, no slide was attempted."""

    ALL_FAILED = "ALL_FAILED"
    """Every slide failed."""

    PARTIAL_FAILURE = "PARTIAL_FAILURE"
    """Job completed but some slides or the background failed."""

    PIPELINE_ERROR = "PIPELINE_ERROR"
    """Unexpected error outside the per-slide loop."""


# =============================================================================
# DESIGN
# =============================================================================

class TemplateKind(str, Enum):
    """Slide layout templates."""

    HOOK = "hook"
    """Opening slide: large centered headline with accent underline."""

    CONTENT = "content"
    """Middle slide: headline, optional accent line and body."""

    NUMBERED = "numbered"
    """Middle slide with a large zero-padded slide number."""

    CTA = "cta"
    """Closing slide with a call-to-action pill."""


class VisualStyle(str, Enum):
    """Supported carousel visual styles."""

    TYPOGRAPHY = "typography"
    PHOTOREALISTIC = "photorealistic"
    ILLUSTRATION = "illustration"
    RENDER_3D = "3d-render"
    ABSTRACT_ART = "abstract-art"
    COLLAGE = "collage"
