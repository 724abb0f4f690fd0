"""Generation job records and their state machine."""

from .models import ContentImage, GenerationJob, ImageDimensions, JobMetadata, SlideStatus
from .tracker import GenerationJobTracker, JobCallback, loop_progress

__all__ = [
    "ContentImage",
    "GenerationJob",
    "ImageDimensions",
    "JobMetadata",
    "SlideStatus",
    "GenerationJobTracker",
    "JobCallback",
    "loop_progress",
]
