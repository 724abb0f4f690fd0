"""Data models for generation jobs and persisted images."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..constants import (
    CAROUSEL_ASPECT_RATIO,
    CAROUSEL_HEIGHT,
    CAROUSEL_WIDTH,
    GENERATOR_TAG,
    IMAGE_FORMAT,
    JOB_TYPE_COMPOSITE,
    JobStatus,
    SlideStatusValue,
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    """Generate a record id."""
    return str(uuid.uuid4())


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SlideStatus(_CamelModel):
    """Progress of one slide inside a job."""

    slide_number: int
    status: SlideStatusValue = SlideStatusValue.PENDING
    error: str | None = None


class JobMetadata(_CamelModel):
    """Job metadata embedded in the job record."""

    slide_statuses: list[SlideStatus] = Field(default_factory=list)
    extra: dict[str, Any] = Field(default_factory=dict)


class GenerationJob(_CamelModel):
    """Lifecycle record of one carousel generation request.

    ``version`` increases with every persisted update and guards
    read-modify-write cycles against concurrent writers.
    """

    id: str = Field(default_factory=new_id)
    content_id: str
    type: str = JOB_TYPE_COMPOSITE
    status: JobStatus = JobStatus.PENDING
    progress: int = Field(default=0, ge=0, le=100)
    total_items: int = 0
    completed_items: int = 0
    current_step: str | None = None
    error_message: str | None = None
    error_code: str | None = None
    error_details: dict[str, Any] | None = None
    metadata: JobMetadata = Field(default_factory=JobMetadata)
    version: int = 0
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    @property
    def slide_statuses(self) -> list[SlideStatus]:
        return self.metadata.slide_statuses

    def slide_status(self, slide_number: int) -> SlideStatus | None:
        """Find the status entry for a slide."""
        for entry in self.metadata.slide_statuses:
            if entry.slide_number == slide_number:
                return entry
        return None

    @property
    def failed_slides(self) -> list[SlideStatus]:
        return [s for s in self.metadata.slide_statuses if s.status == SlideStatusValue.FAILED]

    @property
    def completed_slides(self) -> list[SlideStatus]:
        return [s for s in self.metadata.slide_statuses if s.status == SlideStatusValue.COMPLETED]


class ImageDimensions(_CamelModel):
    """Dimensions and generator of a persisted image."""

    width: int = CAROUSEL_WIDTH
    height: int = CAROUSEL_HEIGHT
    aspect_ratio: str = CAROUSEL_ASPECT_RATIO
    model: str = GENERATOR_TAG


class ContentImage(_CamelModel):
    """A persisted slide image. Never mutated after creation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(default_factory=new_id)
    content_id: str
    slide_number: int
    prompt: str
    url: str | None = None
    is_primary: bool = False
    format: str = IMAGE_FORMAT
    dimensions: ImageDimensions = Field(default_factory=ImageDimensions)
    created_at: datetime = Field(default_factory=_now)
