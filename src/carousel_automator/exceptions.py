"""Exception hierarchy for carousel generation."""

from __future__ import annotations


class CarouselError(Exception):
    """Base class for all carousel generation errors."""


class FontLoadError(CarouselError):
    """The font resource could not be fetched or parsed."""


class BackgroundGenerationError(CarouselError):
    """The image generation service did not return a usable background."""


class MissingCredentialsError(BackgroundGenerationError):
    """No enabled image provider has an API key configured."""


class RenderError(CarouselError):
    """A layout tree could not be rendered or composited."""


class JobStateError(CarouselError):
    """A job transition is not allowed from its current state."""


class StoreError(CarouselError):
    """A persistent store operation failed."""


class StaleJobError(StoreError):
    """A job update was based on an outdated version of the record."""

    def __init__(self, job_id: str, expected: int, actual: int):
        super().__init__(
            f"Job {job_id} changed concurrently (expected version {expected}, found {actual})"
        )
        self.job_id = job_id
        self.expected = expected
        self.actual = actual


class JobNotFoundError(StoreError):
    """No job exists with the requested id."""

    def __init__(self, job_id: str):
        super().__init__(f"Job not found: {job_id}")
        self.job_id = job_id
