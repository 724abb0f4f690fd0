"""Persistent store interface for jobs and slide images."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..jobs.models import ContentImage, GenerationJob


class ContentStore(ABC):
    """Narrow create/update/select interface used by the pipeline.

    Implementations must persist every call immediately so pollers see
    live progress. ``update_job`` is an optimistic read-modify-write:
    the stored version must equal the incoming job's version, and the
    stored record gets ``version + 1``.
    """

    @abstractmethod
    async def create_job(self, job: GenerationJob) -> GenerationJob:
        """Insert a new job record.

        Raises:
            StoreError: If a job with the same id exists.
        """

    @abstractmethod
    async def get_job(self, job_id: str) -> GenerationJob | None:
        """Fetch a job by id."""

    @abstractmethod
    async def update_job(self, job: GenerationJob) -> GenerationJob:
        """Replace a job record.

        Returns:
            The stored job with its new version.

        Raises:
            JobNotFoundError: If the job does not exist.
            StaleJobError: If the stored version differs from ``job.version``.
        """

    @abstractmethod
    async def list_jobs(self, content_id: str, active_only: bool = False) -> list[GenerationJob]:
        """List jobs of a content item, newest first."""

    @abstractmethod
    async def delete_finished_jobs(self, content_id: str) -> int:
        """Delete completed and failed jobs of a content item.

        Returns:
            Number of deleted jobs.
        """

    @abstractmethod
    async def save_image(self, image: ContentImage, data: bytes) -> ContentImage:
        """Persist slide image bytes and their record.

        Returns:
            The stored record with its ``url`` set.
        """

    @abstractmethod
    async def list_images(self, content_id: str) -> list[ContentImage]:
        """List images of a content item in slide order."""
