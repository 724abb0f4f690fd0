"""In-memory content store."""

from __future__ import annotations

import asyncio
import base64
from datetime import datetime, timezone

from ..constants import ACTIVE_JOB_STATUSES
from ..exceptions import JobNotFoundError, StaleJobError, StoreError
from ..jobs.models import ContentImage, GenerationJob
from .base import ContentStore


class InMemoryContentStore(ContentStore):
    """Content store kept in process memory.

    Images are stored as ``data:image/png;base64,...`` URLs. Records are
    copied on the way in and out so callers never share state with the
    store.

    Usage:
        store = InMemoryContentStore()
        job = await store.create_job(GenerationJob(content_id="c-1"))
    """

    def __init__(self):
        self._jobs: dict[str, GenerationJob] = {}
        self._images: dict[str, ContentImage] = {}
        self._image_data: dict[str, bytes] = {}
        self._lock = asyncio.Lock()

    async def create_job(self, job: GenerationJob) -> GenerationJob:
        async with self._lock:
            if job.id in self._jobs:
                raise StoreError(f"Job already exists: {job.id}")
            self._jobs[job.id] = job.model_copy(deep=True)
            return job.model_copy(deep=True)

    async def get_job(self, job_id: str) -> GenerationJob | None:
        job = self._jobs.get(job_id)
        return job.model_copy(deep=True) if job else None

    async def update_job(self, job: GenerationJob) -> GenerationJob:
        async with self._lock:
            stored = self._jobs.get(job.id)
            if stored is None:
                raise JobNotFoundError(job.id)
            if stored.version != job.version:
                raise StaleJobError(job.id, job.version, stored.version)
            updated = job.model_copy(
                update={"version": job.version + 1, "updated_at": datetime.now(timezone.utc)},
                deep=True,
            )
            self._jobs[job.id] = updated
            return updated.model_copy(deep=True)

    async def list_jobs(self, content_id: str, active_only: bool = False) -> list[GenerationJob]:
        jobs = [
            job.model_copy(deep=True)
            for job in self._jobs.values()
            if job.content_id == content_id
            and (not active_only or job.status in ACTIVE_JOB_STATUSES)
        ]
        return sorted(jobs, key=lambda j: j.created_at, reverse=True)

    async def delete_finished_jobs(self, content_id: str) -> int:
        async with self._lock:
            finished = [
                job_id
                for job_id, job in self._jobs.items()
                if job.content_id == content_id and job.status.is_terminal
            ]
            for job_id in finished:
                del self._jobs[job_id]
            return len(finished)

    async def save_image(self, image: ContentImage, data: bytes) -> ContentImage:
        url = f"data:image/{image.format};base64,{base64.b64encode(data).decode('ascii')}"
        stored = image.model_copy(update={"url": url})
        async with self._lock:
            self._images[stored.id] = stored
            self._image_data[stored.id] = data
        return stored

    async def list_images(self, content_id: str) -> list[ContentImage]:
        images = [img for img in self._images.values() if img.content_id == content_id]
        return sorted(images, key=lambda img: (img.slide_number, img.created_at))

    def image_bytes(self, image_id: str) -> bytes | None:
        """Raw bytes of a stored image."""
        return self._image_data.get(image_id)
