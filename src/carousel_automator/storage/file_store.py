"""File-system content store.

Layout under the root directory:

    jobs/<job_id>.json                     one camelCase JSON record per job
    content/<content_id>/slide_XX_<id>.png slide images
    content/<content_id>/images.json       image records for the content item
"""

from __future__ import annotations

import asyncio
import json
import os
from datetime import datetime, timezone
from pathlib import Path

from ..constants import ACTIVE_JOB_STATUSES
from ..exceptions import JobNotFoundError, StaleJobError, StoreError
from ..jobs.models import ContentImage, GenerationJob
from .base import ContentStore


def _write_atomic(path: Path, text: str) -> None:
    """Write a file so readers never observe a partial record."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(text, encoding="utf-8")
    os.replace(tmp_path, path)


class FileContentStore(ContentStore):
    """Content store persisting JSON records and PNG files to disk.

    Usage:
        store = FileContentStore(Path("data"))
        job = await store.get_job(job_id)
    """

    def __init__(self, root: Path):
        """Initialize the store.

        Args:
            root: Directory holding ``jobs/`` and ``content/``.
        """
        self.root = Path(root)
        self.jobs_dir = self.root / "jobs"
        self.content_dir = self.root / "content"
        self._lock = asyncio.Lock()

    def _job_path(self, job_id: str) -> Path:
        if not job_id or "/" in job_id or "\\" in job_id or job_id.startswith("."):
            raise StoreError(f"Invalid job id: {job_id!r}")
        return self.jobs_dir / f"{job_id}.json"

    def _content_path(self, content_id: str) -> Path:
        if not content_id or "/" in content_id or "\\" in content_id or content_id.startswith("."):
            raise StoreError(f"Invalid content id: {content_id!r}")
        return self.content_dir / content_id

    def _read_job(self, path: Path) -> GenerationJob:
        try:
            with open(path, encoding="utf-8") as f:
                return GenerationJob.model_validate(json.load(f))
        except (OSError, ValueError) as e:
            raise StoreError(f"Failed to read job record {path}: {e}") from e

    def _write_job(self, job: GenerationJob) -> None:
        _write_atomic(self._job_path(job.id), job.model_dump_json(indent=2, by_alias=True))

    async def create_job(self, job: GenerationJob) -> GenerationJob:
        async with self._lock:
            if self._job_path(job.id).exists():
                raise StoreError(f"Job already exists: {job.id}")
            self._write_job(job)
            return job

    async def get_job(self, job_id: str) -> GenerationJob | None:
        path = self._job_path(job_id)
        if not path.exists():
            return None
        return self._read_job(path)

    async def update_job(self, job: GenerationJob) -> GenerationJob:
        async with self._lock:
            path = self._job_path(job.id)
            if not path.exists():
                raise JobNotFoundError(job.id)
            stored = self._read_job(path)
            if stored.version != job.version:
                raise StaleJobError(job.id, job.version, stored.version)
            updated = job.model_copy(
                update={"version": job.version + 1, "updated_at": datetime.now(timezone.utc)},
                deep=True,
            )
            self._write_job(updated)
            return updated

    async def list_jobs(self, content_id: str, active_only: bool = False) -> list[GenerationJob]:
        if not self.jobs_dir.exists():
            return []
        jobs = []
        for path in self.jobs_dir.glob("*.json"):
            job = self._read_job(path)
            if job.content_id != content_id:
                continue
            if active_only and job.status not in ACTIVE_JOB_STATUSES:
                continue
            jobs.append(job)
        return sorted(jobs, key=lambda j: j.created_at, reverse=True)

    async def delete_finished_jobs(self, content_id: str) -> int:
        async with self._lock:
            deleted = 0
            for job in await self.list_jobs(content_id):
                if job.status.is_terminal:
                    self._job_path(job.id).unlink(missing_ok=True)
                    deleted += 1
            return deleted

    def _index_path(self, content_id: str) -> Path:
        return self._content_path(content_id) / "images.json"

    def _read_index(self, content_id: str) -> list[ContentImage]:
        path = self._index_path(content_id)
        if not path.exists():
            return []
        try:
            with open(path, encoding="utf-8") as f:
                return [ContentImage.model_validate(item) for item in json.load(f)]
        except (OSError, ValueError) as e:
            raise StoreError(f"Failed to read image index {path}: {e}") from e

    async def save_image(self, image: ContentImage, data: bytes) -> ContentImage:
        content_path = self._content_path(image.content_id)
        filename = f"slide_{image.slide_number:02d}_{image.id[:8]}.{image.format}"
        file_path = content_path / filename

        try:
            content_path.mkdir(parents=True, exist_ok=True)
            file_path.write_bytes(data)
        except OSError as e:
            raise StoreError(f"Failed to write image {file_path}: {e}") from e

        stored = image.model_copy(update={"url": str(file_path)})
        async with self._lock:
            records = self._read_index(image.content_id)
            records.append(stored)
            _write_atomic(
                self._index_path(image.content_id),
                json.dumps([r.model_dump(mode="json", by_alias=True) for r in records], indent=2),
            )
        return stored

    async def list_images(self, content_id: str) -> list[ContentImage]:
        images = self._read_index(content_id)
        return sorted(images, key=lambda img: (img.slide_number, img.created_at))
