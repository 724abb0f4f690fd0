"""Generation job state machine.

Owns one ``GenerationJob`` and its embedded slide statuses. Every
transition is persisted immediately through the content store so a
polling client always sees the latest step.

States:
    pending -> generating -> completed | failed

Terminal states accept no further transitions.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from ..constants import (
    JOB_TYPE_COMPOSITE,
    PROGRESS_DONE,
    PROGRESS_LOOP_BASE,
    PROGRESS_LOOP_SPAN,
    PROGRESS_SETUP,
    ErrorCode,
    JobStatus,
    SlideStatusValue,
)
from ..exceptions import JobStateError
from .models import GenerationJob, JobMetadata, SlideStatus

if TYPE_CHECKING:
    from ..storage.base import ContentStore

# Logger for job events
_logger = logging.getLogger("carousel_jobs")

# Type for job update callback
JobCallback = Callable[[GenerationJob], Awaitable[None]]


def loop_progress(position: int, total: int) -> int:
    """Progress after ``position`` of ``total`` slides were processed."""
    if total <= 0:
        return PROGRESS_LOOP_BASE
    return PROGRESS_LOOP_BASE + round(position / total * PROGRESS_LOOP_SPAN)


class GenerationJobTracker:
    """Track a generation job through its lifecycle.

    Usage:
        tracker = await GenerationJobTracker.open(store, "content-1", [1, 2, 3])
        await tracker.begin("Generating background")
        await tracker.start_slide(1)
        await tracker.complete_slide(1, position=1, total=3)
        ...
        job = await tracker.finalize()
    """

    def __init__(
        self,
        store: ContentStore,
        job: GenerationJob,
        callback: JobCallback | None = None,
    ):
        """Initialize the tracker around a persisted job.

        Args:
            store: Store the job lives in.
            job: The job as currently persisted.
            callback: Optional coroutine called after every persisted change.
        """
        self.store = store
        self.callback = callback
        self._job = job

    @classmethod
    async def open(
        cls,
        store: ContentStore,
        content_id: str,
        slide_numbers: list[int],
        job_id: str | None = None,
        job_type: str = JOB_TYPE_COMPOSITE,
        callback: JobCallback | None = None,
    ) -> "GenerationJobTracker":
        """Create a pending job, or reuse a caller-supplied pending one.

        Args:
            store: Content store.
            content_id: Content item the carousel belongs to.
            slide_numbers: Requested slide numbers.
            job_id: Optional id of a job to reuse (or create with this id).
            job_type: Job type label.
            callback: Optional update callback.

        Returns:
            Tracker with the job seeded: status pending, progress 0 and
            one pending status per slide.

        Raises:
            JobStateError: If ``job_id`` names a job that is not pending.
        """
        statuses = [SlideStatus(slide_number=n) for n in sorted(slide_numbers)]
        seed: dict[str, Any] = {
            "content_id": content_id,
            "type": job_type,
            "status": JobStatus.PENDING,
            "progress": 0,
            "total_items": len(statuses),
            "completed_items": 0,
            "current_step": "Queued",
            "error_message": None,
            "error_code": None,
            "error_details": None,
            "metadata": JobMetadata(slide_statuses=statuses),
        }

        existing = await store.get_job(job_id) if job_id else None
        if existing is not None:
            if existing.status != JobStatus.PENDING:
                raise JobStateError(
                    f"Job {existing.id} is {existing.status.value}, only pending jobs can be reused"
                )
            job = await store.update_job(existing.model_copy(update=seed))
            _logger.info(f"JOB:{job.id} | REUSED | content:{content_id} | slides:{len(statuses)}")
        else:
            fields = {**seed, "id": job_id} if job_id else seed
            job = await store.create_job(GenerationJob(**fields))
            _logger.info(f"JOB:{job.id} | CREATED | content:{content_id} | slides:{len(statuses)}")

        tracker = cls(store, job, callback)
        await tracker._emit()
        return tracker

    @property
    def job(self) -> GenerationJob:
        """The job as last persisted."""
        return self._job

    @property
    def job_id(self) -> str:
        return self._job.id

    async def _emit(self) -> None:
        if self.callback:
            await self.callback(self._job)

    async def _commit(self, **changes: Any) -> GenerationJob:
        """Apply changes, persist them and notify the callback."""
        if "progress" in changes:
            # Progress never goes backwards
            changes["progress"] = max(self._job.progress, min(changes["progress"], PROGRESS_DONE))
        self._job = await self.store.update_job(self._job.model_copy(update=changes))
        await self._emit()
        return self._job

    def _require(self, *allowed: JobStatus) -> None:
        if self._job.status not in allowed:
            names = ", ".join(s.value for s in allowed)
            raise JobStateError(
                f"Job {self._job.id} is {self._job.status.value}, expected one of: {names}"
            )

    def _with_slide(
        self,
        slide_number: int,
        status: SlideStatusValue,
        error: str | None = None,
    ) -> JobMetadata:
        entries = []
        found = False
        for entry in self._job.metadata.slide_statuses:
            if entry.slide_number == slide_number:
                entries.append(SlideStatus(slide_number=slide_number, status=status, error=error))
                found = True
            else:
                entries.append(entry)
        if not found:
            raise JobStateError(f"Job {self._job.id} has no slide {slide_number}")
        return self._job.metadata.model_copy(update={"slide_statuses": entries})

    async def begin(self, step: str = "Starting") -> GenerationJob:
        """Move the job from pending to generating."""
        self._require(JobStatus.PENDING)
        _logger.info(f"JOB:{self._job.id} | START | step:{step}")
        return await self._commit(
            status=JobStatus.GENERATING,
            progress=PROGRESS_SETUP,
            current_step=step,
        )

    async def set_step(self, step: str, progress: int | None = None) -> GenerationJob:
        """Update the human-readable step of a running job."""
        self._require(JobStatus.GENERATING)
        changes: dict[str, Any] = {"current_step": step}
        if progress is not None:
            changes["progress"] = progress
        _logger.info(f"JOB:{self._job.id} | STEP | {step}")
        return await self._commit(**changes)

    async def start_slide(self, slide_number: int, position: int | None = None, total: int | None = None) -> GenerationJob:
        """Mark a slide as generating."""
        self._require(JobStatus.GENERATING)
        position = position or slide_number
        total = total or self._job.total_items
        return await self._commit(
            metadata=self._with_slide(slide_number, SlideStatusValue.GENERATING),
            current_step=f"Compositing slide {position}/{total}",
        )

    async def complete_slide(self, slide_number: int, position: int, total: int) -> GenerationJob:
        """Mark a slide as completed and advance progress.

        Args:
            slide_number: Slide that finished.
            position: 1-based position of the slide in the processing order.
            total: Number of slides processed by this job.
        """
        self._require(JobStatus.GENERATING)
        progress = loop_progress(position, total)
        _logger.info(f"JOB:{self._job.id} | SLIDE_DONE | slide:{slide_number} | progress:{progress}")
        return await self._commit(
            metadata=self._with_slide(slide_number, SlideStatusValue.COMPLETED),
            completed_items=self._job.completed_items + 1,
            progress=progress,
        )

    async def fail_slide(self, slide_number: int, position: int, total: int, error: str) -> GenerationJob:
        """Mark a slide as failed; the job keeps running."""
        self._require(JobStatus.GENERATING)
        _logger.warning(f"JOB:{self._job.id} | SLIDE_FAILED | slide:{slide_number} | error:{error}")
        return await self._commit(
            metadata=self._with_slide(slide_number, SlideStatusValue.FAILED, error),
            progress=loop_progress(position, total),
        )

    async def fail(
        self,
        code: ErrorCode | str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> GenerationJob:
        """Fail the whole job immediately."""
        self._require(JobStatus.PENDING, JobStatus.GENERATING)
        code_value = code.value if isinstance(code, ErrorCode) else code
        _logger.error(f"JOB:{self._job.id} | FAILED | code:{code_value} | error:{message}")
        return await self._commit(
            status=JobStatus.FAILED,
            progress=PROGRESS_DONE,
            current_step="Failed",
            error_code=code_value,
            error_message=message,
            error_details=details,
        )

    def _slide_errors(self) -> list[dict[str, Any]]:
        return [
            {"slideNumber": s.slide_number, "error": s.error or "Unknown error"}
            for s in self._job.failed_slides
        ]

    async def finalize(self, background_error: str | None = None) -> GenerationJob:
        """Set the terminal state from slide outcomes.

        - no slide completed: failed with ``ALL_FAILED``
        - some slides failed or the background failed: completed with
          an error message and details
        - otherwise: completed without error fields

        Args:
            background_error: Error of a failed background generation.

        Returns:
            The finalized job.
        """
        self._require(JobStatus.GENERATING)

        total = self._job.total_items
        succeeded = len(self._job.completed_slides)
        slide_errors = self._slide_errors()

        details: dict[str, Any] = {"slideErrors": slide_errors}
        if background_error:
            details["backgroundError"] = background_error

        if succeeded == 0:
            return await self.fail(
                ErrorCode.ALL_FAILED,
                f"All {total} slides failed to generate",
                details,
            )

        if slide_errors or background_error:
            problems = []
            if slide_errors:
                failed_numbers = ", ".join(str(e["slideNumber"]) for e in slide_errors)
                problems.append(f"{len(slide_errors)} of {total} slides failed ({failed_numbers})")
            if background_error:
                problems.append(f"background generation failed: {background_error}")
            message = "; ".join(problems)
            _logger.warning(f"JOB:{self._job.id} | COMPLETED_WITH_WARNINGS | {message}")
            return await self._commit(
                status=JobStatus.COMPLETED,
                progress=PROGRESS_DONE,
                current_step="Completed with warnings",
                error_code=ErrorCode.PARTIAL_FAILURE.value,
                error_message=message,
                error_details=details,
            )

        _logger.info(f"JOB:{self._job.id} | COMPLETED | slides:{succeeded}")
        return await self._commit(
            status=JobStatus.COMPLETED,
            progress=PROGRESS_DONE,
            current_step="Completed",
            error_code=None,
            error_message=None,
            error_details=None,
        )
