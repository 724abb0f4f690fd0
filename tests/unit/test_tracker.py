"""Unit tests for the generation job tracker.

Tests that the tracker:
- Seeds a pending job with one pending status per slide
- Persists every transition and notifies the callback
- Only moves progress forward
- Chooses the terminal state from slide outcomes
- Rejects transitions out of terminal states
"""

from __future__ import annotations

import pytest

from carousel_automator.constants import ErrorCode, JobStatus, SlideStatusValue
from carousel_automator.exceptions import JobStateError
from carousel_automator.jobs import GenerationJob, GenerationJobTracker, loop_progress


async def _open(store, slides=(1, 2, 3, 4), **kwargs) -> GenerationJobTracker:
    return await GenerationJobTracker.open(store, "content-1", list(slides), **kwargs)


async def _run_slides(tracker: GenerationJobTracker, failures: set[int] = frozenset()) -> None:
    numbers = [s.slide_number for s in tracker.job.slide_statuses]
    for position, number in enumerate(numbers, start=1):
        await tracker.start_slide(number, position, len(numbers))
        if number in failures:
            await tracker.fail_slide(number, position, len(numbers), f"slide {number} broke")
        else:
            await tracker.complete_slide(number, position, len(numbers))


class TestLoopProgress:
    """Tests for loop_progress."""

    @pytest.mark.parametrize("position,expected", [(0, 10), (1, 30), (2, 50), (3, 70), (4, 90)])
    def test_four_slides(self, position, expected):
        """Test the 10..90 span for four slides."""
        assert loop_progress(position, 4) == expected

    def test_zero_total(self):
        """Test that an empty loop stays at the loop base."""
        assert loop_progress(0, 0) == 10


class TestOpen:
    """Tests for GenerationJobTracker.open."""

    @pytest.mark.asyncio
    async def test_seeds_pending_job(self, memory_store):
        """Test the initial job record."""
        tracker = await _open(memory_store, slides=(3, 1, 2))
        job = await memory_store.get_job(tracker.job_id)

        assert job.status == JobStatus.PENDING
        assert job.progress == 0
        assert job.total_items == 3
        assert job.completed_items == 0
        assert [s.slide_number for s in job.slide_statuses] == [1, 2, 3]
        assert all(s.status == SlideStatusValue.PENDING for s in job.slide_statuses)

    @pytest.mark.asyncio
    async def test_unknown_job_id_creates_job(self, memory_store):
        """Test that a caller-chosen id is used for a new job."""
        tracker = await _open(memory_store, job_id="job-123")

        assert tracker.job_id == "job-123"
        assert (await memory_store.get_job("job-123")).status == JobStatus.PENDING

    @pytest.mark.asyncio
    async def test_reuses_pending_job(self, memory_store):
        """Test that a pending job is reset and reused."""
        existing = await memory_store.create_job(
            GenerationJob(id="job-1", content_id="content-1", current_step="Waiting")
        )

        tracker = await _open(memory_store, slides=(1, 2), job_id=existing.id)

        assert tracker.job_id == "job-1"
        assert tracker.job.total_items == 2
        assert tracker.job.current_step == "Queued"
        assert len(await memory_store.list_jobs("content-1")) == 1

    @pytest.mark.asyncio
    async def test_rejects_non_pending_job(self, memory_store):
        """Test that a running job cannot be reused."""
        await memory_store.create_job(
            GenerationJob(id="job-1", content_id="content-1", status=JobStatus.GENERATING)
        )

        with pytest.raises(JobStateError):
            await _open(memory_store, job_id="job-1")


class TestTransitions:
    """Tests for the job state transitions."""

    @pytest.mark.asyncio
    async def test_begin(self, memory_store):
        """Test the move to generating."""
        tracker = await _open(memory_store)
        job = await tracker.begin("Resolving design")

        assert job.status == JobStatus.GENERATING
        assert job.progress == 5
        assert job.current_step == "Resolving design"

    @pytest.mark.asyncio
    async def test_every_change_is_persisted(self, memory_store):
        """Test that the stored record follows each transition."""
        tracker = await _open(memory_store)
        await tracker.begin()
        await tracker.start_slide(1, 1, 4)

        stored = await memory_store.get_job(tracker.job_id)
        assert stored.slide_status(1).status == SlideStatusValue.GENERATING
        assert stored.current_step == "Compositing slide 1/4"
        assert stored.version == tracker.job.version

    @pytest.mark.asyncio
    async def test_progress_per_slide(self, memory_store):
        """Test progress after each slide of four."""
        tracker = await _open(memory_store)
        await tracker.begin()

        seen = []
        for position in range(1, 5):
            await tracker.start_slide(position, position, 4)
            seen.append((await tracker.complete_slide(position, position, 4)).progress)

        assert seen == [30, 50, 70, 90]
        assert tracker.job.completed_items == 4

    @pytest.mark.asyncio
    async def test_progress_never_decreases(self, memory_store):
        """Test that an explicit lower progress is ignored."""
        tracker = await _open(memory_store)
        await tracker.begin()
        await tracker.set_step("Loading fonts", progress=8)

        job = await tracker.set_step("Back again", progress=3)

        assert job.progress == 8
        assert job.current_step == "Back again"

    @pytest.mark.asyncio
    async def test_failed_slide_advances_progress(self, memory_store):
        """Test that a failed slide still moves progress."""
        tracker = await _open(memory_store)
        await tracker.begin()
        await tracker.start_slide(1, 1, 4)

        job = await tracker.fail_slide(1, 1, 4, "boom")

        assert job.progress == 30
        assert job.completed_items == 0
        assert job.slide_status(1).error == "boom"

    @pytest.mark.asyncio
    async def test_unknown_slide_rejected(self, memory_store):
        """Test that a slide outside the job is rejected."""
        tracker = await _open(memory_store)
        await tracker.begin()

        with pytest.raises(JobStateError):
            await tracker.start_slide(9)

    @pytest.mark.asyncio
    async def test_slide_before_begin_rejected(self, memory_store):
        """Test that slides cannot start on a pending job."""
        tracker = await _open(memory_store)

        with pytest.raises(JobStateError):
            await tracker.start_slide(1)

    @pytest.mark.asyncio
    async def test_callback_sees_each_update(self, memory_store):
        """Test that the callback receives every persisted job."""
        updates: list[GenerationJob] = []

        async def on_update(job: GenerationJob) -> None:
            updates.append(job)

        tracker = await _open(memory_store, slides=(1,), callback=on_update)
        await tracker.begin()
        await tracker.start_slide(1, 1, 1)
        await tracker.complete_slide(1, 1, 1)
        await tracker.finalize()

        assert [u.status for u in updates] == [
            JobStatus.PENDING,
            JobStatus.GENERATING,
            JobStatus.GENERATING,
            JobStatus.GENERATING,
            JobStatus.COMPLETED,
        ]
        progress = [u.progress for u in updates]
        assert progress == sorted(progress)
        assert progress[-1] == 100


class TestFinalize:
    """Tests for the terminal state decision."""

    @pytest.mark.asyncio
    async def test_all_succeeded(self, memory_store):
        """Test a clean completion without error fields."""
        tracker = await _open(memory_store)
        await tracker.begin()
        await _run_slides(tracker)

        job = await tracker.finalize()

        assert job.status == JobStatus.COMPLETED
        assert job.progress == 100
        assert job.error_code is None
        assert job.error_message is None
        assert job.error_details is None

    @pytest.mark.asyncio
    async def test_partial_failure(self, memory_store):
        """Test completion with warnings when some slides fail."""
        tracker = await _open(memory_store)
        await tracker.begin()
        await _run_slides(tracker, failures={2, 4})

        job = await tracker.finalize()

        assert job.status == JobStatus.COMPLETED
        assert job.error_code == ErrorCode.PARTIAL_FAILURE.value
        assert "2 of 4 slides failed (2, 4)" in job.error_message
        assert job.error_details == {
            "slideErrors": [
                {"slideNumber": 2, "error": "slide 2 broke"},
                {"slideNumber": 4, "error": "slide 4 broke"},
            ],
        }

    @pytest.mark.asyncio
    async def test_background_only_failure(self, memory_store):
        """Test that a failed background alone still records a warning."""
        tracker = await _open(memory_store)
        await tracker.begin()
        await _run_slides(tracker)

        job = await tracker.finalize(background_error="quota exceeded")

        assert job.status == JobStatus.COMPLETED
        assert job.error_code == ErrorCode.PARTIAL_FAILURE.value
        assert "quota exceeded" in job.error_message
        assert job.error_details == {"slideErrors": [], "backgroundError": "quota exceeded"}

    @pytest.mark.asyncio
    async def test_all_failed(self, memory_store):
        """Test that no completed slide fails the job."""
        tracker = await _open(memory_store, slides=(1, 2))
        await tracker.begin()
        await _run_slides(tracker, failures={1, 2})

        job = await tracker.finalize()

        assert job.status == JobStatus.FAILED
        assert job.progress == 100
        assert job.error_code == ErrorCode.ALL_FAILED.value
        assert len(job.error_details["slideErrors"]) == 2

    @pytest.mark.asyncio
    async def test_fail_job(self, memory_store):
        """Test failing the whole job."""
        tracker = await _open(memory_store)
        await tracker.begin()

        job = await tracker.fail(ErrorCode.FONT_ERROR, "font missing")

        assert job.status == JobStatus.FAILED
        assert job.progress == 100
        assert job.error_code == "FONT_ERROR"
        assert job.error_message == "font missing"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("terminal", ["complete", "fail"])
    async def test_terminal_states_are_final(self, memory_store, terminal):
        """Test that a finished job accepts no further transitions."""
        tracker = await _open(memory_store, slides=(1,))
        await tracker.begin()
        if terminal == "complete":
            await _run_slides(tracker)
            await tracker.finalize()
        else:
            await tracker.fail(ErrorCode.PIPELINE_ERROR, "boom")

        with pytest.raises(JobStateError):
            await tracker.begin()
        with pytest.raises(JobStateError):
            await tracker.start_slide(1)
        with pytest.raises(JobStateError):
            await tracker.fail(ErrorCode.PIPELINE_ERROR, "again")
        with pytest.raises(JobStateError):
            await tracker.finalize()
