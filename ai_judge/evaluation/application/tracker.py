"""RunTracker — sole owner of an EvaluationRun's counters and status."""

import asyncio
import time
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from ai_judge.core.errors import AiJudgeError
from ai_judge.evaluation.domain.observer import EvaluationObserver
from ai_judge.evaluation.domain.run import EvaluationRun, RunStatus
from ai_judge.storage.domain.store import Store

type ProgressCallback = Callable[[int], None]


class RunStateError(AiJudgeError):
    """Raised when a transition is attempted on a run that is not running."""

    def __init__(self, run_id: str, status: str, action: str) -> None:
        super().__init__(f"Cannot {action} run {run_id}: run is {status}")


def progress_percent(processed: int, total: int) -> int:
    """Return 100 * processed / total rounded half up; 100 when total is 0."""
    if total == 0:
        return 100
    return (200 * processed + total) // (2 * total)


class RunTracker:
    """State machine for one run: running -> completed | failed.

    Counter updates from concurrent tasks are serialized by an asyncio.Lock.
    The progress callback is invoked while the lock is held, so the values a
    subscriber sees never decrease and end at exactly 100 when every task is
    processed. Final counters depend only on which tasks succeeded or failed,
    never on completion order.

    Store writes made by start(), set_total(), complete() and fail() are
    run-level: a StoreWriteError raised there propagates to the caller.
    """

    def __init__(
        self,
        store: Store,
        observer: EvaluationObserver,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self._store = store
        self._observer = observer
        self._on_progress = on_progress
        self._lock = asyncio.Lock()
        self._run: EvaluationRun | None = None
        self._started_at = 0.0

    @property
    def run(self) -> EvaluationRun:
        if self._run is None:
            raise RuntimeError("run has not been started")
        return self._run

    def start(self, queue_id: str) -> EvaluationRun:
        """Create the run record: status running, all counters zero."""
        self._run = self._store.create_evaluation_run(queue_id)
        self._started_at = time.monotonic()
        return self._run

    def set_total(self, total: int) -> EvaluationRun:
        self._require_running(action="set total of")
        return self._apply({"total_evaluations": total})

    async def record(self, succeeded: bool) -> int:
        """Count one processed task and report progress. Returns the new percentage."""
        async with self._lock:
            self._require_running(action="record a task for")
            run = self.run
            if run.processed >= run.total_evaluations:
                raise RunStateError(
                    run_id=run.id, status="fully processed", action="record a task for"
                )
            field = "completed_evaluations" if succeeded else "failed_evaluations"
            self._run = run.model_copy(update={field: getattr(run, field) + 1})
            percent = progress_percent(
                processed=self._run.processed, total=self._run.total_evaluations
            )
            self._observer.run_progress(
                run_id=self._run.id,
                completed=self._run.completed_evaluations,
                failed=self._run.failed_evaluations,
                total=self._run.total_evaluations,
                percent=percent,
            )
            if self._on_progress is not None:
                self._on_progress(percent)
            return percent

    def complete(self) -> EvaluationRun:
        """Mark the run completed and persist its final counters."""
        self._require_running(action="complete")
        run = self.run
        if run.total_evaluations == 0 and self._on_progress is not None:
            self._on_progress(100)
        completed = self._apply(
            {
                "status": RunStatus.COMPLETED,
                "completed_at": datetime.now(UTC),
                "total_evaluations": run.total_evaluations,
                "completed_evaluations": run.completed_evaluations,
                "failed_evaluations": run.failed_evaluations,
            }
        )
        self._observer.run_completed(
            run_id=completed.id,
            total=completed.total_evaluations,
            completed=completed.completed_evaluations,
            failed=completed.failed_evaluations,
            elapsed_seconds=time.monotonic() - self._started_at,
        )
        return completed

    def fail(self, reason: str) -> EvaluationRun:
        """Mark the run failed, keeping every counter recorded so far.

        If the store rejects the failure update, the in-memory snapshot is
        still moved to failed and the problem is reported to the observer.
        """
        self._require_running(action="fail")
        run = self.run
        changes: dict[str, Any] = {
            "status": RunStatus.FAILED,
            "completed_at": datetime.now(UTC),
            "total_evaluations": run.total_evaluations,
            "completed_evaluations": run.completed_evaluations,
            "failed_evaluations": run.failed_evaluations,
        }
        self._observer.run_failed(run_id=run.id, reason=reason)
        try:
            return self._apply(changes)
        except AiJudgeError as exc:
            self._observer.run_failure_not_persisted(run_id=run.id, reason=str(exc))
            self._run = run.model_copy(update=changes)
            return self._run

    def _apply(self, changes: dict[str, Any]) -> EvaluationRun:
        self._run = self._store.update_evaluation_run(self.run.id, changes)
        return self._run

    def _require_running(self, action: str) -> None:
        run = self.run
        if run.is_terminal:
            raise RunStateError(run_id=run.id, status=run.status.value, action=action)
