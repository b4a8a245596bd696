"""Observer port for the evaluation domain — defines events in domain language."""

from typing import Protocol


class EvaluationObserver(Protocol):
    """Observer port emitting structured events during an evaluation run.

    Implementations may log to structlog, render progress, or record for tests.
    """

    def run_started(self, run_id: str, queue_id: str, max_concurrent: int) -> None: ...

    def tasks_expanded(self, run_id: str, queue_id: str, total_tasks: int) -> None: ...

    def assignment_skipped(
        self,
        queue_id: str,
        submission_id: str,
        question_id: str,
        judge_id: str,
        reason: str,
    ) -> None: ...

    def task_started(
        self, run_id: str, submission_id: str, question_id: str, judge_id: str
    ) -> None: ...

    def task_completed(
        self,
        run_id: str,
        submission_id: str,
        question_id: str,
        judge_id: str,
        verdict: str,
        execution_time_ms: int,
    ) -> None: ...

    def task_failed(
        self,
        run_id: str,
        submission_id: str,
        question_id: str,
        judge_id: str,
        reason: str,
    ) -> None: ...

    def task_retry(
        self,
        run_id: str,
        submission_id: str,
        question_id: str,
        judge_id: str,
        attempt: int,
        reason: str,
        backoff_seconds: float,
    ) -> None: ...

    def evaluation_persist_failed(
        self, run_id: str, evaluation_id: str, reason: str
    ) -> None: ...

    def run_progress(
        self, run_id: str, completed: int, failed: int, total: int, percent: int
    ) -> None: ...

    def run_completed(
        self,
        run_id: str,
        total: int,
        completed: int,
        failed: int,
        elapsed_seconds: float,
    ) -> None: ...

    def run_cancel_requested(self, run_id: str) -> None: ...

    def run_failed(self, run_id: str, reason: str) -> None: ...

    def run_failure_not_persisted(self, run_id: str, reason: str) -> None: ...
