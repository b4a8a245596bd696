"""StructlogEvaluationObserver — production observer that delegates to structlog."""

import structlog


class StructlogEvaluationObserver:
    """Logs evaluation domain events to structlog.

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def run_started(self, run_id: str, queue_id: str, max_concurrent: int) -> None:
        self._log.info(
            "evaluation.run.started",
            run_id=run_id,
            queue_id=queue_id,
            max_concurrent=max_concurrent,
        )

    def tasks_expanded(self, run_id: str, queue_id: str, total_tasks: int) -> None:
        self._log.info(
            "evaluation.run.tasks_expanded",
            run_id=run_id,
            queue_id=queue_id,
            total_tasks=total_tasks,
        )

    def assignment_skipped(
        self,
        queue_id: str,
        submission_id: str,
        question_id: str,
        judge_id: str,
        reason: str,
    ) -> None:
        self._log.debug(
            "evaluation.assignment.skipped",
            queue_id=queue_id,
            submission_id=submission_id,
            question_id=question_id,
            judge_id=judge_id,
            reason=reason,
        )

    def task_started(
        self, run_id: str, submission_id: str, question_id: str, judge_id: str
    ) -> None:
        self._log.info(
            "evaluation.task.started",
            run_id=run_id,
            submission_id=submission_id,
            question_id=question_id,
            judge_id=judge_id,
        )

    def task_completed(
        self,
        run_id: str,
        submission_id: str,
        question_id: str,
        judge_id: str,
        verdict: str,
        execution_time_ms: int,
    ) -> None:
        self._log.info(
            "evaluation.task.completed",
            run_id=run_id,
            submission_id=submission_id,
            question_id=question_id,
            judge_id=judge_id,
            verdict=verdict,
            execution_time_ms=execution_time_ms,
        )

    def task_failed(
        self,
        run_id: str,
        submission_id: str,
        question_id: str,
        judge_id: str,
        reason: str,
    ) -> None:
        self._log.error(
            "evaluation.task.failed",
            run_id=run_id,
            submission_id=submission_id,
            question_id=question_id,
            judge_id=judge_id,
            reason=reason,
        )

    def task_retry(
        self,
        run_id: str,
        submission_id: str,
        question_id: str,
        judge_id: str,
        attempt: int,
        reason: str,
        backoff_seconds: float,
    ) -> None:
        self._log.warning(
            "evaluation.task.retry",
            run_id=run_id,
            submission_id=submission_id,
            question_id=question_id,
            judge_id=judge_id,
            attempt=attempt,
            reason=reason,
            backoff_seconds=backoff_seconds,
        )

    def evaluation_persist_failed(
        self, run_id: str, evaluation_id: str, reason: str
    ) -> None:
        self._log.error(
            "evaluation.task.persist_failed",
            run_id=run_id,
            evaluation_id=evaluation_id,
            reason=reason,
        )

    def run_progress(
        self, run_id: str, completed: int, failed: int, total: int, percent: int
    ) -> None:
        self._log.info(
            "evaluation.run.progress",
            run_id=run_id,
            completed=completed,
            failed=failed,
            total=total,
            percent=percent,
        )

    def run_completed(
        self,
        run_id: str,
        total: int,
        completed: int,
        failed: int,
        elapsed_seconds: float,
    ) -> None:
        self._log.info(
            "evaluation.run.completed",
            run_id=run_id,
            total=total,
            completed=completed,
            failed=failed,
            elapsed_seconds=round(elapsed_seconds, 2),
        )

    def run_cancel_requested(self, run_id: str) -> None:
        self._log.warning("evaluation.run.cancel_requested", run_id=run_id)

    def run_failed(self, run_id: str, reason: str) -> None:
        self._log.error("evaluation.run.failed", run_id=run_id, reason=reason)

    def run_failure_not_persisted(self, run_id: str, reason: str) -> None:
        self._log.critical(
            "evaluation.run.failure_not_persisted", run_id=run_id, reason=reason
        )
