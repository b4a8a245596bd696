"""CompositeEvaluationObserver — fans out all events to a list of observers."""

from ai_judge.evaluation.domain.observer import EvaluationObserver


class CompositeEvaluationObserver:
    """Delegates every observer event to each observer in order.

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self, observers: list[EvaluationObserver]) -> None:
        self._observers = observers

    def run_started(self, run_id: str, queue_id: str, max_concurrent: int) -> None:
        for obs in self._observers:
            obs.run_started(
                run_id=run_id, queue_id=queue_id, max_concurrent=max_concurrent
            )

    def tasks_expanded(self, run_id: str, queue_id: str, total_tasks: int) -> None:
        for obs in self._observers:
            obs.tasks_expanded(
                run_id=run_id, queue_id=queue_id, total_tasks=total_tasks
            )

    def assignment_skipped(
        self,
        queue_id: str,
        submission_id: str,
        question_id: str,
        judge_id: str,
        reason: str,
    ) -> None:
        for obs in self._observers:
            obs.assignment_skipped(
                queue_id=queue_id,
                submission_id=submission_id,
                question_id=question_id,
                judge_id=judge_id,
                reason=reason,
            )

    def task_started(
        self, run_id: str, submission_id: str, question_id: str, judge_id: str
    ) -> None:
        for obs in self._observers:
            obs.task_started(
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
        for obs in self._observers:
            obs.task_completed(
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
        for obs in self._observers:
            obs.task_failed(
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
        for obs in self._observers:
            obs.task_retry(
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
        for obs in self._observers:
            obs.evaluation_persist_failed(
                run_id=run_id, evaluation_id=evaluation_id, reason=reason
            )

    def run_progress(
        self, run_id: str, completed: int, failed: int, total: int, percent: int
    ) -> None:
        for obs in self._observers:
            obs.run_progress(
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
        for obs in self._observers:
            obs.run_completed(
                run_id=run_id,
                total=total,
                completed=completed,
                failed=failed,
                elapsed_seconds=elapsed_seconds,
            )

    def run_cancel_requested(self, run_id: str) -> None:
        for obs in self._observers:
            obs.run_cancel_requested(run_id=run_id)

    def run_failed(self, run_id: str, reason: str) -> None:
        for obs in self._observers:
            obs.run_failed(run_id=run_id, reason=reason)

    def run_failure_not_persisted(self, run_id: str, reason: str) -> None:
        for obs in self._observers:
            obs.run_failure_not_persisted(run_id=run_id, reason=reason)
