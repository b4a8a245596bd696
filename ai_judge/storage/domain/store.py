"""Store Protocol — structural interface for the persistent store."""

from collections.abc import Mapping
from typing import Any, Protocol

from ai_judge.evaluation.domain.evaluation import Evaluation
from ai_judge.evaluation.domain.filter import EvaluationFilter
from ai_judge.evaluation.domain.run import EvaluationRun
from ai_judge.judge.domain.assignment import JudgeAssignment
from ai_judge.judge.domain.judge import Judge
from ai_judge.submission.domain.queue import Queue
from ai_judge.submission.domain.submission import Submission


class Store(Protocol):
    """Persistence port used by ingestion and evaluation.

    Write methods raise StoreWriteError when the store rejects or cannot
    accept the write. Read methods return records in insertion order.
    """

    def upsert_queues(self, queues: list[Queue]) -> None: ...

    def get_queues(self) -> list[Queue]: ...

    def get_queue(self, queue_id: str) -> Queue | None: ...

    def upload_submissions(self, submissions: list[Submission]) -> None: ...

    def get_submissions(self) -> list[Submission]: ...

    def get_submissions_by_queue(self, queue_id: str) -> list[Submission]: ...

    def create_judge(
        self,
        name: str,
        system_prompt: str,
        model_name: str,
        is_active: bool = True,
        judge_id: str | None = None,
    ) -> Judge: ...

    def update_judge(self, judge_id: str, changes: Mapping[str, Any]) -> Judge: ...

    def delete_judge(self, judge_id: str) -> None: ...

    def get_judges(self) -> list[Judge]: ...

    def get_active_judges(self) -> list[Judge]: ...

    def assign_judges(
        self, queue_id: str, question_id: str, judge_ids: list[str]
    ) -> list[JudgeAssignment]: ...

    def get_judge_assignments(
        self, queue_id: str | None = None
    ) -> list[JudgeAssignment]: ...

    def create_evaluation(self, evaluation: Evaluation) -> None: ...

    def get_evaluations(
        self, filters: EvaluationFilter | None = None
    ) -> list[Evaluation]: ...

    def get_evaluations_by_queue(self, queue_id: str) -> list[Evaluation]: ...

    def create_evaluation_run(self, queue_id: str) -> EvaluationRun: ...

    def update_evaluation_run(
        self, run_id: str, changes: Mapping[str, Any]
    ) -> EvaluationRun: ...

    def get_evaluation_runs(self, queue_id: str | None = None) -> list[EvaluationRun]: ...
