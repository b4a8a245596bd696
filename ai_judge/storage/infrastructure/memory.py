"""InMemoryStore — process-local implementation of the Store port."""

import uuid
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from ai_judge.evaluation.domain.evaluation import Evaluation
from ai_judge.evaluation.domain.filter import EvaluationFilter
from ai_judge.evaluation.domain.run import EvaluationRun
from ai_judge.evaluation.domain.statistics import filter_evaluations
from ai_judge.judge.domain.assignment import JudgeAssignment
from ai_judge.judge.domain.judge import Judge
from ai_judge.storage.infrastructure.errors import RecordNotFoundError, StoreWriteError
from ai_judge.submission.domain.queue import Queue
from ai_judge.submission.domain.submission import Submission

_RUN_FIELDS = frozenset(EvaluationRun.model_fields) - {"id", "queue_id", "started_at"}
_JUDGE_FIELDS = frozenset({"name", "system_prompt", "model_name", "is_active"})


def _now() -> datetime:
    return datetime.now(UTC)


class InMemoryStore:
    """Keeps every record in dicts keyed by id, in insertion order.

    Satisfies the Store protocol structurally. Multi-record writes are
    checked in full before anything is stored, so a rejected write leaves
    the store unchanged.
    """

    def __init__(self) -> None:
        self._queues: dict[str, Queue] = {}
        self._submissions: dict[str, Submission] = {}
        self._judges: dict[str, Judge] = {}
        self._assignments: list[JudgeAssignment] = []
        self._evaluations: dict[str, Evaluation] = {}
        self._runs: dict[str, EvaluationRun] = {}

    # ------------------------------------------------------------------
    # Queues and submissions
    # ------------------------------------------------------------------

    def upsert_queues(self, queues: list[Queue]) -> None:
        for queue in queues:
            self._queues[queue.id] = queue

    def get_queues(self) -> list[Queue]:
        return list(self._queues.values())

    def get_queue(self, queue_id: str) -> Queue | None:
        return self._queues.get(queue_id)

    def upload_submissions(self, submissions: list[Submission]) -> None:
        missing = sorted(
            {s.queue_id for s in submissions if s.queue_id not in self._queues}
        )
        if missing:
            raise StoreWriteError(
                operation="upload submissions",
                reason=f"foreign key constraint: unknown queue(s) {', '.join(missing)}",
            )
        seen: set[str] = set()
        duplicates: list[str] = []
        for submission in submissions:
            if submission.id in self._submissions or submission.id in seen:
                duplicates.append(submission.id)
            seen.add(submission.id)
        if duplicates:
            raise StoreWriteError(
                operation="upload submissions",
                reason=f"duplicate submission id(s) {', '.join(duplicates)}",
            )
        for submission in submissions:
            self._submissions[submission.id] = submission

    def get_submissions(self) -> list[Submission]:
        return list(self._submissions.values())

    def get_submissions_by_queue(self, queue_id: str) -> list[Submission]:
        return [s for s in self._submissions.values() if s.queue_id == queue_id]

    # ------------------------------------------------------------------
    # Judges and assignments
    # ------------------------------------------------------------------

    def create_judge(
        self,
        name: str,
        system_prompt: str,
        model_name: str,
        is_active: bool = True,
        judge_id: str | None = None,
    ) -> Judge:
        judge_id = judge_id or f"judge_{uuid.uuid4().hex[:12]}"
        if judge_id in self._judges:
            raise StoreWriteError(
                operation="create judge", reason=f"duplicate judge id {judge_id}"
            )
        now = _now()
        judge = Judge(
            id=judge_id,
            name=name,
            system_prompt=system_prompt,
            model_name=model_name,
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )
        self._judges[judge.id] = judge
        return judge

    def update_judge(self, judge_id: str, changes: Mapping[str, Any]) -> Judge:
        current = self._judges.get(judge_id)
        if current is None:
            raise RecordNotFoundError(kind="Judge", record_id=judge_id)
        unknown = set(changes) - _JUDGE_FIELDS
        if unknown:
            raise StoreWriteError(
                operation="update judge",
                reason=f"fields not updatable: {', '.join(sorted(unknown))}",
            )
        updated = _revalidate(
            model=current,
            changes={**changes, "updated_at": _now()},
            operation="update judge",
        )
        self._judges[judge_id] = updated
        return updated

    def delete_judge(self, judge_id: str) -> None:
        if self._judges.pop(judge_id, None) is None:
            raise RecordNotFoundError(kind="Judge", record_id=judge_id)

    def get_judges(self) -> list[Judge]:
        return list(self._judges.values())

    def get_active_judges(self) -> list[Judge]:
        return [j for j in self._judges.values() if j.is_active]

    def assign_judges(
        self, queue_id: str, question_id: str, judge_ids: list[str]
    ) -> list[JudgeAssignment]:
        """Replace the judges assigned to one question of one queue.

        Repeated judge ids collapse into one assignment.
        """
        kept = [
            a
            for a in self._assignments
            if not (a.queue_id == queue_id and a.question_id == question_id)
        ]
        now = _now()
        created = [
            JudgeAssignment(
                id=f"assign_{uuid.uuid4().hex[:12]}",
                queue_id=queue_id,
                question_id=question_id,
                judge_id=judge_id,
                created_at=now,
            )
            for judge_id in dict.fromkeys(judge_ids)
        ]
        self._assignments = kept + created
        return created

    def get_judge_assignments(
        self, queue_id: str | None = None
    ) -> list[JudgeAssignment]:
        if queue_id is None:
            return list(self._assignments)
        return [a for a in self._assignments if a.queue_id == queue_id]

    # ------------------------------------------------------------------
    # Evaluations
    # ------------------------------------------------------------------

    def create_evaluation(self, evaluation: Evaluation) -> None:
        if evaluation.id in self._evaluations:
            raise StoreWriteError(
                operation="create evaluation",
                reason=f"evaluation {evaluation.id} already exists",
            )
        self._evaluations[evaluation.id] = evaluation

    def get_evaluations(
        self, filters: EvaluationFilter | None = None
    ) -> list[Evaluation]:
        return filter_evaluations(self._evaluations.values(), filters)

    def get_evaluations_by_queue(self, queue_id: str) -> list[Evaluation]:
        submission_ids = {s.id for s in self.get_submissions_by_queue(queue_id)}
        return [
            e for e in self._evaluations.values() if e.submission_id in submission_ids
        ]

    # ------------------------------------------------------------------
    # Evaluation runs
    # ------------------------------------------------------------------

    def create_evaluation_run(self, queue_id: str) -> EvaluationRun:
        run = EvaluationRun(
            id=f"run_{uuid.uuid4().hex}",
            queue_id=queue_id,
            started_at=_now(),
        )
        self._runs[run.id] = run
        return run

    def update_evaluation_run(
        self, run_id: str, changes: Mapping[str, Any]
    ) -> EvaluationRun:
        current = self._runs.get(run_id)
        if current is None:
            raise RecordNotFoundError(kind="EvaluationRun", record_id=run_id)
        if current.is_terminal:
            raise StoreWriteError(
                operation="update evaluation run",
                reason=f"run {run_id} is already {current.status}",
            )
        unknown = set(changes) - _RUN_FIELDS
        if unknown:
            raise StoreWriteError(
                operation="update evaluation run",
                reason=f"fields not updatable: {', '.join(sorted(unknown))}",
            )
        updated = _revalidate(
            model=current, changes=changes, operation="update evaluation run"
        )
        self._runs[run_id] = updated
        return updated

    def get_evaluation_runs(self, queue_id: str | None = None) -> list[EvaluationRun]:
        if queue_id is None:
            return list(self._runs.values())
        return [r for r in self._runs.values() if r.queue_id == queue_id]


def _revalidate[M: (Judge, EvaluationRun)](
    model: M, changes: Mapping[str, Any], operation: str
) -> M:
    """Apply changes to a frozen record and validate the result."""
    try:
        return type(model).model_validate({**model.model_dump(), **changes})
    except ValidationError as exc:
        raise StoreWriteError(operation=operation, reason=str(exc)) from exc
