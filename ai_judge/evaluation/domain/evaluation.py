"""Evaluation — the persisted outcome of executing one task."""

from datetime import datetime

from pydantic import Field

from ai_judge.core.model import DomainModel
from ai_judge.judge.domain.verdict import Verdict


class Evaluation(DomainModel):
    """Append-only record: corrections are new records, never updates.

    ``error`` is set exactly when the task counted as failed.
    ``execution_time`` is in milliseconds.
    """

    id: str = Field(min_length=1)
    submission_id: str
    question_id: str
    judge_id: str
    verdict: Verdict
    reasoning: str
    execution_time: int | None = Field(default=None, ge=0)
    error: str | None = None
    created_at: datetime

    @property
    def failed(self) -> bool:
        return self.error is not None
