"""EvaluationRun — aggregate record tracking progress and status of one run."""

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from ai_judge.core.model import DomainModel

type RunId = str


class RunStatus(StrEnum):
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class EvaluationRun(DomainModel):
    """Immutable snapshot; the RunTracker replaces it on every transition.

    While ``running``, ``completed_evaluations + failed_evaluations`` is a
    lower bound on processed tasks. It equals ``total_evaluations`` once the
    status is ``completed``.
    """

    id: RunId = Field(min_length=1)
    queue_id: str
    started_at: datetime
    completed_at: datetime | None = None
    status: RunStatus = RunStatus.RUNNING
    total_evaluations: int = Field(default=0, ge=0)
    completed_evaluations: int = Field(default=0, ge=0)
    failed_evaluations: int = Field(default=0, ge=0)

    @property
    def processed(self) -> int:
        return self.completed_evaluations + self.failed_evaluations

    @property
    def is_terminal(self) -> bool:
        return self.status is not RunStatus.RUNNING
