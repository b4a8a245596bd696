"""EvaluationFilter — optional constraints when listing evaluations."""

from pydantic import BaseModel, Field

from ai_judge.judge.domain.verdict import Verdict


class EvaluationFilter(BaseModel, frozen=True):
    """An empty list means no constraint on that attribute."""

    judges: list[str] = Field(default_factory=list)
    questions: list[str] = Field(default_factory=list)
    verdicts: list[Verdict] = Field(default_factory=list)
