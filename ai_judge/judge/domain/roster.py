"""JudgeRoster — judges and their question assignments declared in one document."""

from pydantic import BaseModel, Field

ALL_QUEUES = "*"


class RosterJudge(BaseModel, frozen=True):
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    system_prompt: str = Field(min_length=1)
    model_name: str = ""
    is_active: bool = True


class RosterAssignment(BaseModel, frozen=True):
    """Judges for one question of a queue named by its uploaded (source) id.

    ``queue_id: "*"`` applies the assignment to every queue of a batch.
    """

    queue_id: str = Field(min_length=1)
    question_id: str = Field(min_length=1)
    judge_ids: list[str] = Field(min_length=1)


class JudgeRoster(BaseModel, frozen=True):
    judges: list[RosterJudge] = Field(default_factory=list)
    assignments: list[RosterAssignment] = Field(default_factory=list)
