"""JudgeAssignment — binds one judge to one question within one queue."""

from datetime import datetime

from ai_judge.core.model import DomainModel

type AssignmentKey = tuple[str, str, str]  # (queue_id, question_id, judge_id)


class JudgeAssignment(DomainModel):
    id: str
    queue_id: str
    question_id: str
    judge_id: str
    created_at: datetime

    @property
    def key(self) -> AssignmentKey:
        return (self.queue_id, self.question_id, self.judge_id)
