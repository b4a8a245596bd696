"""Submission and Answer — one respondent's answers to a set of questions."""

from pydantic import StrictFloat, StrictInt, model_validator

from ai_judge.core.model import DomainModel
from ai_judge.submission.domain.question import Question

EMPTY_ANSWER_MESSAGE = (
    "Answer must have at least one field (choice, reasoning, or text)"
)


class Answer(DomainModel):
    """A respondent's answer to one question.

    At least one of choice, reasoning or text must be present; ``choices``
    only adds to an answer that has one. Empty strings count as absent.
    """

    choice: str | None = None
    reasoning: str | None = None
    text: str | None = None
    choices: list[str] | None = None

    @model_validator(mode="after")
    def _require_content(self) -> "Answer":
        if not (self.choice or self.reasoning or self.text):
            raise ValueError(EMPTY_ANSWER_MESSAGE)
        return self


class Submission(DomainModel):
    id: str
    queue_id: str
    labeling_task_id: str
    created_at: StrictInt | StrictFloat
    questions: list[Question]
    answers: dict[str, Answer]

    def answer_for(self, question_id: str) -> Answer | None:
        return self.answers.get(question_id)
