"""Question value objects — embedded in every Submission."""

from enum import StrEnum

from ai_judge.core.model import DomainModel


class QuestionType(StrEnum):
    SINGLE_CHOICE = "single_choice"
    SINGLE_CHOICE_WITH_REASONING = "single_choice_with_reasoning"
    MULTIPLE_CHOICE = "multiple_choice"
    FREE_FORM = "free_form"


class QuestionData(DomainModel):
    id: str
    question_type: QuestionType
    question_text: str


class Question(DomainModel):
    """One revision of a question as it was shown to the respondent."""

    rev: int
    data: QuestionData

    @property
    def id(self) -> str:
        return self.data.id
