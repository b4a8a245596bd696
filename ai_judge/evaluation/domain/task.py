"""EvaluationTask — the transient unit of work: one submission, one question, one judge."""

from dataclasses import dataclass

from ai_judge.judge.domain.judge import Judge
from ai_judge.submission.domain.question import Question
from ai_judge.submission.domain.submission import Submission


@dataclass(frozen=True)
class EvaluationTask:
    """Built fresh for every run and discarded after use; never persisted."""

    submission: Submission
    question_id: str
    question: Question
    judge_id: str
    judge: Judge
