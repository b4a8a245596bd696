"""Result aggregation — pure roll-ups of Evaluation records into verdict statistics."""

from collections.abc import Iterable

from pydantic import BaseModel, Field

from ai_judge.evaluation.domain.evaluation import Evaluation
from ai_judge.evaluation.domain.filter import EvaluationFilter
from ai_judge.judge.domain.verdict import Verdict


class Statistics(BaseModel, frozen=True):
    total_evaluations: int = Field(ge=0)
    pass_count: int = Field(ge=0)
    fail_count: int = Field(ge=0)
    inconclusive_count: int = Field(ge=0)
    pass_rate: float = Field(ge=0.0, le=100.0)


def compute_statistics(evaluations: Iterable[Evaluation]) -> Statistics:
    """Count evaluations per verdict and compute the pass rate in percent.

    The pass rate of an empty set is 0.0.
    """
    counts = {verdict: 0 for verdict in Verdict}
    for evaluation in evaluations:
        counts[evaluation.verdict] += 1

    total = sum(counts.values())
    pass_count = counts[Verdict.PASS]
    return Statistics(
        total_evaluations=total,
        pass_count=pass_count,
        fail_count=counts[Verdict.FAIL],
        inconclusive_count=counts[Verdict.INCONCLUSIVE],
        pass_rate=(pass_count / total * 100) if total else 0.0,
    )


def statistics_by_judge(evaluations: Iterable[Evaluation]) -> dict[str, Statistics]:
    """Group evaluations by judge id, preserving first-seen order, and roll each up."""
    groups: dict[str, list[Evaluation]] = {}
    for evaluation in evaluations:
        groups.setdefault(evaluation.judge_id, []).append(evaluation)
    return {
        judge_id: compute_statistics(group) for judge_id, group in groups.items()
    }


def filter_evaluations(
    evaluations: Iterable[Evaluation],
    filters: EvaluationFilter | None,
) -> list[Evaluation]:
    if filters is None:
        return list(evaluations)
    return [e for e in evaluations if _matches(evaluation=e, filters=filters)]


def _matches(evaluation: Evaluation, filters: EvaluationFilter) -> bool:
    if filters.judges and evaluation.judge_id not in filters.judges:
        return False
    if filters.questions and evaluation.question_id not in filters.questions:
        return False
    if filters.verdicts and evaluation.verdict not in filters.verdicts:
        return False
    return True
