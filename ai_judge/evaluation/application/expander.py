"""TaskExpander — turns a queue into its concrete list of evaluation tasks."""

from ai_judge.evaluation.domain.observer import EvaluationObserver
from ai_judge.evaluation.domain.task import EvaluationTask
from ai_judge.judge.domain.assignment import JudgeAssignment
from ai_judge.storage.domain.store import Store


class TaskExpander:
    """Computes the (submission, question, judge) cross-product for one queue.

    Order is submissions as stored, then questions as embedded, then
    assignments as stored, so a fixed store snapshot always expands to the same
    list. Assignments whose judge is missing or inactive are left out without
    counting as failures.
    """

    def __init__(self, store: Store, observer: EvaluationObserver) -> None:
        self._store = store
        self._observer = observer

    def expand(self, queue_id: str) -> list[EvaluationTask]:
        submissions = self._store.get_submissions_by_queue(queue_id)
        by_question = _group_by_question(self._store.get_judge_assignments(queue_id))
        judges = {judge.id: judge for judge in self._store.get_judges()}

        tasks: list[EvaluationTask] = []
        for submission in submissions:
            for question in submission.questions:
                for assignment in by_question.get(question.id, []):
                    judge = judges.get(assignment.judge_id)
                    if judge is None or not judge.is_active:
                        self._observer.assignment_skipped(
                            queue_id=queue_id,
                            submission_id=submission.id,
                            question_id=question.id,
                            judge_id=assignment.judge_id,
                            reason="judge missing" if judge is None else "judge inactive",
                        )
                        continue
                    tasks.append(
                        EvaluationTask(
                            submission=submission,
                            question_id=question.id,
                            question=question,
                            judge_id=judge.id,
                            judge=judge,
                        )
                    )
        return tasks


def _group_by_question(
    assignments: list[JudgeAssignment],
) -> dict[str, list[JudgeAssignment]]:
    grouped: dict[str, list[JudgeAssignment]] = {}
    for assignment in assignments:
        grouped.setdefault(assignment.question_id, []).append(assignment)
    return grouped
