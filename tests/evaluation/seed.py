"""Builders that put queues, submissions, judges and assignments into a store."""

from datetime import UTC, datetime

from ai_judge.judge.domain.judge import Judge
from ai_judge.storage.domain.store import Store
from ai_judge.submission.domain.question import Question, QuestionData, QuestionType
from ai_judge.submission.domain.queue import Queue
from ai_judge.submission.domain.submission import Answer, Submission


def make_question(question_id: str, text: str | None = None) -> Question:
    return Question(
        rev=1,
        data=QuestionData(
            id=question_id,
            question_type=QuestionType.FREE_FORM,
            question_text=text or f"What about {question_id}?",
        ),
    )


def make_submission(
    submission_id: str,
    queue_id: str,
    question_ids: list[str],
    answers: dict[str, Answer] | None = None,
) -> Submission:
    if answers is None:
        answers = {qid: Answer(text=f"answer to {qid}") for qid in question_ids}
    return Submission(
        id=submission_id,
        queue_id=queue_id,
        labeling_task_id=f"task_{submission_id}",
        created_at=1690000000000,
        questions=[make_question(qid) for qid in question_ids],
        answers=answers,
    )


def seed_queue(store: Store, queue_id: str, submissions: list[Submission]) -> Queue:
    queue = Queue(
        id=queue_id,
        source_id=queue_id,
        name=f"Queue {queue_id}",
        created_at=datetime.now(UTC),
        submission_count=len(submissions),
    )
    store.upsert_queues([queue])
    store.upload_submissions(submissions)
    return queue


def seed_judge(
    store: Store,
    judge_id: str,
    is_active: bool = True,
    system_prompt: str | None = None,
) -> Judge:
    return store.create_judge(
        name=f"Judge {judge_id}",
        system_prompt=system_prompt or f"You are {judge_id}.",
        model_name="test-model",
        is_active=is_active,
        judge_id=judge_id,
    )
