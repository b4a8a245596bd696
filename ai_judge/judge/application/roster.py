"""Applies a JudgeRoster to a store for the queues of one ingestion batch."""

from ai_judge.judge.domain.assignment import JudgeAssignment
from ai_judge.judge.domain.roster import ALL_QUEUES, JudgeRoster
from ai_judge.storage.domain.store import Store
from ai_judge.submission.domain.batch import IngestionBatch


def apply_roster(
    store: Store, roster: JudgeRoster, batch: IngestionBatch
) -> list[JudgeAssignment]:
    """Create the roster's judges (if absent) and assign them to the batch's queues.

    Assignments name queues by their uploaded id; ones that match no queue in
    the batch are ignored. Returns every assignment created.
    """
    existing = {judge.id for judge in store.get_judges()}
    for judge in roster.judges:
        if judge.id in existing:
            continue
        store.create_judge(
            name=judge.name,
            system_prompt=judge.system_prompt,
            model_name=judge.model_name,
            is_active=judge.is_active,
            judge_id=judge.id,
        )

    created: list[JudgeAssignment] = []
    for assignment in roster.assignments:
        if assignment.queue_id == ALL_QUEUES:
            queue_ids = [queue.id for queue in batch.queues]
        else:
            queue_id = batch.queue_id_for(assignment.queue_id)
            queue_ids = [queue_id] if queue_id is not None else []
        for queue_id in queue_ids:
            created.extend(
                store.assign_judges(
                    queue_id=queue_id,
                    question_id=assignment.question_id,
                    judge_ids=assignment.judge_ids,
                )
            )
    return created
