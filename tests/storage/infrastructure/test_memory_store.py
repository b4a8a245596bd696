"""Tests for InMemoryStore."""

from datetime import UTC, datetime

import pytest

from ai_judge.evaluation.domain.evaluation import Evaluation
from ai_judge.evaluation.domain.filter import EvaluationFilter
from ai_judge.evaluation.domain.run import RunStatus
from ai_judge.judge.domain.verdict import Verdict
from ai_judge.storage.infrastructure.errors import RecordNotFoundError, StoreWriteError
from ai_judge.storage.infrastructure.memory import InMemoryStore
from tests.evaluation.seed import make_submission, seed_judge, seed_queue


def _evaluation(
    evaluation_id: str,
    submission_id: str = "s1",
    judge_id: str = "j1",
    question_id: str = "q1",
    verdict: Verdict = Verdict.PASS,
) -> Evaluation:
    return Evaluation(
        id=evaluation_id,
        submission_id=submission_id,
        question_id=question_id,
        judge_id=judge_id,
        verdict=verdict,
        reasoning="because",
        execution_time=12,
        created_at=datetime.now(UTC),
    )


class TestSubmissions:
    def test_upload_rejects_unknown_queue(self) -> None:
        store = InMemoryStore()

        with pytest.raises(StoreWriteError, match="foreign key constraint"):
            store.upload_submissions([make_submission("s1", "missing", ["q1"])])

        assert store.get_submissions() == []

    def test_upload_rejects_duplicate_ids_without_partial_write(self) -> None:
        store = InMemoryStore()
        seed_queue(store, "q", [make_submission("s1", "q", ["q1"])])

        with pytest.raises(StoreWriteError, match="duplicate"):
            store.upload_submissions(
                [make_submission("s2", "q", ["q1"]), make_submission("s1", "q", ["q1"])]
            )

        assert [s.id for s in store.get_submissions()] == ["s1"]

    def test_upload_rejects_ids_repeated_within_one_batch(self) -> None:
        store = InMemoryStore()
        seed_queue(store, "q", [])

        with pytest.raises(StoreWriteError, match="duplicate submission id\\(s\\) s1"):
            store.upload_submissions(
                [make_submission("s1", "q", ["q1"]), make_submission("s1", "q", ["q2"])]
            )

        assert store.get_submissions() == []

    def test_get_submissions_by_queue_filters(self) -> None:
        store = InMemoryStore()
        seed_queue(store, "a", [make_submission("s1", "a", ["q1"])])
        seed_queue(store, "b", [make_submission("s2", "b", ["q1"])])

        assert [s.id for s in store.get_submissions_by_queue("b")] == ["s2"]


class TestJudges:
    def test_create_generates_id_when_absent(self) -> None:
        store = InMemoryStore()

        judge = store.create_judge(name="J", system_prompt="p", model_name="m")

        assert judge.id.startswith("judge_")
        assert judge.is_active

    def test_duplicate_id_is_rejected(self) -> None:
        store = InMemoryStore()
        seed_judge(store, "j1")

        with pytest.raises(StoreWriteError):
            seed_judge(store, "j1")

    def test_update_changes_fields_and_touches_updated_at(self) -> None:
        store = InMemoryStore()
        original = seed_judge(store, "j1")

        updated = store.update_judge("j1", {"is_active": False})

        assert updated.is_active is False
        assert updated.updated_at >= original.updated_at
        assert store.get_active_judges() == []

    def test_update_rejects_unknown_field(self) -> None:
        store = InMemoryStore()
        seed_judge(store, "j1")

        with pytest.raises(StoreWriteError, match="not updatable"):
            store.update_judge("j1", {"id": "other"})

    def test_update_missing_judge_raises(self) -> None:
        with pytest.raises(RecordNotFoundError):
            InMemoryStore().update_judge("nope", {"name": "x"})

    def test_delete_removes_judge(self) -> None:
        store = InMemoryStore()
        seed_judge(store, "j1")

        store.delete_judge("j1")

        assert store.get_judges() == []


class TestAssignments:
    def test_assign_replaces_previous_set_for_question(self) -> None:
        store = InMemoryStore()
        store.assign_judges("q", "q1", ["j1", "j2"])

        store.assign_judges("q", "q1", ["j3"])

        assert [a.judge_id for a in store.get_judge_assignments("q")] == ["j3"]

    def test_repeated_judge_ids_collapse(self) -> None:
        store = InMemoryStore()

        created = store.assign_judges("q", "q1", ["j1", "j1", "j2"])

        assert [a.judge_id for a in created] == ["j1", "j2"]

    def test_other_questions_are_untouched(self) -> None:
        store = InMemoryStore()
        store.assign_judges("q", "q1", ["j1"])
        store.assign_judges("q", "q2", ["j2"])

        store.assign_judges("q", "q1", [])

        assert [a.question_id for a in store.get_judge_assignments()] == ["q2"]


class TestEvaluations:
    def test_evaluations_are_append_only(self) -> None:
        store = InMemoryStore()
        store.create_evaluation(_evaluation("e1"))

        with pytest.raises(StoreWriteError):
            store.create_evaluation(_evaluation("e1", verdict=Verdict.FAIL))

        assert store.get_evaluations()[0].verdict is Verdict.PASS

    def test_get_evaluations_applies_filter(self) -> None:
        store = InMemoryStore()
        store.create_evaluation(_evaluation("e1", judge_id="j1"))
        store.create_evaluation(_evaluation("e2", judge_id="j2", verdict=Verdict.FAIL))

        found = store.get_evaluations(EvaluationFilter(verdicts=[Verdict.FAIL]))

        assert [e.id for e in found] == ["e2"]

    def test_get_evaluations_by_queue_goes_through_submissions(self) -> None:
        store = InMemoryStore()
        seed_queue(store, "a", [make_submission("s1", "a", ["q1"])])
        seed_queue(store, "b", [make_submission("s2", "b", ["q1"])])
        store.create_evaluation(_evaluation("e1", submission_id="s1"))
        store.create_evaluation(_evaluation("e2", submission_id="s2"))

        assert [e.id for e in store.get_evaluations_by_queue("a")] == ["e1"]


class TestEvaluationRuns:
    def test_new_run_is_running_with_zero_counters(self) -> None:
        run = InMemoryStore().create_evaluation_run("q")

        assert run.status is RunStatus.RUNNING
        assert run.total_evaluations == 0
        assert run.processed == 0

    def test_update_applies_changes(self) -> None:
        store = InMemoryStore()
        run = store.create_evaluation_run("q")

        updated = store.update_evaluation_run(run.id, {"total_evaluations": 4})

        assert updated.total_evaluations == 4
        assert store.get_evaluation_runs("q") == [updated]

    def test_terminal_run_cannot_be_updated(self) -> None:
        store = InMemoryStore()
        run = store.create_evaluation_run("q")
        store.update_evaluation_run(run.id, {"status": RunStatus.COMPLETED})

        with pytest.raises(StoreWriteError, match="already completed"):
            store.update_evaluation_run(run.id, {"total_evaluations": 1})

    def test_invalid_value_is_rejected(self) -> None:
        store = InMemoryStore()
        run = store.create_evaluation_run("q")

        with pytest.raises(StoreWriteError):
            store.update_evaluation_run(run.id, {"failed_evaluations": -1})

    def test_identity_fields_are_not_updatable(self) -> None:
        store = InMemoryStore()
        run = store.create_evaluation_run("q")

        with pytest.raises(StoreWriteError, match="not updatable"):
            store.update_evaluation_run(run.id, {"queue_id": "other"})

    def test_unknown_run_raises_not_found(self) -> None:
        with pytest.raises(RecordNotFoundError):
            InMemoryStore().update_evaluation_run("run_x", {"total_evaluations": 1})
