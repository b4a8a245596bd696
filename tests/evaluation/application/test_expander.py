"""Tests for TaskExpander."""

from ai_judge.evaluation.application.expander import TaskExpander
from ai_judge.storage.infrastructure.memory import InMemoryStore
from tests.evaluation.fake_observer import FakeEvaluationObserver
from tests.evaluation.seed import make_submission, seed_judge, seed_queue


def _expand(
    store: InMemoryStore, queue_id: str = "q"
) -> tuple[list[tuple[str, str, str]], FakeEvaluationObserver]:
    observer = FakeEvaluationObserver()
    tasks = TaskExpander(store=store, observer=observer).expand(queue_id=queue_id)
    return [(t.submission.id, t.question_id, t.judge_id) for t in tasks], observer


class TestTaskExpander:
    def test_cross_product_of_submissions_questions_and_judges(self) -> None:
        store = InMemoryStore()
        seed_queue(
            store,
            "q",
            [
                make_submission("s1", "q", ["a", "b"]),
                make_submission("s2", "q", ["a", "b"]),
            ],
        )
        seed_judge(store, "j1")
        seed_judge(store, "j2")
        store.assign_judges("q", "a", ["j1", "j2"])
        store.assign_judges("q", "b", ["j1", "j2"])

        triples, _ = _expand(store)

        assert triples == [
            ("s1", "a", "j1"),
            ("s1", "a", "j2"),
            ("s1", "b", "j1"),
            ("s1", "b", "j2"),
            ("s2", "a", "j1"),
            ("s2", "a", "j2"),
            ("s2", "b", "j1"),
            ("s2", "b", "j2"),
        ]

    def test_question_without_assignment_yields_nothing(self) -> None:
        store = InMemoryStore()
        seed_queue(store, "q", [make_submission("s1", "q", ["a", "b"])])
        seed_judge(store, "j1")
        store.assign_judges("q", "a", ["j1"])

        triples, _ = _expand(store)

        assert triples == [("s1", "a", "j1")]

    def test_inactive_judge_is_skipped(self) -> None:
        store = InMemoryStore()
        seed_queue(store, "q", [make_submission("s1", "q", ["a"])])
        seed_judge(store, "j1", is_active=False)
        store.assign_judges("q", "a", ["j1"])

        triples, observer = _expand(store)

        assert triples == []
        assert observer.skipped[0].reason == "judge inactive"

    def test_missing_judge_is_skipped(self) -> None:
        store = InMemoryStore()
        seed_queue(store, "q", [make_submission("s1", "q", ["a"])])
        store.assign_judges("q", "a", ["ghost"])

        triples, observer = _expand(store)

        assert triples == []
        assert observer.skipped[0].judge_id == "ghost"
        assert observer.skipped[0].reason == "judge missing"

    def test_assignments_of_other_queues_are_ignored(self) -> None:
        store = InMemoryStore()
        seed_queue(store, "q", [make_submission("s1", "q", ["a"])])
        seed_judge(store, "j1")
        store.assign_judges("other", "a", ["j1"])

        triples, _ = _expand(store)

        assert triples == []

    def test_expansion_is_deterministic(self) -> None:
        store = InMemoryStore()
        seed_queue(store, "q", [make_submission(f"s{i}", "q", ["a"]) for i in range(5)])
        seed_judge(store, "j1")
        store.assign_judges("q", "a", ["j1"])

        first, _ = _expand(store)
        second, _ = _expand(store)

        assert first == second

    def test_task_carries_judge_and_question(self) -> None:
        store = InMemoryStore()
        seed_queue(store, "q", [make_submission("s1", "q", ["a"])])
        judge = seed_judge(store, "j1")
        store.assign_judges("q", "a", ["j1"])

        task = TaskExpander(store=store, observer=FakeEvaluationObserver()).expand("q")[0]

        assert task.judge == judge
        assert task.question.data.question_text == "What about a?"
