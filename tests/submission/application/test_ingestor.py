"""Tests for SubmissionIngestor: persistence order and queue-creation retry."""

from pathlib import Path

import pytest

from ai_judge.config.domain.ingestion import IngestionConfig
from ai_judge.storage.infrastructure.errors import StoreWriteError
from ai_judge.storage.infrastructure.memory import InMemoryStore
from ai_judge.submission.application.ingestor import SubmissionIngestor
from ai_judge.submission.infrastructure.errors import (
    ReferentialIntegrityError,
    SchemaValidationError,
)
from ai_judge.submission.infrastructure.json_parser import SubmissionParser
from tests.storage.failing_store import FailingStore
from tests.submission.fake_observer import FakeSubmissionObserver

FIXTURES = Path(__file__).parents[2] / "fixtures"
_RAW = (FIXTURES / "submissions.json").read_bytes()


def _make_ingestor(
    store: InMemoryStore,
    attempts: int = 3,
) -> tuple[SubmissionIngestor, FakeSubmissionObserver]:
    observer = FakeSubmissionObserver()
    ingestor = SubmissionIngestor(
        parser=SubmissionParser(observer=observer),
        store=store,
        config=IngestionConfig(
            queue_creation_attempts=attempts, queue_creation_backoff_seconds=0
        ),
        observer=observer,
    )
    return ingestor, observer


class TestIngest:
    async def test_persists_queues_and_submissions(self) -> None:
        store = InMemoryStore()
        ingestor, observer = _make_ingestor(store=store)

        batch = await ingestor.ingest(_RAW)

        assert [q.id for q in store.get_queues()] == [q.id for q in batch.queues]
        assert len(store.get_submissions()) == 3
        assert observer.ingested == [(2, 3)]

    async def test_stored_submissions_reference_stored_queues(self) -> None:
        store = InMemoryStore()
        ingestor, _ = _make_ingestor(store=store)

        await ingestor.ingest(_RAW)

        for submission in store.get_submissions():
            assert store.get_queue(submission.queue_id) is not None

    async def test_ingest_file_reads_from_disk(self, tmp_path: Path) -> None:
        path = tmp_path / "upload.json"
        path.write_bytes(_RAW)
        store = InMemoryStore()
        ingestor, _ = _make_ingestor(store=store)

        batch = await ingestor.ingest_file(path)

        assert len(batch.submissions) == 3

    async def test_same_upload_twice_creates_distinct_records(self) -> None:
        store = InMemoryStore()
        ingestor, _ = _make_ingestor(store=store)

        await ingestor.ingest(_RAW)
        await ingestor.ingest(_RAW)

        assert len(store.get_queues()) == 4
        assert len(store.get_submissions()) == 6

    async def test_schema_error_leaves_store_untouched(self) -> None:
        store = InMemoryStore()
        ingestor, observer = _make_ingestor(store=store)
        raw = _RAW.replace(b'{"choice": "no"}', b"{}")

        with pytest.raises(SchemaValidationError):
            await ingestor.ingest(raw)

        assert store.get_queues() == []
        assert store.get_submissions() == []
        assert len(observer.ingest_failures) == 1


class TestQueueCreationRetry:
    async def test_dropped_upsert_is_retried(self) -> None:
        store = FailingStore(dropped_queue_upserts=1)
        ingestor, observer = _make_ingestor(store=store)

        await ingestor.ingest(_RAW)

        assert store.queue_upsert_calls == 2
        assert len(observer.queue_retries) == 1
        assert observer.queue_retries[0].attempt == 1
        assert len(store.get_submissions()) == 3

    async def test_write_error_is_retried(self) -> None:
        store = FailingStore(queue_upsert_failures=2)
        ingestor, observer = _make_ingestor(store=store, attempts=3)

        await ingestor.ingest(_RAW)

        assert [r.attempt for r in observer.queue_retries] == [1, 2]
        assert len(store.get_queues()) == 2

    async def test_queues_still_missing_raise_referential_integrity_error(
        self,
    ) -> None:
        store = FailingStore(dropped_queue_upserts=5)
        ingestor, observer = _make_ingestor(store=store, attempts=2)

        with pytest.raises(ReferentialIntegrityError) as exc_info:
            await ingestor.ingest(_RAW)

        assert len(exc_info.value.missing_queue_ids) == 2
        assert store.get_submissions() == []
        assert len(observer.ingest_failures) == 1

    async def test_persistent_write_error_is_raised_after_last_attempt(
        self,
    ) -> None:
        store = FailingStore(queue_upsert_failures=5)
        ingestor, _ = _make_ingestor(store=store, attempts=2)

        with pytest.raises(StoreWriteError):
            await ingestor.ingest(_RAW)

        assert store.queue_upsert_calls == 2
