"""SubmissionIngestor — parses an upload and persists its queues and submissions."""

import asyncio
from pathlib import Path

from ai_judge.config.domain.ingestion import IngestionConfig
from ai_judge.core.errors import AiJudgeError
from ai_judge.storage.domain.store import Store
from ai_judge.storage.infrastructure.errors import StoreWriteError
from ai_judge.submission.domain.batch import IngestionBatch
from ai_judge.submission.domain.observer import SubmissionObserver
from ai_judge.submission.infrastructure.errors import ReferentialIntegrityError
from ai_judge.submission.infrastructure.json_parser import SubmissionParser


class SubmissionIngestor:
    """Runs one upload end to end: validate, create queues, then submissions.

    Queues are created first and verified to exist before any submission is
    written, so every stored submission references a stored queue. A schema
    error stops the upload before the store is touched.
    """

    def __init__(
        self,
        parser: SubmissionParser,
        store: Store,
        config: IngestionConfig,
        observer: SubmissionObserver,
    ) -> None:
        self._parser = parser
        self._store = store
        self._config = config
        self._observer = observer

    async def ingest_file(self, path: Path) -> IngestionBatch:
        """Read path off the event loop and ingest its contents."""
        raw = await asyncio.to_thread(path.read_bytes)
        return await self.ingest(raw=raw)

    async def ingest(self, raw: bytes) -> IngestionBatch:
        """
        Validate raw bytes and persist the resulting batch.

        Raises:
            SchemaValidationError: if the upload is malformed; nothing is written.
            ReferentialIntegrityError: if queues are still missing after the
                last creation attempt.
            StoreWriteError: if queue creation keeps failing or the submissions
                cannot be written.
        """
        try:
            batch = self._parser.parse_and_normalize(raw)
            await self._create_queues(batch=batch)
            self._store.upload_submissions(batch.submissions)
        except AiJudgeError as exc:
            self._observer.ingestion_failed(reason=str(exc))
            raise

        self._observer.ingestion_completed(
            total_queues=len(batch.queues),
            total_submissions=len(batch.submissions),
        )
        return batch

    async def _create_queues(self, batch: IngestionBatch) -> None:
        """Upsert the batch's queues, retrying until all of them can be read back."""
        max_attempts = self._config.queue_creation_attempts
        for attempt in range(1, max_attempts + 1):
            try:
                self._store.upsert_queues(batch.queues)
                missing = [
                    q.id for q in batch.queues if self._store.get_queue(q.id) is None
                ]
                if not missing:
                    return
                error: AiJudgeError = ReferentialIntegrityError(
                    missing_queue_ids=missing
                )
            except StoreWriteError as exc:
                error = exc

            if attempt == max_attempts:
                raise error

            backoff = self._config.queue_creation_backoff_seconds * attempt
            self._observer.queue_creation_retry(
                attempt=attempt,
                reason=str(error),
                backoff_seconds=backoff,
            )
            await asyncio.sleep(backoff)
