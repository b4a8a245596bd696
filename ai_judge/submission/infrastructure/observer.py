"""Structlog implementation of the SubmissionObserver port."""

import structlog


class StructlogSubmissionObserver:
    """Delegates submission domain events to structlog.

    Satisfies the SubmissionObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def parsing_started(self, size_bytes: int) -> None:
        self._log.info("submission.parsing_started", size_bytes=size_bytes)

    def parsing_completed(
        self, disambiguator: str, total_queues: int, total_submissions: int
    ) -> None:
        self._log.info(
            "submission.parsing_completed",
            disambiguator=disambiguator,
            total_queues=total_queues,
            total_submissions=total_submissions,
        )

    def parsing_failed(self, reason: str) -> None:
        self._log.error("submission.parsing_failed", reason=reason)

    def queue_creation_retry(
        self, attempt: int, reason: str, backoff_seconds: float
    ) -> None:
        self._log.warning(
            "submission.queue_creation_retry",
            attempt=attempt,
            reason=reason,
            backoff_seconds=backoff_seconds,
        )

    def ingestion_completed(self, total_queues: int, total_submissions: int) -> None:
        self._log.info(
            "submission.ingestion_completed",
            total_queues=total_queues,
            total_submissions=total_submissions,
        )

    def ingestion_failed(self, reason: str) -> None:
        self._log.error("submission.ingestion_failed", reason=reason)
