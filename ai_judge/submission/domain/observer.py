"""Observer port for the submission domain — defines events in domain language."""

from typing import Protocol


class SubmissionObserver(Protocol):
    """Observer port emitting structured events during ingestion.

    Implementations may log to structlog or record for tests.
    """

    def parsing_started(self, size_bytes: int) -> None: ...

    def parsing_completed(
        self, disambiguator: str, total_queues: int, total_submissions: int
    ) -> None: ...

    def parsing_failed(self, reason: str) -> None: ...

    def queue_creation_retry(
        self, attempt: int, reason: str, backoff_seconds: float
    ) -> None: ...

    def ingestion_completed(self, total_queues: int, total_submissions: int) -> None: ...

    def ingestion_failed(self, reason: str) -> None: ...
