"""FakeSubmissionObserver — records ingestion events for assertion in tests."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParsingCompletedEvent:
    disambiguator: str
    total_queues: int
    total_submissions: int


@dataclass(frozen=True)
class QueueRetryEvent:
    attempt: int
    reason: str
    backoff_seconds: float


class FakeSubmissionObserver:
    """Records all emitted submission events without mocking or patching."""

    def __init__(self) -> None:
        self.parse_sizes: list[int] = []
        self.parsed: list[ParsingCompletedEvent] = []
        self.parse_failures: list[str] = []
        self.queue_retries: list[QueueRetryEvent] = []
        self.ingested: list[tuple[int, int]] = []
        self.ingest_failures: list[str] = []

    def parsing_started(self, size_bytes: int) -> None:
        self.parse_sizes.append(size_bytes)

    def parsing_completed(
        self, disambiguator: str, total_queues: int, total_submissions: int
    ) -> None:
        self.parsed.append(
            ParsingCompletedEvent(
                disambiguator=disambiguator,
                total_queues=total_queues,
                total_submissions=total_submissions,
            )
        )

    def parsing_failed(self, reason: str) -> None:
        self.parse_failures.append(reason)

    def queue_creation_retry(
        self, attempt: int, reason: str, backoff_seconds: float
    ) -> None:
        self.queue_retries.append(
            QueueRetryEvent(attempt=attempt, reason=reason, backoff_seconds=backoff_seconds)
        )

    def ingestion_completed(self, total_queues: int, total_submissions: int) -> None:
        self.ingested.append((total_queues, total_submissions))

    def ingestion_failed(self, reason: str) -> None:
        self.ingest_failures.append(reason)
