"""JSON submission parser — validates an upload and normalizes it into queues and submissions."""

import json
import time
from collections.abc import Callable
from datetime import UTC, datetime

from pydantic import TypeAdapter, ValidationError

from ai_judge.submission.domain.batch import IngestionBatch
from ai_judge.submission.domain.observer import SubmissionObserver
from ai_judge.submission.domain.queue import Queue
from ai_judge.submission.domain.submission import Submission
from ai_judge.submission.infrastructure.errors import (
    SchemaIssue,
    SchemaValidationError,
)

_SUBMISSIONS = TypeAdapter(list[Submission])


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class SubmissionParser:
    """Turns raw upload bytes into an IngestionBatch.

    Each call draws one disambiguator, the current epoch milliseconds, and
    appends it to every natural queue and submission id in that batch. The
    parser never issues the same disambiguator twice, even for two calls
    within the same millisecond.
    """

    def __init__(
        self,
        observer: SubmissionObserver,
        clock: Callable[[], int] = _epoch_millis,
    ) -> None:
        self._observer = observer
        self._clock = clock
        self._last_stamp = 0

    def parse_and_normalize(self, raw: bytes) -> IngestionBatch:
        """
        Validate raw JSON bytes and return the normalized batch.

        Raises:
            SchemaValidationError: listing every structural violation when the
                bytes are not a JSON array of valid submissions. Nothing from
                the batch is returned in that case.
        """
        self._observer.parsing_started(size_bytes=len(raw))
        try:
            validated = _validate(raw=raw)
        except SchemaValidationError as exc:
            self._observer.parsing_failed(reason=str(exc))
            raise

        stamp = self._next_stamp()
        disambiguator = str(stamp)
        created_at = datetime.fromtimestamp(stamp / 1000, tz=UTC)

        queues = extract_queues(
            submissions=validated,
            disambiguator=disambiguator,
            created_at=created_at,
        )
        submissions = [
            item.model_copy(
                update={
                    "id": f"{item.id}_{disambiguator}",
                    "queue_id": f"{item.queue_id}_{disambiguator}",
                }
            )
            for item in validated
        ]

        self._observer.parsing_completed(
            disambiguator=disambiguator,
            total_queues=len(queues),
            total_submissions=len(submissions),
        )
        return IngestionBatch(
            disambiguator=disambiguator,
            queues=queues,
            submissions=submissions,
        )

    def _next_stamp(self) -> int:
        stamp = max(self._clock(), self._last_stamp + 1)
        self._last_stamp = stamp
        return stamp


def extract_queues(
    submissions: list[Submission],
    disambiguator: str,
    created_at: datetime,
) -> list[Queue]:
    """Build one Queue per distinct natural queue id, in first-seen order.

    ``submissions`` carry natural (not yet disambiguated) queue ids.
    """
    counts: dict[str, int] = {}
    for submission in submissions:
        counts[submission.queue_id] = counts.get(submission.queue_id, 0) + 1

    label = created_at.strftime("%Y-%m-%d %H:%M:%S UTC")
    return [
        Queue(
            id=f"{source_id}_{disambiguator}",
            source_id=source_id,
            name=f"Queue {source_id} ({label})",
            description=f"Imported queue from submissions at {label}",
            created_at=created_at,
            submission_count=count,
        )
        for source_id, count in counts.items()
    ]


def extract_unique_questions(submissions: list[Submission]) -> list[dict[str, str]]:
    """Return each distinct question id once with its text and type (first seen wins)."""
    seen: dict[str, dict[str, str]] = {}
    for submission in submissions:
        for question in submission.questions:
            if question.id not in seen:
                seen[question.id] = {
                    "id": question.id,
                    "text": question.data.question_text,
                    "type": question.data.question_type.value,
                }
    return list(seen.values())


def _validate(raw: bytes) -> list[Submission]:
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SchemaValidationError(
            [SchemaIssue(path="", message=f"Invalid JSON format: {exc}")]
        ) from exc

    if not isinstance(data, list):
        raise SchemaValidationError(
            [SchemaIssue(path="", message="Expected a JSON array of submissions")]
        )

    try:
        submissions = _SUBMISSIONS.validate_python(data)
    except ValidationError as exc:
        issues = [
            SchemaIssue(
                path=".".join(str(part) for part in error["loc"]),
                message=error["msg"],
            )
            for error in exc.errors()
        ]
        raise SchemaValidationError(issues) from exc

    # Copies of one id would collapse into a single stored row.
    seen: set[str] = set()
    duplicates: list[SchemaIssue] = []
    for index, submission in enumerate(submissions):
        if submission.id in seen:
            duplicates.append(
                SchemaIssue(
                    path=f"{index}.id",
                    message=f"Duplicate submission id {submission.id!r}",
                )
            )
        seen.add(submission.id)
    if duplicates:
        raise SchemaValidationError(duplicates)
    return submissions
