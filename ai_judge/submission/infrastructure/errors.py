"""Error types raised while ingesting submission batches."""

from dataclasses import dataclass

from ai_judge.core.errors import AiJudgeError


@dataclass(frozen=True)
class SchemaIssue:
    """One structural violation: dotted location inside the upload plus message."""

    path: str
    message: str

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return f"{self.path}: {self.message}"


class SchemaValidationError(AiJudgeError):
    """Raised when an upload is not a valid submission batch.

    Carries every issue found; the whole batch is rejected.
    """

    def __init__(self, issues: list[SchemaIssue]) -> None:
        self.issues = issues
        detail = ", ".join(str(issue) for issue in issues)
        super().__init__(f"Validation failed: {detail}")

    @property
    def path(self) -> str:
        return self.issues[0].path if self.issues else ""


class ReferentialIntegrityError(AiJudgeError):
    """Raised when queues are still missing from the store after creation."""

    def __init__(self, missing_queue_ids: list[str]) -> None:
        self.missing_queue_ids = missing_queue_ids
        super().__init__(f"Failed to create queues: {', '.join(missing_queue_ids)}")
