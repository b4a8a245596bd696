"""Error types raised by store implementations."""

from ai_judge.core.errors import AiJudgeError


class StoreWriteError(AiJudgeError):
    """Raised when the store cannot accept a write."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        super().__init__(f"Failed to {operation}: {reason}")


class RecordNotFoundError(AiJudgeError):
    """Raised when an update or delete targets a record that does not exist."""

    def __init__(self, kind: str, record_id: str) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} not found: {record_id}")
