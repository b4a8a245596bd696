"""Base exception class for all ai-judge-specific errors."""


class AiJudgeError(Exception):
    """Base class for all ai-judge errors."""

    def __init__(self, message: str, retriable: bool = False) -> None:
        super().__init__(message)
        self.retriable = retriable
