"""Error types raised by scoring oracle infrastructure.

Oracle call errors are retriable: the executor retries them with backoff and
records a failed evaluation once attempts are exhausted.
"""

from ai_judge.core.errors import AiJudgeError


class OracleInvocationError(AiJudgeError):
    """Raised when the scoring oracle cannot be invoked or raises."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to invoke scoring oracle: {reason}", retriable=True)


class OracleTimeoutError(AiJudgeError):
    """Raised when a single oracle attempt exceeds its time bound."""

    def __init__(self, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Scoring oracle timed out after {timeout_seconds:g}s", retriable=True
        )


class OracleMalformedResponseError(AiJudgeError):
    """Raised when the oracle response lacks a valid verdict or reasoning."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            f"Malformed scoring oracle response: {reason}", retriable=True
        )


class PromptTemplateError(AiJudgeError):
    """Raised when an evaluation prompt template cannot be compiled."""

    def __init__(self, origin: str, reason: str) -> None:
        self.origin = origin
        super().__init__(f"Invalid prompt template {origin}: {reason}")
