"""OracleObserver port — domain events emitted during scoring oracle calls."""

from typing import Protocol


class OracleObserver(Protocol):
    """Observer port for scoring oracle events.

    Implementations may log to structlog, record for tests, or emit metrics.
    """

    def oracle_call_started(self, model: str) -> None: ...

    def oracle_call_completed(self, model: str, duration_ms: int) -> None: ...

    def oracle_call_failed(self, model: str, reason: str) -> None: ...
