"""Structlog implementation of the OracleObserver port."""

import structlog


class StructlogOracleObserver:
    """Delegates scoring oracle events to structlog.

    Satisfies the OracleObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def oracle_call_started(self, model: str) -> None:
        self._log.debug("oracle.call_started", model=model)

    def oracle_call_completed(self, model: str, duration_ms: int) -> None:
        self._log.debug("oracle.call_completed", model=model, duration_ms=duration_ms)

    def oracle_call_failed(self, model: str, reason: str) -> None:
        self._log.warning("oracle.call_failed", model=model, reason=reason)
