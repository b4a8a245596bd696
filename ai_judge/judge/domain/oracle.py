"""ScoringOracle Protocol — structural interface for the external evaluator."""

from collections.abc import Mapping
from typing import Protocol


class ScoringOracle(Protocol):
    """Structural interface satisfied by any scoring oracle implementation.

    Returns the raw response mapping; callers validate it. Implementations may
    raise on any failure.
    """

    async def evaluate(
        self,
        system_prompt: str,
        question_text: str,
        formatted_answer: str,
        model_name: str,
    ) -> Mapping[str, object]: ...
