"""Verdict values and the validated shape of a scoring oracle response."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, StrictStr, field_validator


class Verdict(StrEnum):
    PASS = "pass"
    FAIL = "fail"
    INCONCLUSIVE = "inconclusive"


class OracleVerdict(BaseModel):
    """A well-formed oracle response: a verdict and a reasoning string.

    The verdict is matched case-insensitively and stored lowercase. Extra keys
    in the response are ignored.
    """

    model_config = ConfigDict(frozen=True)

    verdict: Verdict
    reasoning: StrictStr

    @field_validator("verdict", mode="before")
    @classmethod
    def _lowercase_verdict(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value
