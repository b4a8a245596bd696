"""Tests for Verdict and OracleVerdict validation."""

import pytest
from pydantic import ValidationError

from ai_judge.judge.domain.verdict import OracleVerdict, Verdict


class TestOracleVerdict:
    @pytest.mark.parametrize("raw", ["pass", "PASS", " Pass "])
    def test_verdict_is_case_insensitive(self, raw: str) -> None:
        result = OracleVerdict.model_validate({"verdict": raw, "reasoning": "ok"})

        assert result.verdict is Verdict.PASS

    def test_extra_keys_are_ignored(self) -> None:
        result = OracleVerdict.model_validate(
            {"verdict": "fail", "reasoning": "no", "confidence": 0.9}
        )

        assert result.verdict is Verdict.FAIL

    def test_unknown_verdict_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            OracleVerdict.model_validate({"verdict": "maybe", "reasoning": "?"})

    def test_reasoning_must_be_a_string(self) -> None:
        with pytest.raises(ValidationError):
            OracleVerdict.model_validate({"verdict": "pass", "reasoning": 42})

    def test_reasoning_is_required(self) -> None:
        with pytest.raises(ValidationError):
            OracleVerdict.model_validate({"verdict": "pass"})
