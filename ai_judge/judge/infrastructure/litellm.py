"""LiteLLMScoringOracle — scoring oracle implementation using LiteLLM chat completions."""

import json
import time
from collections.abc import Mapping

import litellm

from ai_judge.config.domain.oracle import OracleConfig
from ai_judge.judge.domain.observer import OracleObserver
from ai_judge.judge.infrastructure.errors import (
    OracleInvocationError,
    OracleMalformedResponseError,
)
from ai_judge.judge.infrastructure.prompt import load_template, render_template


class LiteLLMScoringOracle:
    """Scoring oracle that asks an LLM for a JSON verdict via LiteLLM.

    The whole rendered template goes out as one user message. The template is
    read once, at construction. Validation of the verdict itself is left to
    the caller; this class only guarantees a JSON object comes back.
    """

    def __init__(self, config: OracleConfig, observer: OracleObserver) -> None:
        """
        Raises:
            PromptTemplateError: if the configured template does not compile.
        """
        self._config = config
        self._observer = observer
        self._template = load_template(path=config.template_path)

    async def evaluate(
        self,
        system_prompt: str,
        question_text: str,
        formatted_answer: str,
        model_name: str,
    ) -> Mapping[str, object]:
        """Invoke the LLM and return its decoded JSON object.

        Raises:
            OracleInvocationError: if the completion call fails.
            OracleMalformedResponseError: if the reply is empty, not JSON, or
                not a JSON object.
        """
        model = model_name or self._config.default_model
        prompt = render_template(
            self._template,
            {
                "systemPrompt": system_prompt,
                "question": question_text,
                "answer": formatted_answer,
            },
        )

        self._observer.oracle_call_started(model=model)
        start = time.monotonic()
        try:
            response = await litellm.acompletion(
                model=model,
                temperature=self._config.temperature,
                max_tokens=self._config.max_tokens,
                response_format={"type": "json_object"},
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as exc:
            reason = str(exc)
            self._observer.oracle_call_failed(model=model, reason=reason)
            raise OracleInvocationError(reason=reason) from exc

        duration_ms = int((time.monotonic() - start) * 1000)

        try:
            result = _decode(content=response.choices[0].message.content)
        except OracleMalformedResponseError as exc:
            self._observer.oracle_call_failed(model=model, reason=str(exc))
            raise

        self._observer.oracle_call_completed(model=model, duration_ms=duration_ms)
        return result


def _decode(content: str | None) -> dict[str, object]:
    if not content:
        raise OracleMalformedResponseError(reason="no response content")
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise OracleMalformedResponseError(reason=f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise OracleMalformedResponseError(
            reason=f"expected a JSON object, got {type(data).__name__}"
        )
    return data
