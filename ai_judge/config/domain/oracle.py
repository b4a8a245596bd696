"""Scoring oracle configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field


class OracleConfig(BaseModel, frozen=True):
    """Settings for the LLM-backed scoring oracle.

    ``default_model`` is used for judges whose ``model_name`` is empty.
    ``template_path`` points at a prompt template using ``{{systemPrompt}}``,
    ``{{question}}`` and ``{{answer}}`` placeholders; the built-in template is
    used when it is unset.
    """

    default_model: str = Field(default="groq/openai/gpt-oss-120b", min_length=1)
    temperature: float = Field(default=0.3, ge=0.0)
    max_tokens: int = Field(default=500, ge=1)
    template_path: Path | None = None
