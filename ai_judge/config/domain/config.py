"""Top-level AppConfig aggregate — the root configuration object."""

from pydantic import BaseModel, Field

from ai_judge.config.domain.execution import ExecutionConfig
from ai_judge.config.domain.ingestion import IngestionConfig
from ai_judge.config.domain.oracle import OracleConfig


class AppConfig(BaseModel, frozen=True):
    """Root configuration aggregate for ingestion and evaluation runs.

    Every section has defaults, so an empty YAML document is a valid config.
    """

    name: str = Field(default="ai-judge", min_length=1)
    oracle: OracleConfig = Field(default_factory=OracleConfig)
    execution: ExecutionConfig = Field(default_factory=ExecutionConfig)
    ingestion: IngestionConfig = Field(default_factory=IngestionConfig)
