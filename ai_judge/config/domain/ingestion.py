"""Ingestion configuration model."""

from pydantic import BaseModel, Field


class IngestionConfig(BaseModel, frozen=True):
    queue_creation_attempts: int = Field(default=3, ge=1)
    queue_creation_backoff_seconds: float = Field(default=0.5, ge=0.0)
