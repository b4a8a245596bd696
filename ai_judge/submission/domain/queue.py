"""Queue — a named bucket of submissions evaluated together."""

from datetime import datetime

from pydantic import Field

from ai_judge.core.model import DomainModel


class Queue(DomainModel):
    """Queue created by one ingestion call.

    ``source_id`` is the natural queue id from the upload; ``id`` is that
    value suffixed with the batch disambiguator.
    """

    id: str = Field(min_length=1)
    source_id: str
    name: str
    description: str | None = None
    created_at: datetime
    submission_count: int = Field(default=0, ge=0)
