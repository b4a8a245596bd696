"""IngestionBatch — the normalized output of one ingestion call."""

from pydantic import BaseModel, Field

from ai_judge.submission.domain.queue import Queue
from ai_judge.submission.domain.submission import Submission


class IngestionBatch(BaseModel, frozen=True):
    """Queues and submissions produced from one upload.

    Every submission's ``queue_id`` is the ``id`` of exactly one queue in
    ``queues``; all ids share ``disambiguator``.
    """

    disambiguator: str = Field(min_length=1)
    queues: list[Queue]
    submissions: list[Submission]

    def queue_id_for(self, source_id: str) -> str | None:
        """Return the disambiguated id of the queue uploaded as source_id."""
        for queue in self.queues:
            if queue.source_id == source_id:
                return queue.id
        return None
