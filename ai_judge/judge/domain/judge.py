"""Judge — a configured evaluator (prompt + model) usable for scoring."""

from datetime import datetime

from pydantic import Field

from ai_judge.core.model import DomainModel


class Judge(DomainModel):
    """Mutable-by-replacement judge record.

    Deactivated judges are excluded from future task expansion but keep their
    past evaluations.
    """

    id: str = Field(min_length=1)
    name: str
    system_prompt: str
    model_name: str = ""
    is_active: bool = True
    created_at: datetime
    updated_at: datetime
