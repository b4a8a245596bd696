"""DomainModel — shared pydantic base for records exchanged in camelCase."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DomainModel(BaseModel):
    """Immutable record with snake_case attributes and camelCase wire aliases.

    Input is accepted under either name; ``model_dump(by_alias=True)`` yields
    the camelCase shape used by uploads and exports.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
