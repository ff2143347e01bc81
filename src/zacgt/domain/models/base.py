from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

LedgerDateTime = Annotated[
    datetime,
    PlainSerializer(lambda value: value.strftime(DATETIME_FORMAT), return_type=str, when_used="json"),
]


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase JSON for the frontend."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
