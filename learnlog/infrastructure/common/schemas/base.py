"""Base model for JSON bodies exchanged with clients."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model whose JSON field names are the camelCase form of its attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(BaseModel):
    """Request body read by camelCase name only; unknown keys are ignored."""

    model_config = ConfigDict(alias_generator=to_camel, extra="ignore")
