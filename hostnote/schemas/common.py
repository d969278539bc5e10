"""Common schemas used across multiple endpoints."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
