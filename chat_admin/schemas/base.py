"""Shared model configuration for API envelopes."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Response envelope serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RowModel(BaseModel):
    """A store row; unknown columns are passed through unchanged."""

    model_config = ConfigDict(extra="allow", from_attributes=True)
