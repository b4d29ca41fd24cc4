"""
Pydantic schemas for fact endpoints.

JSON uses camelCase keys (`sourceUrl`, `createdAt`, ...); snake_case is
accepted on input as well.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FactCreate(_CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    body: str = Field(..., min_length=1)
    tag: str = Field(..., min_length=1, max_length=50)
    source_url: str | None = Field(default=None, max_length=500)


class FactUpdate(FactCreate):
    """
    Full replacement of the mutable fields; an omitted sourceUrl clears it.
    """


class FactResponse(_CamelModel):
    id: str
    title: str
    body: str
    tag: str
    source_url: str | None = None
    created_at: datetime
    updated_at: datetime
