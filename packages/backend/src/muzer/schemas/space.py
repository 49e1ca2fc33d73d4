"""Pydantic schemas for spaces.

The wire format is camelCase (hostId, isActive, ...). Models are
populated from ORM rows by attribute name and serialized by alias.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SpaceRead(BaseModel):
    id: str
    name: str
    host_id: str
    is_active: bool
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SpaceCreate(BaseModel):
    """Body of POST /api/spaces. Emptiness is checked by the route."""

    space_name: Optional[str] = Field(default=None, alias="spaceName")


# ─── Response envelopes ─────────────────────────────────

class SpaceListResponse(BaseModel):
    success: bool = True
    spaces: list[SpaceRead]


class SpaceHostResponse(BaseModel):
    success: bool = True
    host_id: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SpaceCreatedResponse(BaseModel):
    success: bool = True
    message: str
    space: SpaceRead


class MessageResponse(BaseModel):
    success: bool = True
    message: str
