"""Event Schemas — event payloads with a positive capacity and UTC dates.

Invariants:
    - capacity and reference ids fit a 32-bit INTEGER column (1..2**31-1)
    - event_date is timezone-aware UTC once validated (naive input is read as UTC)
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from club_api.core.domain_types import MAX_INT_VALUE


class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field("", max_length=10_000)
    event_type_id: int = Field(ge=1, le=MAX_INT_VALUE)
    event_date: datetime
    location_id: int = Field(ge=1, le=MAX_INT_VALUE)
    capacity: int = Field(ge=1, le=MAX_INT_VALUE)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v

    @field_validator("event_date")
    @classmethod
    def to_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class EventUpdate(EventCreate):
    """Full event replacement (PUT); capacity may not drop below taken seats."""


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    event_type_id: int
    event_date: datetime
    location_id: int
    capacity: int
