"""Auxiliary Schemas — event types, locations and club info."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EventTypeCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str = Field("", max_length=2000)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class EventTypeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str


class LocationCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    route: str = Field("", max_length=5000)
    features: str = Field("", max_length=5000)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class LocationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    route: str
    features: str


class ClubInfoUpdate(BaseModel):
    value: str = Field(max_length=20_000)


class ClubInfoResponse(BaseModel):
    key: str
    value: str
