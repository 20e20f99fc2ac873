r"""Member Schemas — contact validation and the public member representation.

Invariants:
    - email matches ^[^@]+@[^@]+\.[^@]+$ (one '@', a dot in the domain part)
    - phone is 11 digits starting with 7, no separators
    - status updates accept only pending / approved / declined
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from club_api.core.domain_types import MemberStatus

EMAIL_PATTERN = r"^[^@]+@[^@]+\.[^@]+$"
PHONE_PATTERN = r"^7\d{10}$"


class MemberCreate(BaseModel):
    """New member application — starts as pending."""
    full_name: str = Field(min_length=1, max_length=200)
    email: str = Field(max_length=320, pattern=EMAIL_PATTERN)
    phone: str = Field(pattern=PHONE_PATTERN)

    @field_validator("full_name")
    @classmethod
    def strip_full_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("full_name cannot be empty or whitespace")
        return v


class MemberUpdate(MemberCreate):
    """Full profile replacement (PUT)."""


class MemberStatusUpdate(BaseModel):
    status: MemberStatus


class MemberResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    full_name: str
    email: str
    phone: str
    status: MemberStatus
    created_at: datetime
