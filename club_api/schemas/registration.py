"""Registration Schemas — the status document returned by registration routes."""

from pydantic import BaseModel

from club_api.core.domain_types import RegistrationStatus


class RegistrationStatusResponse(BaseModel):
    status: RegistrationStatus
