"""Registration Routes — register, cancel and query one member's seat on one event.

Invariants:
    - memberId is a required UUID query parameter (400 when missing or malformed)
    - Every call goes through RegistrationFacade (approval gate for register)
    - POST → 201 {"status": "registered"}, DELETE/GET → 200 {"status": ...}
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from club_api.core.domain_types import MAX_INT_VALUE, EventId, MemberId
from club_api.infrastructure.database import get_db
from club_api.schemas.registration import RegistrationStatusResponse
from club_api.services.event_catalog import EventCatalog
from club_api.services.member_directory import MemberDirectory
from club_api.services.registration_facade import RegistrationFacade
from club_api.services.registration_ledger import RegistrationLedger

router = APIRouter(prefix="/api/v1/events", tags=["registrations"])


def get_registration_facade(
    db: AsyncSession = Depends(get_db),
) -> RegistrationFacade:
    """Wire the facade to services sharing the request's session."""
    catalog = EventCatalog(db)
    return RegistrationFacade(
        members=MemberDirectory(db),
        ledger=RegistrationLedger(db, catalog),
        events=catalog,
    )


@router.post(
    "/{event_id}/registration",
    response_model=RegistrationStatusResponse,
    status_code=status.HTTP_201_CREATED,
)
async def register_for_event(
    event_id: int = Path(ge=1, le=MAX_INT_VALUE),
    member_id: UUID = Query(alias="memberId"),
    facade: RegistrationFacade = Depends(get_registration_facade),
):
    result = await facade.register(MemberId(member_id), EventId(event_id))
    return RegistrationStatusResponse(status=result)


@router.delete(
    "/{event_id}/registration", response_model=RegistrationStatusResponse,
)
async def cancel_registration(
    event_id: int = Path(ge=1, le=MAX_INT_VALUE),
    member_id: UUID = Query(alias="memberId"),
    facade: RegistrationFacade = Depends(get_registration_facade),
):
    result = await facade.cancel(MemberId(member_id), EventId(event_id))
    return RegistrationStatusResponse(status=result)


@router.get(
    "/{event_id}/registration", response_model=RegistrationStatusResponse,
)
async def get_registration_status(
    event_id: int = Path(ge=1, le=MAX_INT_VALUE),
    member_id: UUID = Query(alias="memberId"),
    facade: RegistrationFacade = Depends(get_registration_facade),
):
    result = await facade.status_of(MemberId(member_id), EventId(event_id))
    return RegistrationStatusResponse(status=result)
