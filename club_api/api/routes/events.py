"""Event Routes — event CRUD plus upcoming / member-scoped listings.

Invariants:
    - Static paths (/upcoming, /available, /registered) are declared before /{event_id}
    - /available and /registered are approval-gated through RegistrationFacade
    - PUT never lowers capacity below the seats already taken (409)
"""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from club_api.api.routes.registrations import get_registration_facade
from club_api.core.domain_types import (
    MAX_INT_VALUE, EventId, EventTypeId, LocationId, MemberId,
)
from club_api.infrastructure.database import get_db
from club_api.schemas.event import EventCreate, EventResponse, EventUpdate
from club_api.services.event_catalog import EventCatalog
from club_api.services.registration_facade import RegistrationFacade

router = APIRouter(prefix="/api/v1/events", tags=["events"])


@router.get("", response_model=list[EventResponse])
async def list_events(
    event_type_id: int | None = Query(None, alias="type", ge=1, le=MAX_INT_VALUE),
    date_from: datetime | None = Query(None),
    date_to: datetime | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """List events, optionally filtered by type and date range (inclusive)."""
    return await EventCatalog(db).list_events(
        event_type_id=EventTypeId(event_type_id) if event_type_id else None,
        date_from=date_from, date_to=date_to,
    )


@router.post(
    "", response_model=EventResponse, status_code=status.HTTP_201_CREATED,
)
async def create_event(body: EventCreate, db: AsyncSession = Depends(get_db)):
    catalog = EventCatalog(db)
    event_id = await catalog.add(
        title=body.title, description=body.description,
        event_type_id=EventTypeId(body.event_type_id),
        event_date=body.event_date,
        location_id=LocationId(body.location_id),
        capacity=body.capacity,
    )
    return await catalog.get(event_id)


@router.get("/upcoming", response_model=list[EventResponse])
async def list_upcoming_events(db: AsyncSession = Depends(get_db)):
    return await EventCatalog(db).upcoming()


@router.get("/available", response_model=list[EventResponse])
async def list_available_events(
    member_id: UUID = Query(alias="memberId"),
    facade: RegistrationFacade = Depends(get_registration_facade),
):
    """Upcoming events an approved member can still register for."""
    return await facade.available_events(MemberId(member_id))


@router.get("/registered", response_model=list[EventResponse])
async def list_registered_events(
    member_id: UUID = Query(alias="memberId"),
    facade: RegistrationFacade = Depends(get_registration_facade),
):
    """Upcoming events an approved member currently holds a seat in."""
    return await facade.registered_events(MemberId(member_id))


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: int = Path(ge=1, le=MAX_INT_VALUE),
    db: AsyncSession = Depends(get_db),
):
    return await EventCatalog(db).get(EventId(event_id))


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    body: EventUpdate,
    event_id: int = Path(ge=1, le=MAX_INT_VALUE),
    db: AsyncSession = Depends(get_db),
):
    return await EventCatalog(db).update(
        EventId(event_id),
        title=body.title, description=body.description,
        event_type_id=EventTypeId(body.event_type_id),
        event_date=body.event_date,
        location_id=LocationId(body.location_id),
        capacity=body.capacity,
    )


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: int = Path(ge=1, le=MAX_INT_VALUE),
    db: AsyncSession = Depends(get_db),
):
    """Delete an event together with all of its registrations."""
    await EventCatalog(db).delete(EventId(event_id))
