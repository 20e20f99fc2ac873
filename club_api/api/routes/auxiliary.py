"""Auxiliary Routes — event types, locations and club info."""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from club_api.core.domain_types import MAX_INT_VALUE, EventTypeId, LocationId
from club_api.infrastructure.database import get_db
from club_api.schemas.auxiliary import (
    ClubInfoResponse, ClubInfoUpdate, EventTypeCreate, EventTypeResponse,
    LocationCreate, LocationResponse,
)
from club_api.services.auxiliary_catalog import AuxiliaryCatalog

router = APIRouter(prefix="/api/v1", tags=["auxiliary"])


# ─── Event types ─────────────────────────────────────────────────

@router.get("/types", response_model=list[EventTypeResponse])
async def list_event_types(db: AsyncSession = Depends(get_db)):
    return await AuxiliaryCatalog(db).list_event_types()


@router.post(
    "/types", response_model=EventTypeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_event_type(
    body: EventTypeCreate, db: AsyncSession = Depends(get_db),
):
    return await AuxiliaryCatalog(db).add_event_type(body.name, body.description)


@router.get("/types/{event_type_id}", response_model=EventTypeResponse)
async def get_event_type(
    event_type_id: int = Path(ge=1, le=MAX_INT_VALUE),
    db: AsyncSession = Depends(get_db),
):
    return await AuxiliaryCatalog(db).get_event_type(EventTypeId(event_type_id))


# ─── Locations ───────────────────────────────────────────────────

@router.get("/locations", response_model=list[LocationResponse])
async def list_locations(db: AsyncSession = Depends(get_db)):
    return await AuxiliaryCatalog(db).list_locations()


@router.post(
    "/locations", response_model=LocationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_location(
    body: LocationCreate, db: AsyncSession = Depends(get_db),
):
    return await AuxiliaryCatalog(db).add_location(
        body.name, body.route, body.features,
    )


@router.get("/locations/{location_id}", response_model=LocationResponse)
async def get_location(
    location_id: int = Path(ge=1, le=MAX_INT_VALUE),
    db: AsyncSession = Depends(get_db),
):
    return await AuxiliaryCatalog(db).get_location(LocationId(location_id))


# ─── Club info ───────────────────────────────────────────────────

@router.get("/info/{key}", response_model=ClubInfoResponse)
async def get_club_info(
    key: str = Path(max_length=100), db: AsyncSession = Depends(get_db),
):
    value = await AuxiliaryCatalog(db).get_info(key)
    return ClubInfoResponse(key=key, value=value)


@router.put("/info/{key}", response_model=ClubInfoResponse)
async def put_club_info(
    body: ClubInfoUpdate,
    key: str = Path(max_length=100),
    db: AsyncSession = Depends(get_db),
):
    value = await AuxiliaryCatalog(db).put_info(key, body.value)
    return ClubInfoResponse(key=key, value=value)
