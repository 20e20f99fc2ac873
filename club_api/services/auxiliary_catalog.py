"""Auxiliary Catalog — event types, locations and club info reference data.

Invariants:
    - Event type and location names are unique (DuplicateNameError otherwise)
    - put_info() is an upsert: the key ends up holding exactly the given value
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from club_api.core.domain_types import EventTypeId, LocationId
from club_api.core.errors import (
    ClubInfoNotFoundError, DuplicateNameError,
    EventTypeNotFoundError, LocationNotFoundError,
)
from club_api.models.club_info import ClubInfo
from club_api.models.event_type import EventType
from club_api.models.location import Location

logger = logging.getLogger(__name__)


class AuxiliaryCatalog:
    """Reference data used by events and the club's public pages."""

    def __init__(self, db: AsyncSession):
        self._db = db

    # ─── Event types ─────────────────────────────────────────────

    async def list_event_types(self) -> list[EventType]:
        result = await self._db.execute(select(EventType).order_by(EventType.id))
        return list(result.scalars().all())

    async def get_event_type(self, event_type_id: EventTypeId) -> EventType:
        event_type = await self._db.get(EventType, event_type_id)
        if event_type is None:
            raise EventTypeNotFoundError(event_type_id)
        return event_type

    async def add_event_type(self, name: str, description: str) -> EventType:
        await self._check_name_free(EventType, "Event type", name)
        event_type = EventType(name=name, description=description)
        await self._insert(event_type, "Event type", name)
        return event_type

    # ─── Locations ───────────────────────────────────────────────

    async def list_locations(self) -> list[Location]:
        result = await self._db.execute(select(Location).order_by(Location.id))
        return list(result.scalars().all())

    async def get_location(self, location_id: LocationId) -> Location:
        location = await self._db.get(Location, location_id)
        if location is None:
            raise LocationNotFoundError(location_id)
        return location

    async def add_location(self, name: str, route: str, features: str) -> Location:
        await self._check_name_free(Location, "Location", name)
        location = Location(name=name, route=route, features=features)
        await self._insert(location, "Location", name)
        return location

    # ─── Club info ───────────────────────────────────────────────

    async def get_info(self, key: str) -> str:
        info = await self._db.get(ClubInfo, key)
        if info is None:
            raise ClubInfoNotFoundError(key)
        return info.value

    async def put_info(self, key: str, value: str) -> str:
        info = await self._db.get(ClubInfo, key)
        if info is None:
            self._db.add(ClubInfo(key=key, value=value))
        else:
            info.value = value
        await self._db.commit()
        logger.info(f"Club info '{key}' saved")
        return value

    # ─── Helpers ─────────────────────────────────────────────────

    async def _check_name_free(self, model, resource_type: str, name: str) -> None:
        taken = await self._db.scalar(select(model.id).where(model.name == name))
        if taken is not None:
            raise DuplicateNameError(resource_type, name)

    async def _insert(self, row, resource_type: str, name: str) -> None:
        self._db.add(row)
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            raise DuplicateNameError(resource_type, name) from e
        logger.info(f"{resource_type} '{name}' added (id={row.id})")
