"""Event Catalog — event records, capacity lookup and member-scoped event queries.

Invariants:
    - capacity_of(..., for_update=True) locks the events row until the caller's
      transaction ends; it is the per-event serialization point for registrations
    - Registered counts are always queried, never cached
    - An update never sets capacity below the number of seats already taken

Design Decisions:
    - Registrations are counted with an explicit COUNT over (event_id, status):
      the ledger and update() share registered_count()
    - available_for/registered_for only consider upcoming events (event_date >= now)
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from club_api.core.domain_types import (
    EventId, EventTypeId, LocationId, MemberId, RegistrationStatus,
)
from club_api.core.errors import (
    CapacityBelowRegisteredError, EventNotFoundError,
    EventTypeNotFoundError, LocationNotFoundError,
)
from club_api.models.event import Event
from club_api.models.event_type import EventType
from club_api.models.location import Location
from club_api.models.registration import Registration

logger = logging.getLogger(__name__)


def registered_count_query(event_id: int):
    """SELECT count(*) of 'registered' rows for one event."""
    return (
        select(func.count())
        .select_from(Registration)
        .where(Registration.event_id == event_id)
        .where(Registration.status == RegistrationStatus.REGISTERED.value)
    )


class EventCatalog:
    """Event persistence and lookups on one request-scoped session."""

    def __init__(self, db: AsyncSession):
        self._db = db

    # ─── Core lookups ────────────────────────────────────────────

    async def exists(self, event_id: EventId) -> bool:
        found = await self._db.scalar(
            select(Event.id).where(Event.id == event_id),
        )
        return found is not None

    async def capacity_of(
        self, event_id: EventId, for_update: bool = False,
    ) -> int:
        query = select(Event.capacity).where(Event.id == event_id)
        if for_update:
            query = query.with_for_update()
        result = await self._db.execute(query)
        capacity = result.scalar_one_or_none()
        if capacity is None:
            raise EventNotFoundError(event_id)
        return capacity

    async def registered_count(self, event_id: EventId) -> int:
        return await self._db.scalar(registered_count_query(event_id)) or 0

    # ─── Queries ─────────────────────────────────────────────────

    async def get(self, event_id: EventId) -> Event:
        event = await self._db.get(Event, event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    async def list_events(
        self,
        event_type_id: EventTypeId | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> list[Event]:
        """Events matching every given filter (bounds inclusive), by date."""
        query = select(Event)
        if event_type_id is not None:
            query = query.where(Event.event_type_id == event_type_id)
        if date_from is not None:
            query = query.where(Event.event_date >= date_from)
        if date_to is not None:
            query = query.where(Event.event_date <= date_to)
        result = await self._db.execute(query.order_by(Event.event_date.asc()))
        return list(result.scalars().all())

    async def upcoming(self) -> list[Event]:
        result = await self._db.execute(self._upcoming_query())
        return list(result.scalars().all())

    async def available_for(self, member_id: MemberId) -> list[Event]:
        """Upcoming events the member does not currently hold a seat in."""
        query = self._upcoming_query().where(
            Event.id.not_in(self._registered_event_ids(member_id)),
        )
        result = await self._db.execute(query)
        return list(result.scalars().all())

    async def registered_for(self, member_id: MemberId) -> list[Event]:
        """Upcoming events the member currently holds a seat in."""
        query = self._upcoming_query().where(
            Event.id.in_(self._registered_event_ids(member_id)),
        )
        result = await self._db.execute(query)
        return list(result.scalars().all())

    # ─── Mutations ───────────────────────────────────────────────

    async def add(
        self,
        title: str,
        description: str,
        event_type_id: EventTypeId,
        event_date: datetime,
        location_id: LocationId,
        capacity: int,
    ) -> EventId:
        await self._check_references(event_type_id, location_id)
        event = Event(
            title=title, description=description,
            event_type_id=event_type_id, event_date=event_date,
            location_id=location_id, capacity=capacity,
        )
        self._db.add(event)
        await self._db.commit()
        logger.info(
            f"Event {event.id} added with {capacity} seats",
            extra={"event_id": event.id},
        )
        return EventId(event.id)

    async def update(
        self,
        event_id: EventId,
        title: str,
        description: str,
        event_type_id: EventTypeId,
        event_date: datetime,
        location_id: LocationId,
        capacity: int,
    ) -> Event:
        """Replace an event's fields; same lock as registration so counts stay exact."""
        await self.capacity_of(event_id, for_update=True)
        await self._check_references(event_type_id, location_id)

        taken = await self.registered_count(event_id)
        if capacity < taken:
            await self._db.rollback()
            raise CapacityBelowRegisteredError(event_id, capacity, taken)

        event = await self.get(event_id)
        event.title = title
        event.description = description
        event.event_type_id = event_type_id
        event.event_date = event_date
        event.location_id = location_id
        event.capacity = capacity
        await self._db.commit()
        logger.info(f"Event {event_id} updated", extra={"event_id": event_id})
        return event

    async def delete(self, event_id: EventId) -> None:
        event = await self.get(event_id)
        await self._db.delete(event)
        await self._db.commit()
        logger.info(f"Event {event_id} deleted", extra={"event_id": event_id})

    # ─── Helpers ─────────────────────────────────────────────────

    def _upcoming_query(self):
        return (
            select(Event)
            .where(Event.event_date >= datetime.now(timezone.utc))
            .order_by(Event.event_date.asc())
        )

    def _registered_event_ids(self, member_id: MemberId):
        return (
            select(Registration.event_id)
            .where(Registration.member_id == member_id)
            .where(Registration.status == RegistrationStatus.REGISTERED.value)
        )

    async def _check_references(
        self, event_type_id: EventTypeId, location_id: LocationId,
    ) -> None:
        if await self._db.get(EventType, event_type_id) is None:
            await self._db.rollback()
            raise EventTypeNotFoundError(event_type_id)
        if await self._db.get(Location, location_id) is None:
            await self._db.rollback()
            raise LocationNotFoundError(location_id)
