"""Registration Ledger — capacity-bounded registration state machine.

Per (member, event) pair: absent -> registered <-> cancelled. Rows are never deleted.

Invariants:
    - count(registered rows for event E) <= events.capacity for E, under any concurrency
    - At most one row per pair (uq_registrations_pair); a duplicate INSERT is
      reported as AlreadyRegisteredError, never as a generic failure
    - register() decides and writes inside ONE transaction:
        1. lock the events row (SELECT ... FOR UPDATE) and read capacity
        2. read the pair's row
        3. write with a statement guarded by "registered count < capacity",
           both sides evaluated by the database inside that same statement
    - The registered count is recomputed on every call; nothing is cached
    - Every failure path rolls back; only success commits
    - cancel() flips any existing row to 'cancelled' (idempotent), no approval
      or event check

Design Decisions:
    - Row lock + guarded statement: the lock serializes writers of one event on
      PostgreSQL (other events never wait), the guard keeps the check-and-write
      atomic on backends that ignore FOR UPDATE (SQLite)
    - Capacity is re-read inside the guard rather than bound from step 1, so a
      concurrent capacity change can never be raced
    - When a guarded write touches nothing, the pair is re-read: a concurrent
      duplicate from the same member is AlreadyRegistered, otherwise EventFull
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, func, insert, literal, select, update
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from club_api.core.domain_types import EventId, MemberId, RegistrationStatus
from club_api.core.errors import (
    AlreadyRegisteredError, ClubError, EventFullError, EventNotFoundError,
    MemberNotFoundError, RegistrationNotFoundError,
)
from club_api.models.event import Event
from club_api.models.member import Member
from club_api.models.registration import Registration
from club_api.services.event_catalog import EventCatalog

logger = logging.getLogger(__name__)

_registrations = Registration.__table__


def _seats_left(event_id: EventId):
    """SQL predicate: registered count for the event < its capacity."""
    taken = _registrations.alias("taken")
    registered = (
        select(func.count())
        .select_from(taken)
        .where(taken.c.event_id == event_id)
        .where(taken.c.status == RegistrationStatus.REGISTERED.value)
        .scalar_subquery()
    )
    capacity = (
        select(Event.capacity).where(Event.id == event_id).scalar_subquery()
    )
    return registered < capacity


class RegistrationLedger:
    """Owns the registrations relation and its atomic transitions."""

    def __init__(self, db: AsyncSession, events: EventCatalog | None = None):
        self._db = db
        self._events = events or EventCatalog(db)

    # ─── Public contract ─────────────────────────────────────────

    async def register(
        self, member_id: MemberId, event_id: EventId,
    ) -> RegistrationStatus:
        try:
            status = await self._register(member_id, event_id)
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            conflict = await self._explain_integrity_error(member_id, event_id)
            if conflict is None:
                raise
            raise conflict from e
        except ClubError:
            await self._db.rollback()
            raise
        logger.debug(
            f"Seat claimed on event {event_id}",
            extra={"member_id": member_id, "event_id": event_id},
        )
        return status

    async def cancel(
        self, member_id: MemberId, event_id: EventId,
    ) -> RegistrationStatus:
        stmt = (
            update(_registrations)
            .where(_registrations.c.member_id == member_id)
            .where(_registrations.c.event_id == event_id)
            .values(
                status=RegistrationStatus.CANCELLED.value,
                updated_at=datetime.now(timezone.utc),
            )
            .returning(_registrations.c.status)
        )
        status = await self._db.scalar(stmt)
        if status is None:
            await self._db.rollback()
            raise RegistrationNotFoundError(member_id, event_id)
        await self._db.commit()
        return RegistrationStatus(status)

    async def status_of(
        self, member_id: MemberId, event_id: EventId,
    ) -> RegistrationStatus:
        status = await self._current_status(member_id, event_id)
        if status is None:
            raise RegistrationNotFoundError(member_id, event_id)
        return status

    # ─── Transaction body ────────────────────────────────────────

    async def _register(
        self, member_id: MemberId, event_id: EventId,
    ) -> RegistrationStatus:
        capacity = await self._events.capacity_of(event_id, for_update=True)

        current = await self._current_status(member_id, event_id)
        if current is RegistrationStatus.REGISTERED:
            raise AlreadyRegisteredError(member_id, event_id)

        if current is RegistrationStatus.CANCELLED:
            claimed = await self._db.scalar(self._reclaim(member_id, event_id))
        else:
            claimed = await self._db.scalar(self._claim(member_id, event_id))

        if claimed is None:
            if await self._current_status(member_id, event_id) is RegistrationStatus.REGISTERED:
                raise AlreadyRegisteredError(member_id, event_id)
            raise EventFullError(event_id, capacity, member_id)
        return RegistrationStatus(claimed)

    def _claim(self, member_id: MemberId, event_id: EventId):
        """INSERT ... SELECT ... WHERE seats left — first registration of the pair."""
        now = datetime.now(timezone.utc)
        source = select(
            literal(member_id, UUID(as_uuid=True)),
            literal(event_id, Integer),
            literal(RegistrationStatus.REGISTERED.value, String),
            literal(now, DateTime(timezone=True)),
            literal(now, DateTime(timezone=True)),
        ).where(_seats_left(event_id))
        return (
            insert(_registrations)
            .from_select(
                ["member_id", "event_id", "status", "created_at", "updated_at"],
                source,
            )
            .returning(_registrations.c.status)
        )

    def _reclaim(self, member_id: MemberId, event_id: EventId):
        """UPDATE cancelled -> registered WHERE seats left — reuses the pair's row."""
        return (
            update(_registrations)
            .where(_registrations.c.member_id == member_id)
            .where(_registrations.c.event_id == event_id)
            .where(_registrations.c.status == RegistrationStatus.CANCELLED.value)
            .where(_seats_left(event_id))
            .values(
                status=RegistrationStatus.REGISTERED.value,
                updated_at=datetime.now(timezone.utc),
            )
            .returning(_registrations.c.status)
        )

    async def _current_status(
        self, member_id: MemberId, event_id: EventId,
    ) -> RegistrationStatus | None:
        status = await self._db.scalar(
            select(Registration.status)
            .where(Registration.member_id == member_id)
            .where(Registration.event_id == event_id),
        )
        return RegistrationStatus(status) if status is not None else None

    async def _explain_integrity_error(
        self, member_id: MemberId, event_id: EventId,
    ) -> ClubError | None:
        """Map a failed INSERT to the domain error it stands for, if any."""
        if await self._current_status(member_id, event_id) is not None:
            return AlreadyRegisteredError(member_id, event_id)
        member = await self._db.scalar(select(Member.id).where(Member.id == member_id))
        if member is None:
            return MemberNotFoundError(member_id)
        if not await self._events.exists(event_id):
            return EventNotFoundError(event_id)
        return None
