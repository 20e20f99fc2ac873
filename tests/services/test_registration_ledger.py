"""Registration Ledger — state machine, capacity bound and error mapping.

Invariants:
    - registered count never exceeds capacity
    - One row per (member, event); re-registration reuses it
    - cancel is idempotent, status_of/cancel on an absent pair → RegistrationNotFoundError
    - A failed register writes nothing
"""

import uuid

import pytest
from sqlalchemy import func, select

from club_api.core.domain_types import EventId, MemberId, RegistrationStatus
from club_api.core.errors import (
    AlreadyRegisteredError, EventFullError, EventNotFoundError,
    MemberNotFoundError, RegistrationNotFoundError,
)
from club_api.models.registration import Registration
from club_api.services.event_catalog import EventCatalog
from club_api.services.registration_ledger import RegistrationLedger


@pytest.fixture
def ledger(test_db):
    return RegistrationLedger(test_db)


async def _registered(test_db, event_id) -> int:
    return await EventCatalog(test_db).registered_count(event_id)


async def _rows(test_db, member_id, event_id) -> list[Registration]:
    result = await test_db.execute(
        select(Registration)
        .where(Registration.member_id == member_id)
        .where(Registration.event_id == event_id)
        .execution_options(populate_existing=True),
    )
    return list(result.scalars().all())


# ─── Capacity ────────────────────────────────────────────────────

async def test_capacity_two_walkthrough(ledger, seed, test_db):
    """A, B fill two seats; C is turned away until A cancels."""
    event_id = await seed.event(capacity=2)
    a, b, c = await seed.member(), await seed.member(), await seed.member()

    assert await ledger.register(a, event_id) is RegistrationStatus.REGISTERED
    assert await _registered(test_db, event_id) == 1
    assert await ledger.register(b, event_id) is RegistrationStatus.REGISTERED
    assert await _registered(test_db, event_id) == 2

    with pytest.raises(EventFullError):
        await ledger.register(c, event_id)

    assert await ledger.cancel(a, event_id) is RegistrationStatus.CANCELLED
    assert await _registered(test_db, event_id) == 1

    assert await ledger.register(c, event_id) is RegistrationStatus.REGISTERED
    assert await _registered(test_db, event_id) == 2


async def test_event_full_writes_no_row(ledger, seed, test_db):
    event_id = await seed.event(capacity=1)
    winner, loser = await seed.member(), await seed.member()
    await ledger.register(winner, event_id)

    with pytest.raises(EventFullError) as exc_info:
        await ledger.register(loser, event_id)

    assert exc_info.value.http_status == 409
    assert exc_info.value.context.event_id == event_id
    assert await _rows(test_db, loser, event_id) == []


async def test_full_event_leaves_cancelled_row_cancelled(ledger, seed):
    """Reclaiming a cancelled seat is still bounded by capacity."""
    event_id = await seed.event(capacity=1)
    a, b = await seed.member(), await seed.member()
    await ledger.register(a, event_id)
    await ledger.cancel(a, event_id)
    await ledger.register(b, event_id)

    with pytest.raises(EventFullError):
        await ledger.register(a, event_id)

    assert await ledger.status_of(a, event_id) is RegistrationStatus.CANCELLED


async def test_cancelled_rows_do_not_count(ledger, seed, test_db):
    event_id = await seed.event(capacity=1)
    members = [await seed.member() for _ in range(3)]
    for member_id in members:
        await ledger.register(member_id, event_id)
        await ledger.cancel(member_id, event_id)

    assert await _registered(test_db, event_id) == 0
    assert await ledger.register(members[0], event_id) is RegistrationStatus.REGISTERED


async def test_events_have_independent_capacity(ledger, seed, test_db):
    first = await seed.event(capacity=1)
    second = await seed.event(capacity=1)
    member_id = await seed.member()

    await ledger.register(member_id, first)
    await ledger.register(member_id, second)

    assert await _registered(test_db, first) == 1
    assert await _registered(test_db, second) == 1


# ─── State machine ───────────────────────────────────────────────

async def test_duplicate_register_rejected_every_time(ledger, seed, test_db):
    event_id = await seed.event(capacity=5)
    member_id = await seed.member()
    await ledger.register(member_id, event_id)

    for _ in range(2):
        with pytest.raises(AlreadyRegisteredError):
            await ledger.register(member_id, event_id)

    assert len(await _rows(test_db, member_id, event_id)) == 1
    assert await _registered(test_db, event_id) == 1


async def test_reregistration_reuses_row(ledger, seed, test_db):
    event_id = await seed.event(capacity=2)
    member_id = await seed.member()

    await ledger.register(member_id, event_id)
    [original] = await _rows(test_db, member_id, event_id)
    original_id = original.id
    await ledger.cancel(member_id, event_id)
    assert await ledger.register(member_id, event_id) is RegistrationStatus.REGISTERED

    rows = await _rows(test_db, member_id, event_id)
    assert [r.id for r in rows] == [original_id]
    assert rows[0].status == RegistrationStatus.REGISTERED.value


async def test_cancel_is_idempotent(ledger, seed):
    event_id = await seed.event()
    member_id = await seed.member()
    await ledger.register(member_id, event_id)

    assert await ledger.cancel(member_id, event_id) is RegistrationStatus.CANCELLED
    assert await ledger.cancel(member_id, event_id) is RegistrationStatus.CANCELLED
    assert await ledger.status_of(member_id, event_id) is RegistrationStatus.CANCELLED


async def test_cancel_without_row_raises_not_found(ledger, seed):
    event_id = await seed.event()
    member_id = await seed.member()

    with pytest.raises(RegistrationNotFoundError):
        await ledger.cancel(member_id, event_id)


async def test_status_of_absent_pair_raises_not_found(ledger, seed):
    event_id = await seed.event()
    member_id = await seed.member()

    with pytest.raises(RegistrationNotFoundError) as exc_info:
        await ledger.status_of(member_id, event_id)

    assert exc_info.value.http_status == 404
    assert exc_info.value.code == "REGISTRATION_NOT_FOUND"


async def test_status_of_reports_current_state(ledger, seed):
    event_id = await seed.event()
    member_id = await seed.member()

    await ledger.register(member_id, event_id)
    assert await ledger.status_of(member_id, event_id) is RegistrationStatus.REGISTERED


# ─── Missing references ──────────────────────────────────────────

async def test_register_unknown_event_raises_not_found(ledger, seed, test_db):
    member_id = await seed.member()

    with pytest.raises(EventNotFoundError):
        await ledger.register(member_id, EventId(9999))

    count = await test_db.scalar(select(func.count()).select_from(Registration))
    assert count == 0


async def test_register_unknown_member_raises_member_not_found(ledger, seed, test_db):
    """The FK violation on INSERT is reported as the missing member."""
    event_id = await seed.event()

    with pytest.raises(MemberNotFoundError):
        await ledger.register(MemberId(uuid.uuid4()), event_id)

    assert await _registered(test_db, event_id) == 0


async def test_event_full_reports_rejected_member(ledger, seed):
    event_id = await seed.event(capacity=1)
    await ledger.register(await seed.member(), event_id)
    loser = await seed.member()

    with pytest.raises(EventFullError) as exc_info:
        await ledger.register(loser, event_id)

    assert exc_info.value.context.member_id == str(loser)
