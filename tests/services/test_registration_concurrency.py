"""Registration races — many sessions hitting one event at the same time.

Invariants:
    - N concurrent registrations for capacity C < N admit exactly C members
    - Last seat: exactly one of two concurrent members wins, the other gets EventFull
    - Concurrent duplicates from one member leave one registered row

Design Decisions:
    - Each attempt runs on its own session over a file database (separate connections),
      so the database, not the event loop, decides the interleaving
"""

import asyncio

from sqlalchemy import func, select

from club_api.core.domain_types import RegistrationStatus
from club_api.core.errors import AlreadyRegisteredError, ClubError, EventFullError
from club_api.models.registration import Registration
from club_api.services.event_catalog import EventCatalog
from club_api.services.registration_ledger import RegistrationLedger


async def _attempt(factory, member_id, event_id):
    async with factory() as session:
        try:
            return await RegistrationLedger(session).register(member_id, event_id)
        except ClubError as e:
            return e


async def _seed(factory, make_seeder, capacity, members):
    async with factory() as session:
        seeder = make_seeder(session)
        event_id = await seeder.event(capacity=capacity)
        member_ids = [await seeder.member() for _ in range(members)]
    return event_id, member_ids


async def _registered(factory, event_id) -> int:
    async with factory() as session:
        return await EventCatalog(session).registered_count(event_id)


async def test_concurrent_burst_never_exceeds_capacity(file_session_factory, make_seeder):
    event_id, member_ids = await _seed(file_session_factory, make_seeder, capacity=3, members=10)

    outcomes = await asyncio.gather(*(
        _attempt(file_session_factory, member_id, event_id)
        for member_id in member_ids
    ))

    winners = [o for o in outcomes if o is RegistrationStatus.REGISTERED]
    rejected = [o for o in outcomes if isinstance(o, EventFullError)]
    assert len(winners) == 3
    assert len(rejected) == 7
    assert await _registered(file_session_factory, event_id) == 3


async def test_last_seat_has_exactly_one_winner(file_session_factory, make_seeder):
    for _ in range(5):
        event_id, (first, second) = await _seed(
            file_session_factory, make_seeder, capacity=1, members=2,
        )

        outcomes = await asyncio.gather(
            _attempt(file_session_factory, first, event_id),
            _attempt(file_session_factory, second, event_id),
        )

        assert outcomes.count(RegistrationStatus.REGISTERED) == 1
        assert sum(isinstance(o, EventFullError) for o in outcomes) == 1
        assert await _registered(file_session_factory, event_id) == 1


async def test_concurrent_duplicates_leave_one_row(file_session_factory, make_seeder):
    event_id, [member_id] = await _seed(file_session_factory, make_seeder, capacity=5, members=1)

    outcomes = await asyncio.gather(*(
        _attempt(file_session_factory, member_id, event_id) for _ in range(4)
    ))

    assert outcomes.count(RegistrationStatus.REGISTERED) == 1
    assert sum(isinstance(o, AlreadyRegisteredError) for o in outcomes) == 3
    async with file_session_factory() as session:
        rows = await session.scalar(
            select(func.count()).select_from(Registration)
            .where(Registration.member_id == member_id),
        )
    assert rows == 1
