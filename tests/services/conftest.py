"""Service test fixtures — async SQLite databases and a row seeder.

Invariants:
    - Every test gets a fresh in-memory SQLite database with foreign keys enforced
    - Race tests get a file database instead: in-memory SQLite shares ONE connection
      between sessions, so concurrent transactions would not be isolated
    - Seeder returns ids, not ORM objects: a service rollback expires loaded objects
"""

import itertools
from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from club_api.core.domain_types import EventId, EventTypeId, LocationId, MemberId, MemberStatus
from club_api.db.base import Base
import club_api.infrastructure.database as db_module
from club_api.infrastructure.database import DatabaseSessionManager, enable_sqlite_foreign_keys
from club_api.main import app
from club_api.models.event import Event
from club_api.models.event_type import EventType
from club_api.models.location import Location
from club_api.models.member import Member


class Seeder:
    """Inserts rows directly through the ORM, bypassing services."""

    _seq = itertools.count(1)

    def __init__(self, session: AsyncSession):
        self._session = session
        self._refs: tuple[EventTypeId, LocationId] | None = None

    async def member(self, status: MemberStatus = MemberStatus.APPROVED) -> MemberId:
        n = next(self._seq)
        member = Member(
            full_name=f"Member {n}", email=f"member{n}@club.test",
            phone=f"7{n:010d}", status=status.value,
        )
        self._session.add(member)
        await self._session.commit()
        return MemberId(member.id)

    async def references(self) -> tuple[EventTypeId, LocationId]:
        if self._refs is None:
            n = next(self._seq)
            event_type = EventType(name=f"Rehearsal {n}", description="weekly")
            location = Location(name=f"Hall {n}", route="2nd floor", features="piano")
            self._session.add_all([event_type, location])
            await self._session.commit()
            self._refs = (EventTypeId(event_type.id), LocationId(location.id))
        return self._refs

    async def event(self, capacity: int = 2, days_ahead: int = 7) -> EventId:
        event_type_id, location_id = await self.references()
        event = Event(
            title=f"Event {next(self._seq)}", description="",
            event_type_id=event_type_id,
            event_date=datetime.now(timezone.utc) + timedelta(days=days_ahead),
            location_id=location_id, capacity=capacity,
        )
        self._session.add(event)
        await self._session.commit()
        return EventId(event.id)


async def _create_engine(url: str):
    engine = create_async_engine(url, echo=False)
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return engine


@pytest.fixture
async def test_engine():
    engine = await _create_engine("sqlite+aiosqlite:///:memory:")
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def seed(test_db) -> Seeder:
    return Seeder(test_db)


@pytest.fixture
async def file_session_factory(tmp_path):
    """Session factory over a file database: one real connection per session."""
    engine = await _create_engine(f"sqlite+aiosqlite:///{tmp_path / 'race.db'}")
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client; get_db runs through a session manager on the test engine."""
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    fake_manager.retry_after_ms = 250
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    db_module.db_manager = original_manager


@pytest.fixture
def make_seeder():
    """Seeder class, for tests that open their own sessions."""
    return Seeder
