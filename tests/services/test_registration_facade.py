"""Registration Facade — approval gate and pass-through, tested against fakes.

Tests cover:
    - Unapproved member → MemberNotApprovedError, ledger never called
    - Unknown member → MemberNotFoundError propagates, ledger never called
    - Approved member → ledger result returned as-is
    - cancel/status_of skip the approval check
    - Member-scoped event listings share the gate
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import func, select

from club_api.core.domain_types import EventId, MemberId, MemberStatus, RegistrationStatus
from club_api.core.errors import (
    EventFullError, MemberNotApprovedError, MemberNotFoundError,
)
from club_api.models.registration import Registration
from club_api.services.member_directory import MemberDirectory
from club_api.services.registration_facade import RegistrationFacade
from club_api.services.registration_ledger import RegistrationLedger

MEMBER = MemberId(uuid.uuid4())
EVENT = EventId(7)


def _make_facade(approved=True, member_exists=True):
    members = MagicMock()
    if member_exists:
        members.is_approved = AsyncMock(return_value=approved)
    else:
        members.is_approved = AsyncMock(side_effect=MemberNotFoundError(MEMBER))
    ledger = MagicMock()
    ledger.register = AsyncMock(return_value=RegistrationStatus.REGISTERED)
    ledger.cancel = AsyncMock(return_value=RegistrationStatus.CANCELLED)
    ledger.status_of = AsyncMock(return_value=RegistrationStatus.REGISTERED)
    events = MagicMock()
    events.available_for = AsyncMock(return_value=["open"])
    events.registered_for = AsyncMock(return_value=["mine"])
    return RegistrationFacade(members, ledger, events), members, ledger, events


async def test_register_rejects_unapproved_member_before_ledger():
    facade, _, ledger, _ = _make_facade(approved=False)

    with pytest.raises(MemberNotApprovedError) as exc_info:
        await facade.register(MEMBER, EVENT)

    assert exc_info.value.http_status == 403
    ledger.register.assert_not_called()


async def test_register_propagates_member_not_found():
    facade, _, ledger, _ = _make_facade(member_exists=False)

    with pytest.raises(MemberNotFoundError):
        await facade.register(MEMBER, EVENT)

    ledger.register.assert_not_called()


async def test_register_delegates_for_approved_member():
    facade, members, ledger, _ = _make_facade()

    assert await facade.register(MEMBER, EVENT) is RegistrationStatus.REGISTERED
    members.is_approved.assert_awaited_once_with(MEMBER)
    ledger.register.assert_awaited_once_with(MEMBER, EVENT)


async def test_register_propagates_ledger_errors():
    facade, _, ledger, _ = _make_facade()
    ledger.register.side_effect = EventFullError(EVENT, 2)

    with pytest.raises(EventFullError):
        await facade.register(MEMBER, EVENT)


async def test_cancel_skips_approval_check():
    facade, members, ledger, _ = _make_facade(approved=False)

    assert await facade.cancel(MEMBER, EVENT) is RegistrationStatus.CANCELLED
    members.is_approved.assert_not_called()
    ledger.cancel.assert_awaited_once_with(MEMBER, EVENT)


async def test_status_of_skips_approval_check():
    facade, members, ledger, _ = _make_facade(approved=False)

    assert await facade.status_of(MEMBER, EVENT) is RegistrationStatus.REGISTERED
    members.is_approved.assert_not_called()


async def test_event_listings_require_approval():
    facade, _, _, events = _make_facade(approved=False)

    with pytest.raises(MemberNotApprovedError):
        await facade.available_events(MEMBER)
    with pytest.raises(MemberNotApprovedError):
        await facade.registered_events(MEMBER)

    events.available_for.assert_not_called()
    events.registered_for.assert_not_called()


async def test_event_listings_delegate_for_approved_member():
    facade, _, _, events = _make_facade()

    assert await facade.available_events(MEMBER) == ["open"]
    assert await facade.registered_events(MEMBER) == ["mine"]
    events.available_for.assert_awaited_once_with(MEMBER)


async def test_unapproved_register_writes_no_row(test_db, seed):
    """End to end over real services: the gate fires before any INSERT."""
    event_id = await seed.event(capacity=3)
    member_id = await seed.member(status=MemberStatus.PENDING)
    facade = RegistrationFacade(MemberDirectory(test_db), RegistrationLedger(test_db))

    with pytest.raises(MemberNotApprovedError):
        await facade.register(member_id, event_id)

    count = await test_db.scalar(select(func.count()).select_from(Registration))
    assert count == 0
