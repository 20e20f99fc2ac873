"""Registration Facade — approval gate in front of the Registration Ledger.

Invariants:
    - register() checks approval BEFORE any ledger call; an unapproved member
      never causes a registration row to be written
    - MemberNotFoundError from the directory propagates unchanged
    - cancel() and status_of() pass straight through (no approval check)
    - available_events()/registered_events() share the register() gate

Design Decisions:
    - Depends on Protocols only (core/repository_protocols): tests inject fakes
    - The approval read and the ledger transaction are separate steps; a member
      declined between them may still claim one seat (accepted, no cross-table lock)
"""

import logging
from typing import Sequence

from club_api.core.domain_types import EventId, MemberId, RegistrationStatus
from club_api.core.errors import MemberNotApprovedError
from club_api.core.repository_protocols import (
    MemberApprovalLookup, MemberEventsLookup, RegistrationStore,
)
from club_api.infrastructure.metrics import record_registration

logger = logging.getLogger(__name__)


class RegistrationFacade:
    """Entry point for every registration operation exposed over HTTP."""

    def __init__(
        self,
        members: MemberApprovalLookup,
        ledger: RegistrationStore,
        events: MemberEventsLookup | None = None,
    ):
        self._members = members
        self._ledger = ledger
        self._events = events

    async def register(
        self, member_id: MemberId, event_id: EventId,
    ) -> RegistrationStatus:
        log_extra = {"member_id": member_id, "event_id": event_id, "op": "register"}
        logger.info(f"Registering member for event {event_id}", extra=log_extra)
        await self._require_approved(member_id)
        status = await self._ledger.register(member_id, event_id)
        record_registration(status.value)
        logger.info(f"Member registered for event {event_id}", extra=log_extra)
        return status

    async def cancel(
        self, member_id: MemberId, event_id: EventId,
    ) -> RegistrationStatus:
        status = await self._ledger.cancel(member_id, event_id)
        record_registration(status.value)
        logger.info(
            f"Registration for event {event_id} cancelled",
            extra={"member_id": member_id, "event_id": event_id, "op": "cancel"},
        )
        return status

    async def status_of(
        self, member_id: MemberId, event_id: EventId,
    ) -> RegistrationStatus:
        return await self._ledger.status_of(member_id, event_id)

    async def available_events(self, member_id: MemberId) -> Sequence:
        await self._require_approved(member_id)
        return await self._require_events().available_for(member_id)

    async def registered_events(self, member_id: MemberId) -> Sequence:
        await self._require_approved(member_id)
        return await self._require_events().registered_for(member_id)

    async def _require_approved(self, member_id: MemberId) -> None:
        if not await self._members.is_approved(member_id):
            logger.warning(
                "Rejected: member is not approved",
                extra={"member_id": member_id, "error_code": "MEMBER_NOT_APPROVED"},
            )
            raise MemberNotApprovedError(member_id)

    def _require_events(self) -> MemberEventsLookup:
        if self._events is None:
            raise RuntimeError("RegistrationFacade built without an event lookup")
        return self._events
