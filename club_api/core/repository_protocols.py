"""Boundary Protocols — contracts the Registration Facade depends on.

Invariants:
    - The Facade only sees these Protocols, never the concrete SQLAlchemy services
    - Implementations live in services/ and are injected per request

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Async in Protocol: every implementation does a DB round-trip
"""

from typing import Protocol, Sequence

from club_api.core.domain_types import EventId, MemberId, RegistrationStatus


class MemberApprovalLookup(Protocol):
    """Member Directory contract — raises MemberNotFoundError for unknown ids."""
    async def is_approved(self, member_id: MemberId) -> bool: ...


class RegistrationStore(Protocol):
    """Registration Ledger contract — owns the registrations relation."""
    async def register(
        self, member_id: MemberId, event_id: EventId,
    ) -> RegistrationStatus: ...
    async def cancel(
        self, member_id: MemberId, event_id: EventId,
    ) -> RegistrationStatus: ...
    async def status_of(
        self, member_id: MemberId, event_id: EventId,
    ) -> RegistrationStatus: ...


class MemberEventsLookup(Protocol):
    """Event Catalog queries scoped to one member."""
    async def available_for(self, member_id: MemberId) -> Sequence: ...
    async def registered_for(self, member_id: MemberId) -> Sequence: ...
