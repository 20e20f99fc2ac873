"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - MemberId wraps UUID, EventId wraps int — never mix them up in signatures
    - All valid states encoded as Enums — no raw string matching
    - RegistrationStatus has exactly two states; "absent" is the lack of a row

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: values are stored in the DB and serialized to JSON as-is
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

MemberId = NewType("MemberId", UUID)
EventId = NewType("EventId", int)
LocationId = NewType("LocationId", int)
EventTypeId = NewType("EventTypeId", int)

# Integer ids and counts are stored in 32-bit INTEGER columns
MAX_INT_VALUE = 2**31 - 1


# ─── Enums ───────────────────────────────────────────────────────

class MemberStatus(str, Enum):
    """Member approval lifecycle — maps to club_members.status."""
    PENDING = "pending"
    APPROVED = "approved"
    DECLINED = "declined"


class RegistrationStatus(str, Enum):
    """Registration lifecycle — maps to registrations.status.

    registered -> cancelled -> registered -> ... (rows are never deleted)
    """
    REGISTERED = "registered"
    CANCELLED = "cancelled"
