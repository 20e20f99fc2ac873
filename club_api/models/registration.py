"""Registration ORM — the (member, event) relation owned by the Registration Ledger.

Invariants:
    - At most one row per (member_id, event_id) — UNIQUE constraint uq_registrations_pair
    - status is one of: registered, cancelled
    - Rows are never deleted by registration operations; cancel flips status
    - count(status='registered' for event E) <= events.capacity (enforced by the ledger)

Design Decisions:
    - Soft state via status column: re-registration reuses the same row
    - ON DELETE CASCADE on both FKs: rows disappear only with their member or event
    - Composite index (event_id, status): the ledger's seat count is an index range scan
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from club_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Registration(Base):
    """Registration entity — one member's seat claim on one event."""
    __tablename__ = "registrations"
    __table_args__ = (
        UniqueConstraint("member_id", "event_id", name="uq_registrations_pair"),
        CheckConstraint(
            "status IN ('registered', 'cancelled')",
            name="ck_registrations_status",
        ),
        Index("ix_registrations_event_status", "event_id", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    member_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("club_members.id", ondelete="CASCADE"),
        nullable=False,
    )
    event_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("events.id", ondelete="CASCADE"), nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="registered",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )
