"""Member ORM — persists club members and their approval status.

Invariants:
    - id is UUID primary key (client-side default)
    - email and phone are unique across members
    - status is one of: pending, approved, declined (default pending)

Design Decisions:
    - Registrations reference members by FK only; cancelled rows go with the member
      (ON DELETE CASCADE), active ones block deletion in MemberDirectory.delete
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from club_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Member(Base):
    """Club member — the registering party."""
    __tablename__ = "club_members"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'approved', 'declined')",
            name="ck_club_members_status",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    full_name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    phone: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )
