"""Event ORM — persists club events with a fixed seat capacity.

Invariants:
    - capacity > 0 (DB check constraint)
    - event_type and location are required FKs
    - The events row is the lock target that serializes registrations per event

Design Decisions:
    - Registrations are not mapped as a relationship: the ledger always counts them
      with an explicit query, never through a loaded collection
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from club_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Event(Base):
    """Event entity — one bookable occurrence with `capacity` seats."""
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_events_capacity_positive"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    event_type_id: Mapped[int] = mapped_column(
        "event_type", Integer, ForeignKey("event_types.id"), nullable=False,
    )
    event_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True,
    )
    location_id: Mapped[int] = mapped_column(
        "location", Integer, ForeignKey("locations.id"), nullable=False,
    )
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )
