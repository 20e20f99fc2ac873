"""ClubInfo ORM — key/value facts about the club (contacts, about text, ...)."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from club_api.db.base import Base


class ClubInfo(Base):
    __tablename__ = "club_info"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
