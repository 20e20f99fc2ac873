"""ORM Models — SQLAlchemy declarative models for all club entities.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata holds every table
      (create_all in tests, autogenerate in Alembic)
"""

from club_api.models.member import Member  # noqa: F401
from club_api.models.event_type import EventType  # noqa: F401
from club_api.models.location import Location  # noqa: F401
from club_api.models.event import Event  # noqa: F401
from club_api.models.registration import Registration  # noqa: F401
from club_api.models.club_info import ClubInfo  # noqa: F401
