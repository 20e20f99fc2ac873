"""Member Directory — member records, approval status and the approval check.

Invariants:
    - is_approved() is read-only and raises MemberNotFoundError for unknown ids
    - New members always start as 'pending'
    - Email and phone are unique; duplicates raise DuplicateEmailError / DuplicatePhoneError
    - A member holding a 'registered' row is never deleted

Design Decisions:
    - Duplicate checks run before the INSERT for a precise error, and again after an
      IntegrityError for the race where two requests claim the same email at once
    - delete() locks the member row: a concurrent ledger INSERT needs a key-share lock
      on the same row, so delete and register cannot interleave
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from club_api.core.domain_types import MemberId, MemberStatus, RegistrationStatus
from club_api.core.errors import (
    DuplicateEmailError, DuplicatePhoneError,
    MemberHasActiveRegistrationsError, MemberNotFoundError,
)
from club_api.models.member import Member
from club_api.models.registration import Registration

logger = logging.getLogger(__name__)


class MemberDirectory:
    """Member persistence and approval lookup on one request-scoped session."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def is_approved(self, member_id: MemberId) -> bool:
        result = await self._db.execute(
            select(Member.status).where(Member.id == member_id),
        )
        status = result.scalar_one_or_none()
        if status is None:
            raise MemberNotFoundError(member_id)
        return status == MemberStatus.APPROVED.value

    async def get(self, member_id: MemberId) -> Member:
        result = await self._db.execute(
            select(Member).where(Member.id == member_id),
        )
        member = result.scalar_one_or_none()
        if member is None:
            raise MemberNotFoundError(member_id)
        return member

    async def list_members(
        self, status: MemberStatus | None = None,
    ) -> list[Member]:
        """All members, or only those with the given status, oldest first."""
        query = select(Member).order_by(Member.created_at.asc())
        if status is not None:
            query = query.where(Member.status == status.value)
        result = await self._db.execute(query)
        return list(result.scalars().all())

    async def add(self, full_name: str, email: str, phone: str) -> MemberId:
        await self._check_unique_contacts(email, phone)
        member = Member(
            full_name=full_name, email=email, phone=phone,
            status=MemberStatus.PENDING.value,
        )
        self._db.add(member)
        try:
            await self._db.commit()
        except IntegrityError:
            await self._db.rollback()
            await self._check_unique_contacts(email, phone)
            raise
        logger.info(f"Member {member.id} added", extra={"member_id": member.id})
        return MemberId(member.id)

    async def update_profile(
        self, member_id: MemberId, full_name: str, email: str, phone: str,
    ) -> Member:
        member = await self.get(member_id)
        await self._check_unique_contacts(email, phone, exclude=member.id)
        member.full_name = full_name
        member.email = email
        member.phone = phone
        try:
            await self._db.commit()
        except IntegrityError:
            await self._db.rollback()
            await self._check_unique_contacts(email, phone, exclude=member_id)
            raise
        logger.info(f"Member {member_id} profile updated", extra={"member_id": member_id})
        return member

    async def update_status(
        self, member_id: MemberId, status: MemberStatus,
    ) -> Member:
        member = await self.get(member_id)
        member.status = status.value
        await self._db.commit()
        logger.info(
            f"Member {member_id} status set to {status.value}",
            extra={"member_id": member_id, "status": status.value},
        )
        return member

    async def delete(self, member_id: MemberId) -> None:
        result = await self._db.execute(
            select(Member).where(Member.id == member_id).with_for_update(),
        )
        member = result.scalar_one_or_none()
        if member is None:
            raise MemberNotFoundError(member_id)

        active = await self._db.scalar(
            select(func.count())
            .select_from(Registration)
            .where(Registration.member_id == member_id)
            .where(Registration.status == RegistrationStatus.REGISTERED.value),
        )
        if active:
            await self._db.rollback()
            raise MemberHasActiveRegistrationsError(member_id, active)

        await self._db.delete(member)
        await self._db.commit()
        logger.info(f"Member {member_id} deleted", extra={"member_id": member_id})

    async def _check_unique_contacts(
        self, email: str, phone: str, exclude: UUID | None = None,
    ) -> None:
        if await self._contact_taken(Member.email == email, exclude):
            raise DuplicateEmailError(email)
        if await self._contact_taken(Member.phone == phone, exclude):
            raise DuplicatePhoneError(phone)

    async def _contact_taken(self, clause, exclude: UUID | None) -> bool:
        query = select(func.count()).select_from(Member).where(clause)
        if exclude is not None:
            query = query.where(Member.id != exclude)
        return bool(await self._db.scalar(query))
