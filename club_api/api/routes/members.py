"""Member Routes — applications, profile edits, approval decisions.

Invariants:
    - New members are created 'pending'; only PATCH changes status
    - A member holding an active registration cannot be deleted (409)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from club_api.core.domain_types import MemberId, MemberStatus
from club_api.infrastructure.database import get_db
from club_api.infrastructure.metrics import record_status_decision
from club_api.schemas.member import (
    MemberCreate, MemberResponse, MemberStatusUpdate, MemberUpdate,
)
from club_api.services.member_directory import MemberDirectory

router = APIRouter(prefix="/api/v1/members", tags=["members"])


@router.get("", response_model=list[MemberResponse])
async def list_members(
    status_filter: MemberStatus | None = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
):
    return await MemberDirectory(db).list_members(status_filter)


@router.post(
    "", response_model=MemberResponse, status_code=status.HTTP_201_CREATED,
)
async def create_member(body: MemberCreate, db: AsyncSession = Depends(get_db)):
    directory = MemberDirectory(db)
    member_id = await directory.add(body.full_name, body.email, body.phone)
    return await directory.get(member_id)


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(member_id: UUID, db: AsyncSession = Depends(get_db)):
    return await MemberDirectory(db).get(MemberId(member_id))


@router.put("/{member_id}", response_model=MemberResponse)
async def update_member(
    member_id: UUID, body: MemberUpdate, db: AsyncSession = Depends(get_db),
):
    return await MemberDirectory(db).update_profile(
        MemberId(member_id), body.full_name, body.email, body.phone,
    )


@router.patch("/{member_id}", response_model=MemberResponse)
async def update_member_status(
    member_id: UUID, body: MemberStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    """Record an approval decision (pending / approved / declined)."""
    member = await MemberDirectory(db).update_status(MemberId(member_id), body.status)
    record_status_decision(body.status.value)
    return member


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_member(member_id: UUID, db: AsyncSession = Depends(get_db)):
    await MemberDirectory(db).delete(MemberId(member_id))
