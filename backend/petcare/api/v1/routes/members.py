"""Module: members."""

from typing import Literal

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from petcare.api.v1.routes.deps import get_db, require_user
from petcare.api.v1.routes.guards import load_pet_for_edit, load_pet_for_view
from petcare.core.errors import Duplicate, InvalidOperation, NotFound
from petcare.db.models.pet_member import PetMember
from petcare.policy.membership import find_member

logger = structlog.get_logger(__name__)

router = APIRouter()

MemberRole = Literal["owner", "guardian", "viewer"]
MANAGE_MEMBERS_DENIED = "You do not have permission to manage members for this pet"
ALREADY_MEMBER = "User is already a member of this pet"


class MemberCreatePayload(BaseModel):
    user_id: str = Field(min_length=1)
    role: MemberRole


class MemberRoleUpdate(BaseModel):
    role: MemberRole


def member_to_dict(member: PetMember) -> dict:
    return {
        "id": str(member.member_id),
        "pet_id": str(member.pet_id),
        "user_id": member.user_id,
        "role": member.role,
        "is_primary_owner": False,
        "created_at": member.created_at,
    }


@router.get("/{pet_id}/members", summary="List pet members (primary owner first)")
def list_members(
    pet_id: str,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    pet = load_pet_for_view(db, pet_id, user_id)

    members = db.execute(
        select(PetMember)
        .where(PetMember.pet_id == pet.pet_id)
        .order_by(PetMember.created_at)
    ).scalars().all()

    primary = {
        "id": None,
        "pet_id": str(pet.pet_id),
        "user_id": pet.owner_user_id,
        "role": "owner",
        "is_primary_owner": True,
        "created_at": pet.created_at,
    }
    return [primary, *(member_to_dict(m) for m in members)]


@router.post("/{pet_id}/members", status_code=201, summary="Share pet with another user")
def add_member(
    pet_id: str,
    payload: MemberCreatePayload,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    pet = load_pet_for_edit(db, pet_id, user_id, MANAGE_MEMBERS_DENIED)

    # Primary owner authority comes from the pet row, never from a member row.
    if pet.owner_user_id == payload.user_id:
        raise InvalidOperation("Primary owner is already a member")

    if find_member(db, pet.pet_id, payload.user_id) is not None:
        raise Duplicate(ALREADY_MEMBER)

    member = PetMember(pet_id=pet.pet_id, user_id=payload.user_id, role=payload.role)
    db.add(member)
    # A concurrent add can slip past the lookup; the (pet_id, user_id) constraint catches it.
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise Duplicate(ALREADY_MEMBER) from e
    db.refresh(member)

    logger.info("pet_member_added", pet_id=str(pet.pet_id), member_user_id=member.user_id, role=member.role)
    return member_to_dict(member)


@router.patch("/{pet_id}/members/{member_user_id}", summary="Change a member's role")
def update_member_role(
    pet_id: str,
    member_user_id: str,
    payload: MemberRoleUpdate,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    pet = load_pet_for_edit(db, pet_id, user_id, MANAGE_MEMBERS_DENIED)

    member = find_member(db, pet.pet_id, member_user_id)
    if member is None:
        raise NotFound("Membership not found")

    member.role = payload.role
    db.commit()
    db.refresh(member)

    logger.info("pet_member_role_changed", pet_id=str(pet.pet_id), member_user_id=member_user_id, role=member.role)
    return member_to_dict(member)


@router.delete("/{pet_id}/members/{member_user_id}", summary="Revoke a member's access")
def remove_member(
    pet_id: str,
    member_user_id: str,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    pet = load_pet_for_edit(db, pet_id, user_id, MANAGE_MEMBERS_DENIED)

    if pet.owner_user_id == member_user_id:
        raise InvalidOperation("Cannot remove primary owner. Transfer ownership first.")

    member = find_member(db, pet.pet_id, member_user_id)
    if member is None:
        raise NotFound("Membership not found")

    db.delete(member)
    db.commit()

    logger.info("pet_member_removed", pet_id=str(pet.pet_id), member_user_id=member_user_id)
    return {"success": True}
