"""Pet access policy.

Decides what a user may do with a pet profile and its sub-resources (members,
files, vaccine records, contacts). Every function here only reads from the
session and never raises for a missing pet or an anonymous user: deciding
which error to surface is left to the route handlers.
"""

import uuid
from dataclasses import dataclass
from typing import Literal

from sqlalchemy import select
from sqlalchemy.orm import Session

from petcare.db.models.pet import Pet
from petcare.db.models.pet_member import PetMember

Role = Literal["owner", "guardian", "viewer", "none"]

EDIT_ROLES = frozenset({"owner", "guardian"})


@dataclass(frozen=True)
class Membership:
    role: Role
    is_primary_owner: bool

    @property
    def can_edit(self) -> bool:
        return self.is_primary_owner or self.role in EDIT_ROLES

    @property
    def can_view(self) -> bool:
        return self.is_primary_owner or self.role != "none"


NO_MEMBERSHIP = Membership(role="none", is_primary_owner=False)
PRIMARY_OWNER = Membership(role="owner", is_primary_owner=True)


def find_member(db: Session, pet_id: uuid.UUID, user_id: str) -> PetMember | None:
    return db.execute(
        select(PetMember).where(
            PetMember.pet_id == pet_id,
            PetMember.user_id == user_id,
        )
    ).scalars().first()


def membership_for(db: Session, pet: Pet | None, user_id: str | None) -> Membership:
    """Resolve membership against an already loaded pet."""
    if pet is None or not user_id:
        return NO_MEMBERSHIP

    # Primary ownership wins even if a stray membership row exists.
    if pet.owner_user_id == user_id:
        return PRIMARY_OWNER

    member = find_member(db, pet.pet_id, user_id)
    if member is None:
        return NO_MEMBERSHIP
    return Membership(role=member.role, is_primary_owner=False)


def resolve_membership(db: Session, pet_id: uuid.UUID, user_id: str | None) -> Membership:
    """Return the user's relationship to the pet; ``none`` when either is absent."""
    return membership_for(db, db.get(Pet, pet_id), user_id)


def can_edit(db: Session, pet_id: uuid.UUID, user_id: str | None) -> bool:
    """Primary owner, co-owners and guardians may edit; viewers may not."""
    return resolve_membership(db, pet_id, user_id).can_edit


def can_view_pet(db: Session, pet: Pet | None, user_id: str | None, allow_public: bool = False) -> bool:
    if pet is None:
        return False

    # The only path that tolerates an anonymous caller.
    if allow_public and pet.is_public:
        return True

    if not user_id:
        return False

    return membership_for(db, pet, user_id).can_view


def can_view(db: Session, pet_id: uuid.UUID, user_id: str | None, allow_public: bool = False) -> bool:
    """Any membership grants view access; public profiles only when ``allow_public``."""
    return can_view_pet(db, db.get(Pet, pet_id), user_id, allow_public)
