"""Shared loaders that combine a lookup with the access policy.

Ordering is always: load the target (NotFound), then check the capability
(Unauthorized), and only then let the caller write. A caller who cannot
even view a pet gets the same NotFound as for a pet that does not exist, so
private profiles are never disclosed by id probing.
"""

import uuid

import structlog
from sqlalchemy.orm import Session

from petcare.core.errors import NotFound, Unauthorized, ValidationError
from petcare.db.models.pet import Pet
from petcare.policy.membership import Membership, can_view_pet, membership_for

logger = structlog.get_logger(__name__)

PET_NOT_FOUND = "Pet not found"


# Validate and coerce UUID inputs from path/query/payload values.
def parse_uuid(value: str, field_name: str = "id") -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except (ValueError, AttributeError, TypeError):
        raise ValidationError(f"Invalid {field_name} (must be UUID)")


def load_pet(db: Session, pet_id: str) -> Pet:
    pet = db.get(Pet, parse_uuid(pet_id, "pet_id"))
    if pet is None:
        raise NotFound(PET_NOT_FOUND)
    return pet


def load_pet_for_view(db: Session, pet_id: str, user_id: str | None, allow_public: bool = False) -> Pet:
    pet = load_pet(db, pet_id)
    if not can_view_pet(db, pet, user_id, allow_public):
        logger.info("pet_view_denied", pet_id=str(pet.pet_id))
        raise NotFound(PET_NOT_FOUND)
    return pet


def ensure_can_edit(
    db: Session,
    pet: Pet,
    user_id: str,
    message: str,
    not_found_message: str = PET_NOT_FOUND,
) -> Membership:
    membership = membership_for(db, pet, user_id)
    if membership.can_edit:
        return membership

    logger.info("pet_edit_denied", pet_id=str(pet.pet_id), role=membership.role)
    if not membership.can_view:
        raise NotFound(not_found_message)
    raise Unauthorized(message)


def load_pet_for_edit(
    db: Session,
    pet_id: str,
    user_id: str,
    message: str = "You do not have permission to edit this pet",
) -> Pet:
    pet = load_pet(db, pet_id)
    ensure_can_edit(db, pet, user_id, message)
    return pet
