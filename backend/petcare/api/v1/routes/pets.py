"""Module: pets."""

from __future__ import annotations

from datetime import date
from typing import Any, Literal

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from petcare.api.v1.routes.deps import get_current_user_id, get_db, require_user
from petcare.api.v1.routes.guards import (
    PET_NOT_FOUND,
    load_pet,
    load_pet_for_edit,
    load_pet_for_view,
    parse_uuid,
)
from petcare.core.config import settings
from petcare.core.errors import NotFound, Unauthorized, ValidationError
from petcare.db.base import utcnow
from petcare.db.models.pet import PET_NAME_MAX_LENGTH, Pet, default_share_settings
from petcare.db.models.pet_file import PetFile
from petcare.db.models.pet_member import PetMember
from petcare.policy.membership import can_view_pet, membership_for
from petcare.policy.slugs import allocate_slug

logger = structlog.get_logger(__name__)

router = APIRouter()

Species = Literal["dog", "cat", "other"]
Status = Literal["active", "deceased", "archived"]
Sex = Literal["male", "female", "unknown"]
Size = Literal["xs", "s", "m", "l", "xl"]
Relationship = Literal["owner", "family", "friend", "vet", "other"]

# Fields that may be omitted from an update but never cleared with null.
NON_NULLABLE_FIELDS = {
    "name",
    "species",
    "status",
    "license",
    "good_with",
    "temperament_tags",
    "contacts",
    "share_settings",
}


class Contact(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    relationship: Relationship
    phone: str | None = None
    email: str | None = None
    preferred: bool = False


class License(BaseModel):
    license_number: str | None = None
    issuing_city: str | None = None
    expires_at: date | None = None


class GoodWith(BaseModel):
    dogs: bool | None = None
    cats: bool | None = None
    kids: bool | None = None


class ShareSettings(BaseModel):
    allow_public_profile: bool = False
    show_phone_on_lost_post: bool = True
    show_email_on_lost_post: bool = False
    show_exact_location: bool = False


class PetDetails(BaseModel):
    sex: Sex | None = None
    is_spayed_neutered: bool | None = None
    birth_date: date | None = None
    approx_age_years: float | None = Field(default=None, ge=0)
    breed_primary: str | None = None
    breed_secondary: str | None = None
    size: Size | None = None
    weight_lbs: float | None = Field(default=None, gt=0)
    color_primary: str | None = None
    color_secondary: str | None = None
    distinctive_marks: str | None = None
    microchip_id: str | None = None
    microchip_registry: str | None = None
    license: License | None = None
    temperament_tags: list[str] | None = None
    handling_notes: str | None = None
    good_with: GoodWith | None = None
    medical_summary: str | None = None
    allergies: list[str] | None = None
    medications: list[str] | None = None
    special_needs: str | None = None
    contacts: list[Contact] | None = None
    share_settings: ShareSettings | None = None


class PetCreatePayload(PetDetails):
    name: str
    species: Species


class PetUpdatePayload(PetDetails):
    # Omitted fields stay unchanged; explicit null clears nullable fields.
    name: str | None = None
    species: Species | None = None
    status: Status | None = None


class PrimaryPhotoPayload(BaseModel):
    file_id: str


# -------------------------
# Helpers
# -------------------------
def validate_pet_name(name: str) -> str:
    trimmed = name.strip()
    if not trimmed:
        raise ValidationError("Pet name is required")
    if len(trimmed) > PET_NAME_MAX_LENGTH:
        raise ValidationError(f"Pet name must be {PET_NAME_MAX_LENGTH} characters or less")
    return trimmed


def pet_to_dict(pet: Pet) -> dict[str, Any]:
    return {
        "id": str(pet.pet_id),
        "owner_user_id": pet.owner_user_id,
        "name": pet.name,
        "species": pet.species,
        "status": pet.status,
        "slug": pet.slug,
        "primary_photo_storage_id": pet.primary_photo_storage_id,
        "sex": pet.sex,
        "is_spayed_neutered": pet.is_spayed_neutered,
        "birth_date": pet.birth_date,
        "approx_age_years": pet.approx_age_years,
        "breed_primary": pet.breed_primary,
        "breed_secondary": pet.breed_secondary,
        "size": pet.size,
        "weight_lbs": pet.weight_lbs,
        "color_primary": pet.color_primary,
        "color_secondary": pet.color_secondary,
        "distinctive_marks": pet.distinctive_marks,
        "microchip_id": pet.microchip_id,
        "microchip_registry": pet.microchip_registry,
        "license": pet.license,
        "temperament_tags": pet.temperament_tags,
        "handling_notes": pet.handling_notes,
        "good_with": pet.good_with,
        "medical_summary": pet.medical_summary,
        "allergies": pet.allergies,
        "medications": pet.medications,
        "special_needs": pet.special_needs,
        "contacts": pet.contacts,
        "share_settings": pet.share_settings,
        "created_at": pet.created_at,
        "updated_at": pet.updated_at,
    }


def accessible_pet_ids(db: Session, user_id: str) -> list:
    """Ids of pets the user owns or holds any membership on (archived included)."""
    owned = db.execute(select(Pet.pet_id).where(Pet.owner_user_id == user_id)).scalars().all()
    shared = db.execute(select(PetMember.pet_id).where(PetMember.user_id == user_id)).scalars().all()
    return list(dict.fromkeys([*owned, *shared]))


# -------------------------
# Endpoints
# -------------------------

@router.get("", summary="List pets the caller owns or is a member of")
def list_my_pets(
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    pet_ids = accessible_pet_ids(db, user_id)
    if not pet_ids:
        return []

    pets = db.execute(
        select(Pet)
        .where(Pet.pet_id.in_(pet_ids), Pet.status != "archived")
        .order_by(desc(Pet.created_at))
    ).scalars().all()
    return [pet_to_dict(p) for p in pets]


@router.get("/by-slug/{slug}", summary="Get pet by public slug")
def get_pet_by_slug(
    slug: str,
    user_id: str | None = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    pet = db.execute(select(Pet).where(Pet.slug == slug)).scalar_one_or_none()
    if pet is None or not can_view_pet(db, pet, user_id, allow_public=True):
        raise NotFound(PET_NOT_FOUND)
    return pet_to_dict(pet)


@router.get("/{pet_id}", summary="Get pet detail")
def get_pet(
    pet_id: str,
    user_id: str | None = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    pet = load_pet_for_view(db, pet_id, user_id)
    return pet_to_dict(pet)


@router.post("", status_code=201, summary="Create pet owned by the caller")
def create_pet(
    payload: PetCreatePayload,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    name = validate_pet_name(payload.name)
    # JSON mode so nested objects land in JSON columns as plain values.
    details = {
        field: value
        for field, value in payload.model_dump(mode="json", exclude={"name", "species"}).items()
        if value is not None
    }
    if payload.birth_date is not None:
        details["birth_date"] = payload.birth_date

    details.setdefault("license", {"license_number": None, "issuing_city": None, "expires_at": None})
    details.setdefault("temperament_tags", [])
    details.setdefault("good_with", {"dogs": None, "cats": None, "kids": None})
    details.setdefault("contacts", [])
    details.setdefault("share_settings", default_share_settings())
    if len(details["contacts"]) > settings.max_pet_contacts:
        raise ValidationError(f"Maximum of {settings.max_pet_contacts} contacts allowed")

    now = utcnow()
    pet = Pet(
        owner_user_id=user_id,
        name=name,
        species=payload.species,
        status="active",
        created_at=now,
        updated_at=now,
        **details,
    )

    # The unique slug index settles races between concurrent creations.
    for attempt in range(1, settings.slug_insert_attempts + 1):
        pet.slug = allocate_slug(db, name)
        db.add(pet)
        try:
            db.commit()
            break
        except IntegrityError:
            db.rollback()
            logger.warning("pet_slug_conflict", slug=pet.slug, attempt=attempt)
            if attempt == settings.slug_insert_attempts:
                raise

    db.refresh(pet)
    logger.info("pet_created", pet_id=str(pet.pet_id), slug=pet.slug)
    return pet_to_dict(pet)


@router.patch("/{pet_id}", summary="Update pet details")
def update_pet(
    pet_id: str,
    payload: PetUpdatePayload,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    pet = load_pet_for_edit(db, pet_id, user_id)

    # Nested objects are replaced whole, so dump them fully and keep only the
    # top-level fields the caller actually sent.
    dumped = payload.model_dump(mode="json")
    updates = {field: dumped[field] for field in payload.model_fields_set}
    for field in NON_NULLABLE_FIELDS & updates.keys():
        if updates[field] is None:
            raise ValidationError(f"{field} cannot be null")

    if "name" in updates:
        updates["name"] = validate_pet_name(updates["name"])
    if "contacts" in updates and len(updates["contacts"]) > settings.max_pet_contacts:
        raise ValidationError(f"Maximum of {settings.max_pet_contacts} contacts allowed")
    # Date columns take date objects, not the JSON-mode strings.
    if "birth_date" in updates:
        updates["birth_date"] = payload.birth_date

    # Slug stays fixed across renames.
    for field, value in updates.items():
        setattr(pet, field, value)
    pet.updated_at = utcnow()

    db.commit()
    db.refresh(pet)
    logger.info("pet_updated", pet_id=str(pet.pet_id), fields=sorted(updates))
    return pet_to_dict(pet)


@router.delete("/{pet_id}", summary="Archive pet (primary owner only)")
def archive_pet(
    pet_id: str,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    pet = load_pet(db, pet_id)

    if pet.owner_user_id != user_id:
        if not membership_for(db, pet, user_id).can_view:
            raise NotFound(PET_NOT_FOUND)
        raise Unauthorized("Only the primary owner can delete a pet")

    pet.status = "archived"
    pet.updated_at = utcnow()
    db.commit()

    logger.info("pet_archived", pet_id=str(pet.pet_id))
    return {"success": True}


@router.put("/{pet_id}/primary-photo", summary="Set pet primary photo")
def set_primary_photo(
    pet_id: str,
    payload: PrimaryPhotoPayload,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    pet = load_pet_for_edit(db, pet_id, user_id)

    pet_file = db.get(PetFile, parse_uuid(payload.file_id, "file_id"))
    if pet_file is None:
        raise NotFound("File not found")
    if pet_file.pet_id != pet.pet_id:
        raise ValidationError("File is not associated with this pet")
    if pet_file.kind != "photo":
        raise ValidationError("Primary photo must be a photo file")

    pet.primary_photo_storage_id = pet_file.storage_id
    pet.updated_at = utcnow()
    db.commit()
    db.refresh(pet)
    return pet_to_dict(pet)
