"""Module: contacts."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from petcare.api.v1.routes.deps import get_db, require_user
from petcare.api.v1.routes.guards import load_pet_for_edit
from petcare.api.v1.routes.pets import Contact, Relationship, pet_to_dict
from petcare.core.config import settings
from petcare.core.errors import ValidationError
from petcare.db.base import utcnow
from petcare.db.models.pet import Pet

router = APIRouter()


class ContactUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    relationship: Relationship | None = None
    phone: str | None = None
    email: str | None = None
    preferred: bool | None = None


def _check_index(pet: Pet, index: int) -> None:
    if index < 0 or index >= len(pet.contacts):
        raise ValidationError("Invalid contact index")


# Contacts live in a JSON column; always assign a new list so the change is tracked.
def _save_contacts(db: Session, pet: Pet, contacts: list[dict]) -> dict:
    pet.contacts = contacts
    pet.updated_at = utcnow()
    db.commit()
    db.refresh(pet)
    return pet_to_dict(pet)


@router.post("/{pet_id}/contacts", status_code=201, summary="Add emergency contact")
def add_contact(
    pet_id: str,
    payload: Contact,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    pet = load_pet_for_edit(db, pet_id, user_id)

    if len(pet.contacts) >= settings.max_pet_contacts:
        raise ValidationError(f"Maximum of {settings.max_pet_contacts} contacts allowed")

    return _save_contacts(db, pet, [*pet.contacts, payload.model_dump()])


@router.patch("/{pet_id}/contacts/{index}", summary="Update emergency contact")
def update_contact(
    pet_id: str,
    index: int,
    payload: ContactUpdate,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    pet = load_pet_for_edit(db, pet_id, user_id)
    _check_index(pet, index)

    changes = {field: getattr(payload, field) for field in payload.model_fields_set}
    for field in ("name", "relationship", "preferred"):
        if field in changes and changes[field] is None:
            raise ValidationError(f"{field} cannot be null")

    contacts = list(pet.contacts)
    contacts[index] = {**contacts[index], **changes}
    return _save_contacts(db, pet, contacts)


@router.delete("/{pet_id}/contacts/{index}", summary="Remove emergency contact")
def remove_contact(
    pet_id: str,
    index: int,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    pet = load_pet_for_edit(db, pet_id, user_id)
    _check_index(pet, index)

    contacts = [c for i, c in enumerate(pet.contacts) if i != index]
    return _save_contacts(db, pet, contacts)
