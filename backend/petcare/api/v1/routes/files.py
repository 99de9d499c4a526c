"""Module: files.

Pet files are links to blobs held by the external file store: the client
uploads first, then registers the returned storage id here.
"""

from typing import Literal

import structlog
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy import select
from sqlalchemy.orm import Session

from petcare.api.v1.routes.deps import get_db, require_user
from petcare.api.v1.routes.guards import ensure_can_edit, load_pet, load_pet_for_edit, load_pet_for_view, parse_uuid
from petcare.core.config import settings
from petcare.core.errors import NotFound, ValidationError
from petcare.db.base import utcnow
from petcare.db.models.pet import Pet
from petcare.db.models.pet_file import PetFile

logger = structlog.get_logger(__name__)

router = APIRouter()
file_router = APIRouter()

FileKind = Literal["photo", "document"]
DocType = Literal["rabies", "vaccination", "adoption", "insurance", "other"]
Visibility = Literal["public", "private"]


class PetFileCreate(BaseModel):
    storage_id: str = Field(min_length=1)
    kind: FileKind
    doc_type: DocType | None = None
    visibility: Visibility | None = None
    label: str | None = Field(default=None, max_length=200)


class VisibilityUpdate(BaseModel):
    visibility: Visibility


def file_url(storage_id: str) -> str:
    return f"{settings.file_public_base_url.rstrip('/')}/{storage_id}"


def file_to_dict(pet_file: PetFile) -> dict:
    return {
        "id": str(pet_file.file_id),
        "pet_id": str(pet_file.pet_id),
        "storage_id": pet_file.storage_id,
        "kind": pet_file.kind,
        "doc_type": pet_file.doc_type,
        "visibility": pet_file.visibility,
        "label": pet_file.label,
        "created_at": pet_file.created_at,
        "url": file_url(pet_file.storage_id),
    }


def _list_files(db: Session, pet: Pet, kind: str | None, include_private: bool) -> list[dict]:
    stmt = select(PetFile).where(PetFile.pet_id == pet.pet_id)
    if kind is not None:
        stmt = stmt.where(PetFile.kind == kind)
    if not include_private:
        stmt = stmt.where(PetFile.visibility == "public")

    files = db.execute(stmt.order_by(PetFile.created_at)).scalars().all()
    return [file_to_dict(f) for f in files]


@router.post("/{pet_id}/files", status_code=201, summary="Link an uploaded file to a pet")
def add_pet_file(
    pet_id: str,
    payload: PetFileCreate,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    pet = load_pet_for_edit(db, pet_id, user_id, "You do not have permission to add files to this pet")

    if payload.kind == "document" and not payload.doc_type:
        raise ValidationError("doc_type is required for document files")
    if payload.kind == "photo" and "doc_type" in payload.model_fields_set:
        raise ValidationError("doc_type should not be set for photo files")

    # Photos default to public, documents to private.
    visibility = payload.visibility or ("public" if payload.kind == "photo" else "private")

    pet_file = PetFile(
        pet_id=pet.pet_id,
        storage_id=payload.storage_id,
        kind=payload.kind,
        doc_type=payload.doc_type if payload.kind == "document" else None,
        visibility=visibility,
        label=payload.label,
    )
    db.add(pet_file)

    # First photo becomes the primary photo.
    if payload.kind == "photo" and not pet.primary_photo_storage_id:
        pet.primary_photo_storage_id = payload.storage_id
        pet.updated_at = utcnow()

    db.commit()
    db.refresh(pet_file)

    logger.info("pet_file_added", pet_id=str(pet.pet_id), file_id=str(pet_file.file_id), kind=pet_file.kind)
    return file_to_dict(pet_file)


@router.get("/{pet_id}/files", summary="List pet files")
def list_pet_files(
    pet_id: str,
    kind: FileKind | None = Query(default=None),
    include_private: bool = Query(default=False),
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    pet = load_pet_for_view(db, pet_id, user_id)
    return _list_files(db, pet, kind, include_private)


@router.get("/{pet_id}/documents", summary="List all pet documents, private included")
def list_pet_documents(
    pet_id: str,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    pet = load_pet_for_view(db, pet_id, user_id)
    return _list_files(db, pet, "document", include_private=True)


@router.delete("/{pet_id}/files/{file_id}", summary="Unlink a file from a pet")
def remove_pet_file(
    pet_id: str,
    file_id: str,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    pet = load_pet_for_edit(db, pet_id, user_id, "You do not have permission to remove files from this pet")

    pet_file = db.get(PetFile, parse_uuid(file_id, "file_id"))
    if pet_file is None:
        raise NotFound("File association not found")
    if pet_file.pet_id != pet.pet_id:
        raise ValidationError("File does not belong to this pet")

    if pet.primary_photo_storage_id == pet_file.storage_id:
        next_photo = db.execute(
            select(PetFile)
            .where(
                PetFile.pet_id == pet.pet_id,
                PetFile.kind == "photo",
                PetFile.file_id != pet_file.file_id,
            )
            .order_by(PetFile.created_at)
        ).scalars().first()
        pet.primary_photo_storage_id = next_photo.storage_id if next_photo else None
        pet.updated_at = utcnow()

    db.delete(pet_file)
    db.commit()

    logger.info("pet_file_removed", pet_id=str(pet.pet_id), file_id=file_id)
    return {"success": True}


@file_router.patch("/{file_id}/visibility", summary="Change file visibility")
def update_file_visibility(
    file_id: str,
    payload: VisibilityUpdate,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    pet_file = db.get(PetFile, parse_uuid(file_id, "file_id"))
    if pet_file is None:
        raise NotFound("File association not found")

    pet = load_pet(db, str(pet_file.pet_id))
    ensure_can_edit(
        db,
        pet,
        user_id,
        "You do not have permission to update this file",
        not_found_message="File association not found",
    )

    pet_file.visibility = payload.visibility
    db.commit()
    db.refresh(pet_file)
    return file_to_dict(pet_file)
