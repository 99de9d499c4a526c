"""Module: vaccines."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Literal

import structlog
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from sqlalchemy import asc, desc, select
from sqlalchemy.orm import Session

from petcare.api.v1.routes.deps import get_db, require_user
from petcare.api.v1.routes.guards import ensure_can_edit, load_pet, load_pet_for_edit, load_pet_for_view, parse_uuid
from petcare.api.v1.routes.pets import accessible_pet_ids
from petcare.core.config import settings
from petcare.core.errors import NotFound, ValidationError
from petcare.db.base import as_utc, utcnow
from petcare.db.models.vaccine_record import VaccineRecord

logger = structlog.get_logger(__name__)

router = APIRouter()
record_router = APIRouter()

VaccineType = Literal["rabies", "dhpp", "fvrcp", "bordetella", "lyme", "other"]
RECORD_NOT_FOUND = "Vaccine record not found"


class VaccineRecordCreate(BaseModel):
    vaccine_type: VaccineType
    administered_at: datetime
    expires_at: datetime | None = None
    provider_name: str | None = Field(default=None, max_length=200)
    document_storage_id: str | None = None


class VaccineRecordUpdate(BaseModel):
    vaccine_type: VaccineType | None = None
    administered_at: datetime | None = None
    expires_at: datetime | None = None
    provider_name: str | None = Field(default=None, max_length=200)
    document_storage_id: str | None = None


def record_to_dict(record: VaccineRecord) -> dict:
    return {
        "id": str(record.record_id),
        "pet_id": str(record.pet_id),
        "vaccine_type": record.vaccine_type,
        "administered_at": record.administered_at,
        "expires_at": record.expires_at,
        "provider_name": record.provider_name,
        "document_storage_id": record.document_storage_id,
        "created_at": record.created_at,
    }


def _validate_dates(administered_at: datetime, expires_at: datetime | None, check_future: bool = True) -> None:
    if check_future and administered_at > utcnow():
        raise ValidationError("Administered date cannot be in the future")
    if expires_at is not None and expires_at <= administered_at:
        raise ValidationError("Expiration date must be after administered date")


def _load_record_for_edit(db: Session, record_id: str, user_id: str, message: str) -> VaccineRecord:
    record = db.get(VaccineRecord, parse_uuid(record_id, "record_id"))
    if record is None:
        raise NotFound(RECORD_NOT_FOUND)

    pet = load_pet(db, str(record.pet_id))
    ensure_can_edit(db, pet, user_id, message, not_found_message=RECORD_NOT_FOUND)
    return record


@router.post("/{pet_id}/vaccines", status_code=201, summary="Add vaccine record")
def add_vaccine_record(
    pet_id: str,
    payload: VaccineRecordCreate,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    pet = load_pet_for_edit(db, pet_id, user_id, "You do not have permission to add vaccine records for this pet")

    administered_at = as_utc(payload.administered_at)
    expires_at = as_utc(payload.expires_at)
    _validate_dates(administered_at, expires_at)

    record = VaccineRecord(
        pet_id=pet.pet_id,
        vaccine_type=payload.vaccine_type,
        administered_at=administered_at,
        expires_at=expires_at,
        provider_name=payload.provider_name,
        document_storage_id=payload.document_storage_id,
    )
    db.add(record)
    db.commit()
    db.refresh(record)

    logger.info("vaccine_record_added", pet_id=str(pet.pet_id), record_id=str(record.record_id))
    return record_to_dict(record)


@router.get("/{pet_id}/vaccines", summary="List vaccine records, most recent first")
def list_vaccine_records(
    pet_id: str,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    pet = load_pet_for_view(db, pet_id, user_id)

    records = db.execute(
        select(VaccineRecord)
        .where(VaccineRecord.pet_id == pet.pet_id)
        .order_by(desc(VaccineRecord.administered_at))
    ).scalars().all()
    return [record_to_dict(r) for r in records]


@record_router.get("/upcoming", summary="Vaccines expiring soon")
def upcoming_expirations(
    pet_id: str | None = Query(default=None),
    days_ahead: int | None = Query(default=None, ge=0, le=3650),
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    if days_ahead is None:
        days_ahead = settings.vaccine_expiry_window_days
    threshold = utcnow() + timedelta(days=days_ahead)

    if pet_id is not None:
        pet_ids = [load_pet_for_view(db, pet_id, user_id).pet_id]
    else:
        pet_ids = accessible_pet_ids(db, user_id)
    if not pet_ids:
        return []

    # Already expired records are included; they need attention too.
    records = db.execute(
        select(VaccineRecord)
        .where(
            VaccineRecord.pet_id.in_(pet_ids),
            VaccineRecord.expires_at.is_not(None),
            VaccineRecord.expires_at <= threshold,
        )
        .order_by(asc(VaccineRecord.expires_at))
    ).scalars().all()
    return [record_to_dict(r) for r in records]


@record_router.patch("/{record_id}", summary="Update vaccine record")
def update_vaccine_record(
    record_id: str,
    payload: VaccineRecordUpdate,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    record = _load_record_for_edit(db, record_id, user_id, "You do not have permission to update this vaccine record")

    updates = {field: getattr(payload, field) for field in payload.model_fields_set}
    for field in ("vaccine_type", "administered_at"):
        if field in updates and updates[field] is None:
            raise ValidationError(f"{field} cannot be null")
    for field in ("administered_at", "expires_at"):
        if field in updates:
            updates[field] = as_utc(updates[field])

    administered_at = updates.get("administered_at", record.administered_at)
    expires_at = updates["expires_at"] if "expires_at" in updates else record.expires_at
    _validate_dates(administered_at, expires_at, check_future="administered_at" in updates)

    for field, value in updates.items():
        setattr(record, field, value)
    db.commit()
    db.refresh(record)
    return record_to_dict(record)


@record_router.delete("/{record_id}", summary="Delete vaccine record")
def delete_vaccine_record(
    record_id: str,
    user_id: str = Depends(require_user),
    db: Session = Depends(get_db),
):
    record = _load_record_for_edit(db, record_id, user_id, "You do not have permission to delete this vaccine record")

    db.delete(record)
    db.commit()

    logger.info("vaccine_record_deleted", record_id=record_id)
    return {"success": True}
