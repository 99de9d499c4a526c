"""Module: pet."""

import uuid
from datetime import date, datetime

from sqlalchemy import JSON, Boolean, Date, DateTime, Float, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from petcare.db.base import Base, utcnow

PET_SPECIES = ("dog", "cat", "other")
PET_STATUSES = ("active", "deceased", "archived")
PET_SEXES = ("male", "female", "unknown")
PET_SIZES = ("xs", "s", "m", "l", "xl")
CONTACT_RELATIONSHIPS = ("owner", "family", "friend", "vet", "other")

PET_NAME_MAX_LENGTH = 100


def default_share_settings() -> dict:
    return {
        "allow_public_profile": False,
        "show_phone_on_lost_post": True,
        "show_email_on_lost_post": False,
        "show_exact_location": False,
    }


# Core pet profile. Never hard-deleted: removal is a transition to "archived".
class Pet(Base):
    __tablename__ = "pets"
    __table_args__ = (
        Index("ix_pets_microchip_id", "microchip_id"),
    )

    # Primary Key
    pet_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Opaque user id from the auth service; full authority over the pet.
    owner_user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)

    # Basic Info
    name: Mapped[str] = mapped_column(String(PET_NAME_MAX_LENGTH), nullable=False)
    species: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="active")
    # Public sharing identifier; unique for the lifetime of the system.
    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    primary_photo_storage_id: Mapped[str | None] = mapped_column(String, nullable=True)

    sex: Mapped[str | None] = mapped_column(String, nullable=True)
    is_spayed_neutered: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    approx_age_years: Mapped[float | None] = mapped_column(Float, nullable=True)
    breed_primary: Mapped[str | None] = mapped_column(String, nullable=True)
    breed_secondary: Mapped[str | None] = mapped_column(String, nullable=True)
    size: Mapped[str | None] = mapped_column(String, nullable=True)
    weight_lbs: Mapped[float | None] = mapped_column(Float, nullable=True)
    color_primary: Mapped[str | None] = mapped_column(String, nullable=True)
    color_secondary: Mapped[str | None] = mapped_column(String, nullable=True)
    distinctive_marks: Mapped[str | None] = mapped_column(String, nullable=True)

    # Identification
    microchip_id: Mapped[str | None] = mapped_column(String, nullable=True)
    microchip_registry: Mapped[str | None] = mapped_column(String, nullable=True)
    license: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    # Temperament & handling
    temperament_tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    handling_notes: Mapped[str | None] = mapped_column(String, nullable=True)
    good_with: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)

    # Medical
    medical_summary: Mapped[str | None] = mapped_column(String, nullable=True)
    allergies: Mapped[list | None] = mapped_column(JSON, nullable=True)
    medications: Mapped[list | None] = mapped_column(JSON, nullable=True)
    special_needs: Mapped[str | None] = mapped_column(String, nullable=True)

    # Emergency contacts shown on lost-pet posts (list of dicts, max configured).
    contacts: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    # Privacy & sharing controls
    share_settings: Mapped[dict] = mapped_column(JSON, nullable=False, default=default_share_settings)

    # Audit
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    @property
    def is_public(self) -> bool:
        return bool((self.share_settings or {}).get("allow_public_profile"))
