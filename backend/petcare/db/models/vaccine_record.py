"""Module: vaccine_record."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from petcare.db.base import Base, utcnow

VACCINE_TYPES = ("rabies", "dhpp", "fvrcp", "bordetella", "lyme", "other")


class VaccineRecord(Base):
    __tablename__ = "pet_vaccine_records"
    __table_args__ = (
        Index("ix_pet_vaccine_records_pet_id_expires_at", "pet_id", "expires_at"),
    )

    record_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    pet_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("pets.pet_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    vaccine_type: Mapped[str] = mapped_column(String, nullable=False)
    administered_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    provider_name: Mapped[str | None] = mapped_column(String, nullable=True)
    document_storage_id: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
