"""Module: pet_file."""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from petcare.db.base import Base, utcnow

FILE_KINDS = ("photo", "document")
DOCUMENT_TYPES = ("rabies", "vaccination", "adoption", "insurance", "other")
FILE_VISIBILITIES = ("public", "private")


# Link between a pet and a blob held by the external file store.
class PetFile(Base):
    __tablename__ = "pet_files"
    __table_args__ = (
        Index("ix_pet_files_pet_id_kind", "pet_id", "kind"),
    )

    file_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    pet_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("pets.pet_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Opaque key returned by the blob store upload.
    storage_id: Mapped[str] = mapped_column(String, nullable=False)
    kind: Mapped[str] = mapped_column(String, nullable=False)
    doc_type: Mapped[str | None] = mapped_column(String, nullable=True)
    visibility: Mapped[str] = mapped_column(String, nullable=False)
    label: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
