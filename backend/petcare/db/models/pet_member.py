import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from petcare.db.base import Base, utcnow

MEMBER_ROLES = ("owner", "guardian", "viewer")


# Access granted to a user other than the pet's primary owner.
class PetMember(Base):
    __tablename__ = "pet_members"
    __table_args__ = (
        UniqueConstraint("pet_id", "user_id"),
    )

    member_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    pet_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("pets.pet_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    role: Mapped[str] = mapped_column(String, nullable=False, default="viewer")
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
