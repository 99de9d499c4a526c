import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from petcare.db.base import Base, utcnow


# Cross-pet administrative privilege; managed only by scripts.platform_owners.
class PlatformOwner(Base):
    __tablename__ = "platform_owners"

    platform_owner_id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
