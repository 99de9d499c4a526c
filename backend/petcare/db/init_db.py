from petcare.db.session import engine
from petcare.db.base import Base

# IMPORTANT: import models so they register with Base.metadata
import petcare.db.models  # noqa: F401


def init_db() -> None:
    Base.metadata.create_all(bind=engine)
