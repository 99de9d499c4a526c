"""Module: session."""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from petcare.core.config import settings

# Single engine per process; sessions are handed out per request in deps.get_db.
engine = create_engine(settings.database_url, pool_pre_ping=True, future=True)

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
