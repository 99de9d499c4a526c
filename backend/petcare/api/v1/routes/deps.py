"""Module: deps."""

from typing import Generator

import structlog
from fastapi import Depends, Header
from sqlalchemy.orm import Session

from petcare.core.errors import Unauthenticated
from petcare.core.security import InvalidTokenError, decode_identity_token, parse_bearer
from petcare.db.session import SessionLocal

logger = structlog.get_logger(__name__)


# Dependency provider: one DB session per request lifecycle.
def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Identity of the caller, or None for anonymous requests. Must stay async:
# context bound from a threadpool dependency never reaches the endpoint.
async def get_current_user_id(authorization: str | None = Header(default=None)) -> str | None:
    try:
        token = parse_bearer(authorization)
        if token is None:
            return None
        user_id = decode_identity_token(token)
    except InvalidTokenError as e:
        logger.info("identity_rejected", reason=str(e))
        raise Unauthenticated("Invalid or expired token") from e

    structlog.contextvars.bind_contextvars(user_id=user_id)
    return user_id


def require_user(user_id: str | None = Depends(get_current_user_id)) -> str:
    if not user_id:
        raise Unauthenticated()
    return user_id
