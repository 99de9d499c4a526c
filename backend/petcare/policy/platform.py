"""Module: platform."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from petcare.core.errors import Unauthenticated, Unauthorized
from petcare.db.models.platform_owner import PlatformOwner


def get_platform_owner(db: Session, user_id: str) -> PlatformOwner | None:
    return db.execute(
        select(PlatformOwner).where(PlatformOwner.user_id == user_id)
    ).scalar_one_or_none()


def is_platform_owner(db: Session, user_id: str | None) -> bool:
    if not user_id:
        return False
    return get_platform_owner(db, user_id) is not None


def require_platform_owner(db: Session, user_id: str | None) -> str:
    if not user_id:
        raise Unauthenticated()
    if not is_platform_owner(db, user_id):
        raise Unauthorized("Platform owner access required")
    return user_id


def set_platform_owner(db: Session, user_id: str, is_owner: bool) -> str:
    """
    Grant or revoke platform ownership; idempotent.

    Returns one of ``added``, ``already_exists``, ``removed``, ``not_found``.
    Commits on change. Only called from the out-of-band admin script.
    """
    existing = get_platform_owner(db, user_id)

    if is_owner:
        if existing is not None:
            return "already_exists"
        db.add(PlatformOwner(user_id=user_id))
        db.commit()
        return "added"

    if existing is None:
        return "not_found"
    db.delete(existing)
    db.commit()
    return "removed"
