"""Public slug allocation for pet profiles.

A slug is the pet's name normalized to ``[a-z0-9-]`` plus a short random
suffix, e.g. ``"Fluffy Jr."`` -> ``"fluffy-jr-x7q2"``. Common names collide
often, so the suffix is always present; it only needs to be collision
resistant, not unpredictable.
"""

from __future__ import annotations

import random
import re
import string
import time
from typing import Callable, Protocol

import structlog
from sqlalchemy import select
from sqlalchemy.orm import Session

from petcare.db.models.pet import Pet

logger = structlog.get_logger(__name__)

SLUG_ALPHABET = string.ascii_lowercase + string.digits
BASE36_DIGITS = string.digits + string.ascii_lowercase

MAX_BASE_LENGTH = 50
SUFFIX_LENGTH = 4
RETRY_SUFFIX_LENGTH = 2
MAX_ATTEMPTS = 5
TIMESTAMP_SUFFIX_LENGTH = 4

_SEPARATOR_RUN = re.compile(r"[\s\-_]+")
_DISALLOWED = re.compile(r"[^a-z0-9-]")


class RandomSource(Protocol):
    def choice(self, seq: str) -> str: ...


_default_random = random.Random()


def normalize_name(name: str) -> str:
    """Reduce a display name to ``[a-z0-9-]``, at most 50 chars; may be empty."""
    slug = name.lower().strip()
    slug = _SEPARATOR_RUN.sub("-", slug)
    slug = _DISALLOWED.sub("", slug)
    slug = slug.strip("-")

    if len(slug) > MAX_BASE_LENGTH:
        slug = slug[:MAX_BASE_LENGTH].rstrip("-")

    return slug


def random_suffix(length: int, rng: RandomSource) -> str:
    return "".join(rng.choice(SLUG_ALPHABET) for _ in range(length))


def generate_slug(name: str, rng: RandomSource | None = None) -> str:
    """Normalized name plus a 4 character random suffix.

    The normalized part can be empty (``"!!!"`` -> ``"-k3f9"``); the suffix
    alone keeps the result non-empty and inside ``[a-z0-9-]``.
    """
    rng = rng or _default_random
    return f"{normalize_name(name)}-{random_suffix(SUFFIX_LENGTH, rng)}"


def to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(BASE36_DIGITS[rem])
    return "".join(reversed(digits))


def slug_exists(db: Session, slug: str) -> bool:
    # Archived pets keep their slug.
    return db.execute(select(Pet.pet_id).where(Pet.slug == slug)).first() is not None


def ensure_unique_slug(
    db: Session,
    base_slug: str,
    rng: RandomSource | None = None,
    clock: Callable[[], float] = time.time,
) -> str:
    """
    Return ``base_slug`` or a suffixed variant that is not yet taken.

    Checks at most MAX_ATTEMPTS candidates; each retry appends a fresh two
    character suffix to the original base. When every candidate is taken the
    last base-36 digits of the millisecond clock are appended instead, and
    that value is returned without another lookup.
    """
    rng = rng or _default_random
    slug = base_slug

    for attempt in range(1, MAX_ATTEMPTS + 1):
        if not slug_exists(db, slug):
            return slug

        logger.info("slug_collision", slug=slug, attempt=attempt)
        slug = f"{base_slug}-{random_suffix(RETRY_SUFFIX_LENGTH, rng)}"

    millis = int(clock() * 1000)
    fallback = f"{base_slug}-{to_base36(millis)[-TIMESTAMP_SUFFIX_LENGTH:]}"
    logger.warning("slug_timestamp_fallback", base_slug=base_slug, slug=fallback)
    return fallback


def allocate_slug(
    db: Session,
    name: str,
    rng: RandomSource | None = None,
    clock: Callable[[], float] = time.time,
) -> str:
    """Mint a slug for a new pet named ``name`` (already validated by the caller)."""
    return ensure_unique_slug(db, generate_slug(name, rng), rng=rng, clock=clock)
