"""Module: security."""

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError

from petcare.core.config import settings


class InvalidTokenError(Exception):
    """Raised when an identity token cannot be trusted."""


def parse_bearer(authorization: str | None) -> str | None:
    """
    Extract the token from an ``Authorization: Bearer <token>`` header.

    Returns None when the header is absent, raises InvalidTokenError when it
    is present but not a bearer credential.
    """
    if not authorization:
        return None

    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise InvalidTokenError("Invalid Authorization header")

    return parts[1].strip()


def decode_identity_token(token: str) -> str:
    """
    Validate a token issued by the auth service and return its subject.

    The subject is the stable opaque user id stored in ``pets.owner_user_id``
    and ``pet_members.user_id``.
    """
    options = {
        "verify_aud": settings.auth_jwt_audience is not None,
        "verify_iss": settings.auth_jwt_issuer is not None,
    }
    try:
        claims = jwt.decode(
            token,
            settings.auth_jwt_secret,
            algorithms=[settings.auth_jwt_algorithm],
            audience=settings.auth_jwt_audience,
            issuer=settings.auth_jwt_issuer,
            options=options,
        )
    except ExpiredSignatureError as e:
        raise InvalidTokenError("Token has expired") from e
    except JWTClaimsError as e:
        raise InvalidTokenError(f"Invalid token claims: {e}") from e
    except JWTError as e:
        raise InvalidTokenError(f"Invalid token: {e}") from e

    subject = claims.get("sub")
    if not subject:
        raise InvalidTokenError("Missing required claim: sub")

    return str(subject)
