"""Application errors surfaced to API callers.

Every error carries a stable ``code`` (what clients switch on) and a human
readable ``message``. Route handlers raise these; ``petcare.main`` renders
them as ``{"code": ..., "message": ...}`` with the matching HTTP status.
"""


class PetCareError(Exception):
    """Base class for tagged application errors."""

    code = "INTERNAL"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def as_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class Unauthenticated(PetCareError):
    """No identity present where one is required."""

    code = "UNAUTHENTICATED"
    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class Unauthorized(PetCareError):
    """Identity present and resource exists, but the capability check failed."""

    code = "UNAUTHORIZED"
    status_code = 403


class NotFound(PetCareError):
    """Referenced pet, membership, file or record does not exist."""

    code = "NOT_FOUND"
    status_code = 404


class ValidationError(PetCareError):
    """Caller supplied a value that violates a documented constraint."""

    code = "VALIDATION_ERROR"
    status_code = 400


class Duplicate(PetCareError):
    code = "DUPLICATE"
    status_code = 409


class InvalidOperation(PetCareError):
    code = "INVALID_OPERATION"
    status_code = 409
