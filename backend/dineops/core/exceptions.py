"""Service-layer errors.

Services raise these instead of HTTPException so they stay usable outside a
request. ``dineops.main`` turns them into ``{"error": message}`` responses
with the matching status code.
"""

from fastapi import status


class ServiceError(Exception):
    """Base class for expected, user-facing failures."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(ServiceError):
    """Malformed, missing or out-of-range input."""

    status_code = status.HTTP_400_BAD_REQUEST


class UnauthorizedError(ServiceError):
    """Missing or bad credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(ServiceError):
    """A reference that crosses restaurant boundaries."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ServiceError):
    """Referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ServiceError):
    """Uniqueness violation, booking overlap, or delete blocked by dependents."""

    status_code = status.HTTP_409_CONFLICT
