"""Domain errors and the HTTP status each one maps to."""

from fastapi import status


class PortalAppError(Exception):
    """Base class for errors that are reported to the caller as ``{"error": message}``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PortalAppError):
    """A required field is missing or empty."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(PortalAppError):
    """A unique field already exists."""

    status_code = status.HTTP_409_CONFLICT


class AuthError(PortalAppError):
    """Bad credentials, or a missing, malformed, tampered or expired token."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(PortalAppError):
    """The entity is absent or owned by someone else."""

    status_code = status.HTTP_404_NOT_FOUND


class MethodError(PortalAppError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED


class UnroutedError(PortalAppError):
    status_code = status.HTTP_404_NOT_FOUND


class InternalError(PortalAppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


ERRORS_BY_STATUS: dict[int, type[PortalAppError]] = {
    status.HTTP_400_BAD_REQUEST: ValidationError,
    status.HTTP_401_UNAUTHORIZED: AuthError,
    status.HTTP_404_NOT_FOUND: NotFoundError,
    status.HTTP_405_METHOD_NOT_ALLOWED: MethodError,
    status.HTTP_409_CONFLICT: ConflictError,
}


def error_for_status(status_code: int, message: str) -> PortalAppError:
    """Build the domain error matching an HTTP status returned by the API."""
    error_cls = ERRORS_BY_STATUS.get(status_code, InternalError)
    return error_cls(message)
