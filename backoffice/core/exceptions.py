"""Custom exception classes for the back-office API."""

from fastapi import HTTPException, status


class BackOfficeError(Exception):
    """Base exception for the back-office API."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


class AuthenticationError(BackOfficeError):
    """Raised when the caller cannot be identified."""
    status_code = status.HTTP_401_UNAUTHORIZED


class AuthorizationError(BackOfficeError):
    """Raised when the caller lacks permission or the target is system-protected."""
    status_code = status.HTTP_403_FORBIDDEN


class ResourceNotFoundError(BackOfficeError):
    """Raised when a requested resource is not found."""
    status_code = status.HTTP_404_NOT_FOUND


class ResourceConflictError(BackOfficeError):
    """Raised when a resource already exists or is still referenced."""
    status_code = status.HTTP_409_CONFLICT


class ValidationError(BackOfficeError):
    """Raised when input validation fails."""
    status_code = status.HTTP_400_BAD_REQUEST


# HTTP exception shortcuts
def forbidden(detail: str = "Insufficient permissions") -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


def unauthorized(detail: str = "Not authenticated") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )
