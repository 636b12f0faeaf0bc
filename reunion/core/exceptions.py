from fastapi import status


class AppError(Exception):
    """Base class for errors that are safe to show to the caller."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "An error occurred"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

class ValidationError(AppError):
    """Raised when input is missing or malformed."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"

class AuthenticationError(AppError):
    """Raised when the caller has no valid session."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthorized"

class AuthorizationError(AppError):
    """Raised when the caller is known but not allowed to act."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Forbidden"

class NotFoundError(AppError):
    """Raised when a requested resource is not found."""
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"

class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists"

class BackendError(AppError):
    """Raised when the store or object storage fails."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"
