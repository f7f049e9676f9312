from typing import Optional
from fastapi import HTTPException, status


class AppError(HTTPException):
    """Base for domain errors.

    Subclasses fix the HTTP status and a stable ``error_code``. JSON routes let
    the global handler render them; the OAuth callback turns ``redirect_code``
    and ``details`` into query parameters instead.
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "INTERNAL_SERVER_ERROR"
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None, *, redirect_code: Optional[str] = None, details: Optional[str] = None):
        super().__init__(status_code=self.status_code, detail=message or self.default_message)
        self.redirect_code = redirect_code or self.error_code.lower()
        self.details = details


class InvalidCredentials(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "INVALID_CREDENTIALS"
    default_message = "Invalid username or password"


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "UNAUTHENTICATED"
    default_message = "Could not validate credentials"


class NotConfigured(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "NOT_CONFIGURED"
    default_message = "Discord login not configured"


class ProviderError(AppError):
    status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "PROVIDER_ERROR"
    default_message = "Identity provider request failed"


class PermissionDenied(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = "PERMISSION_DENIED"
    default_message = "You do not have permission to access this platform"


class PersistenceUnavailable(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error_code = "PERSISTENCE_UNAVAILABLE"
    default_message = "Storage is currently unavailable"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "NOT_FOUND"
    default_message = "Resource not found"
