"""Domain errors raised by the authentication flow and the user store."""

from __future__ import annotations

from fastapi import status


class AuthError(Exception):
    """Base authentication error, carrying the HTTP status it maps to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Authentication error"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(AuthError):
    """Input the flow refuses to act on."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_detail = "Invalid input"


class DuplicateEmail(AuthError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Email already registered"


class InvalidCredentials(AuthError):
    """Same message for an unknown email and a wrong password."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Invalid email or password"


class NotFound(AuthError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "User not found"


class ConfigurationError(AuthError):
    """Missing or unusable configuration. Fatal at startup."""

    default_detail = "Server misconfigured"


class StoreError(AuthError):
    """Opaque persistence failure."""

    default_detail = "Internal server error"


class UniqueConstraintViolation(StoreError):
    """A write was rejected because a unique column already holds the value."""

    def __init__(self, detail: str | None = None, field: str = "email") -> None:
        self.field = field
        super().__init__(detail or f"Duplicate value for unique field {field!r}")
