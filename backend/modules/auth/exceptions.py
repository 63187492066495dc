"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid, malformed or badly signed."""

    def __init__(self, message: str = "Unauthorized: Invalid token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Unauthorized: Token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no usable bearer token is provided."""

    def __init__(
        self,
        message: str = "Unauthorized: Missing or malformed Authorization header",
    ):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidCredentialsError(AuthenticationError):
    """Raised when login credentials don't match."""

    def __init__(self):
        super().__init__("Invalid email or password", code="INVALID_CREDENTIALS")


class WeakPasswordError(ValidationError):
    """Raised when a password fails the strength rules."""

    def __init__(self, message: str):
        super().__init__(message, code="WEAK_PASSWORD")


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when an email is already used by a user or provider."""

    def __init__(self, email: str):
        super().__init__(
            "Email already registered",
            code="EMAIL_TAKEN",
            details={"email": email},
        )


class UserNotFoundError(NotFoundError):
    """Raised when the authenticated user doesn't exist in the database."""

    def __init__(self, user_id: str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class InsufficientPermissionsError(AuthorizationError):
    """Raised when the caller's role doesn't allow the operation."""

    def __init__(self, required_role: str, user_role: str):
        if required_role == "serviceProvider":
            message = "Access denied: Not a service provider"
        else:
            message = f"Access denied: {required_role} role required"
        super().__init__(
            message,
            code="INSUFFICIENT_PERMISSIONS",
            details={"required_role": required_role, "user_role": user_role},
        )


class ProviderNotVerifiedError(AuthorizationError):
    """Raised when a provider-only action needs a verified provider."""

    def __init__(self, user_id: str):
        super().__init__(
            "Access denied: Provider not verified",
            code="PROVIDER_NOT_VERIFIED",
            details={"user_id": user_id},
        )
