"""
Service provider module exceptions.
"""

from shared.exceptions import AuthorizationError, NotFoundError


class ProviderNotFoundError(NotFoundError):
    """Raised when a provider profile doesn't exist."""

    def __init__(self, provider_id: str):
        super().__init__(
            "Service provider not found",
            code="PROVIDER_NOT_FOUND",
            details={"provider_id": provider_id},
        )


class ProviderProfileMissingError(AuthorizationError):
    """Raised when the caller has no provider profile."""

    def __init__(self, user_id: str, message: str = "Access denied"):
        super().__init__(
            message,
            code="PROVIDER_PROFILE_MISSING",
            details={"user_id": user_id},
        )
