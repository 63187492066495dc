"""
Base exception classes for the BuildScape backend.

Each module defines its own exceptions that inherit from these bases.
The API layer maps each base class to an HTTP status, so modules only
need to pick the right parent.
"""

from typing import Optional, Any


class MarketplaceError(Exception):
    """
    Base exception for all BuildScape errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(MarketplaceError):
    """Resource not found (or not owned by the caller)."""

    pass


class ValidationError(MarketplaceError):
    """Input validation failed."""

    pass


class ConflictError(MarketplaceError):
    """Resource already exists (e.g., duplicate email)."""

    pass


class AuthenticationError(MarketplaceError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(MarketplaceError):
    """Authorization failed (insufficient permissions)."""

    pass


class ConfigurationError(MarketplaceError):
    """Required server configuration is missing or invalid."""

    pass


class StoreError(MarketplaceError):
    """The resource store rejected or failed an operation."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code or "STORE_ERROR", details)
