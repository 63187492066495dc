"""
Authentication module.

Handles token signing and verification, account registration, login and
profile management.

Public API:
- IUserRepository: Storage interface for accounts
- User, PublicUser, UserProfile, TokenSettings: Models
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IUserRepository
from .models import PublicUser, TokenPayload, TokenSettings, User, UserProfile
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    InvalidCredentialsError,
    EmailAlreadyRegisteredError,
    UserNotFoundError,
    InsufficientPermissionsError,
    ProviderNotVerifiedError,
)

__all__ = [
    # Interface
    "IUserRepository",
    # Models
    "PublicUser",
    "TokenPayload",
    "TokenSettings",
    "User",
    "UserProfile",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "EmailAlreadyRegisteredError",
    "UserNotFoundError",
    "InsufficientPermissionsError",
    "ProviderNotVerifiedError",
]
