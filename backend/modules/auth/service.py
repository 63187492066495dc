"""
Authentication service implementation.

TokenCodec signs and verifies JWTs; AccountService handles registration,
login and profile management on top of the user repository.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Optional
import jwt
from pydantic import ValidationError as PayloadError

from shared.config import Settings
from shared.exceptions import ConfigurationError, ConflictError
from shared.models import Identity, UserRole

from .exceptions import (
    EmailAlreadyRegisteredError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    UserNotFoundError,
)
from .interfaces import IUserRepository
from .models import (
    AuthResponse,
    LoginRequest,
    PublicUser,
    RegisterRequest,
    TokenPayload,
    TokenSettings,
    UpdateProfileRequest,
    User,
    UserProfile,
)
from .passwords import PasswordHasher

if TYPE_CHECKING:
    from modules.services.interfaces import IProviderRepository

logger = logging.getLogger(__name__)


class TokenCodec:
    """
    Issues and verifies signed, time-bounded tokens.

    Tokens are HS256 JWTs carrying `{id, role, iat, exp}`. Verification is
    stateless: there is no server-side session or revocation list.
    """

    def __init__(self, settings: TokenSettings):
        if not settings.secret:
            raise ConfigurationError(
                "JWT secret is not configured. Set the JWT_SECRET environment variable.",
                code="JWT_SECRET_MISSING",
            )
        self._settings = settings

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        """Build a codec from application settings."""
        return cls(
            TokenSettings(
                secret=settings.jwt_secret,
                algorithm=settings.jwt_algorithm,
                expires_in=timedelta(hours=settings.jwt_expires_hours),
            )
        )

    @property
    def settings(self) -> TokenSettings:
        return self._settings

    def issue(
        self,
        subject_id: str,
        role: UserRole,
        issued_at: Optional[datetime] = None,
    ) -> str:
        """
        Sign a token for a subject.

        Args:
            subject_id: The user ID to embed
            role: The account role to embed
            issued_at: Override for the issue time (defaults to now)

        Returns:
            Encoded JWT string
        """
        now = issued_at or datetime.now(timezone.utc)
        payload = {
            "id": subject_id,
            "role": UserRole(role).value,
            "iat": int(now.timestamp()),
            "exp": int((now + self._settings.expires_in).timestamp()),
        }
        return jwt.encode(
            payload,
            self._settings.secret,
            algorithm=self._settings.algorithm,
        )

    def verify(self, token: Optional[str]) -> Identity:
        """
        Decode a token and return the identity it asserts.

        Raises:
            MissingTokenError: If the token is empty
            ExpiredTokenError: If the token is past its expiry
            InvalidTokenError: If the signature or claims are invalid
        """
        if not token:
            raise MissingTokenError()

        try:
            claims = jwt.decode(
                token,
                self._settings.secret,
                algorithms=[self._settings.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError:
            raise InvalidTokenError()

        try:
            payload = TokenPayload(**claims)
        except PayloadError:
            raise InvalidTokenError()

        return Identity(id=payload.id, role=payload.role)


class AccountService:
    """
    Account registration, login and profile management.

    Email uniqueness is pre-checked against both the users and the
    service_providers tables; the unique indexes in the store are what
    actually guarantee it under concurrent registrations.
    """

    def __init__(
        self,
        users: IUserRepository,
        providers: "IProviderRepository",
        codec: TokenCodec,
        hasher: PasswordHasher,
    ):
        self._users = users
        self._providers = providers
        self._codec = codec
        self._hasher = hasher

    # -------------------------------------------------------------------------
    # Building blocks (also used by provider registration)
    # -------------------------------------------------------------------------

    def ensure_email_available(self, email: str) -> None:
        """Raise EmailAlreadyRegisteredError if a user or provider has this email."""
        email = email.lower()
        if self._users.get_by_email(email) is not None:
            raise EmailAlreadyRegisteredError(email)
        if self._providers.get_by_email(email) is not None:
            raise EmailAlreadyRegisteredError(email)

    def create_user(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole,
    ) -> User:
        """Hash the password and insert the user row."""
        email = email.lower()
        password_hash = self._hasher.hash(password)
        try:
            return self._users.create({
                "name": name,
                "email": email,
                "password_hash": password_hash,
                "role": role.value,
            })
        except ConflictError:
            raise EmailAlreadyRegisteredError(email)

    def delete_user(self, user_id: str) -> bool:
        return self._users.delete(user_id)

    def issue_token(self, user: User) -> str:
        return self._codec.issue(user.id, user.role)

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def register(self, request: RegisterRequest) -> AuthResponse:
        """
        Register a regular account.

        Provider accounts go through ServiceProviderService.register so the
        profile row is created alongside the user.
        """
        self.ensure_email_available(request.email)
        user = self.create_user(
            request.name,
            request.email,
            request.password,
            UserRole.REGULAR,
        )
        logger.info("Registered user %s", user.id)
        return AuthResponse(
            message="User registered successfully",
            token=self.issue_token(user),
            user=PublicUser.from_user(user),
        )

    async def login(self, request: LoginRequest) -> AuthResponse:
        """Check credentials and issue a token."""
        user = self._users.get_by_email(request.email.lower())
        if user is None or not self._hasher.verify(request.password, user.password_hash):
            raise InvalidCredentialsError()

        return AuthResponse(
            message="Login successful",
            token=self.issue_token(user),
            user=PublicUser.from_user(user),
        )

    async def get_profile(self, user_id: str) -> UserProfile:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return UserProfile.from_user(user)

    async def update_profile(
        self,
        user_id: str,
        request: UpdateProfileRequest,
    ) -> UserProfile:
        """Apply the allow-listed profile fields present in the request."""
        current = self._users.get_by_id(user_id)
        if current is None:
            raise UserNotFoundError(user_id)

        changes = request.model_dump(exclude_unset=True)
        if "email" in changes:
            changes["email"] = changes["email"].lower()
            if changes["email"] == current.email:
                del changes["email"]
            else:
                self.ensure_email_available(changes["email"])

        if not changes:
            return UserProfile.from_user(current)

        try:
            user = self._users.update(user_id, changes)
        except ConflictError:
            raise EmailAlreadyRegisteredError(changes.get("email", current.email))
        if user is None:
            raise UserNotFoundError(user_id)
        return UserProfile.from_user(user)
