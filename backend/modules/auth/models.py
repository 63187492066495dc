"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from shared.models import APIModel, UserRole
from modules.membership.models import Membership


@dataclass(frozen=True)
class TokenSettings:
    """Explicit configuration handed to the TokenCodec at construction."""

    secret: str
    algorithm: str = "HS256"
    expires_in: timedelta = timedelta(hours=24)


class TokenPayload(BaseModel):
    """Decoded JWT claims."""

    id: str = Field(..., description="Subject (user ID)")
    role: UserRole = Field(..., description="Account role")
    iat: int = Field(..., description="Issued at timestamp")
    exp: int = Field(..., description="Expiration timestamp")


class User(BaseModel):
    """A user account as stored in the `users` table."""

    id: str
    name: str
    email: str
    password_hash: str
    role: UserRole = UserRole.REGULAR
    phone: Optional[str] = None
    address: Optional[str] = None
    membership: Optional[Membership] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PublicUser(APIModel):
    """Public-safe user projection. Never includes the password hash."""

    id: str
    name: str
    email: str
    role: UserRole

    @classmethod
    def from_user(cls, user: User) -> "PublicUser":
        return cls(id=user.id, name=user.name, email=user.email, role=user.role)


class UserProfile(PublicUser):
    """Full profile returned to the account owner."""

    phone: Optional[str] = None
    address: Optional[str] = None
    membership: Optional[Membership] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_user(cls, user: User) -> "UserProfile":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            phone=user.phone,
            address=user.address,
            membership=user.membership,
            created_at=user.created_at,
        )


# -----------------------------------------------------------------------------
# Requests / responses
# -----------------------------------------------------------------------------


class RegisterRequest(APIModel):
    """Account registration request."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    user_type: UserRole = Field(default=UserRole.REGULAR)


class LoginRequest(APIModel):
    """Login request."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class UpdateProfileRequest(APIModel):
    """Profile update. Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    @field_validator("name", "email")
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("may not be null")
        return value


class AuthResponse(APIModel):
    """Response carrying a freshly issued token."""

    message: str
    token: str
    user: PublicUser


class UserResponse(APIModel):
    """Wrapper for /me."""

    user: UserProfile


class ProfileUpdateResponse(APIModel):
    """Response for profile and membership updates."""

    message: str
    user: UserProfile
