"""
Service provider module data models.

A ServiceProviderProfile extends a `serviceProvider` user account with the
attributes shown in the marketplace directory.
"""

from datetime import datetime, timezone
from typing import Any, Optional
from pydantic import ConfigDict, EmailStr, Field, field_validator

from shared.models import APIModel


class PortfolioItem(APIModel):
    """A piece of past work shown on a provider's profile."""

    project_id: Optional[str] = None
    description: str
    images: list[str] = Field(default_factory=list)
    added_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ServiceProviderProfile(APIModel):
    """A provider profile as stored in the `service_providers` table."""

    id: str
    name: str
    email: str
    user_id: str = Field(..., description="Back-reference to the owning user account")
    user_type: str = "serviceProvider"
    license_file: Optional[str] = None
    verified: bool = False

    # Directory attributes
    service_type: Optional[str] = None
    experience: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None
    portfolio: list[PortfolioItem] = Field(default_factory=list)

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PublicProvider(APIModel):
    """Directory projection. Leaves out the license path and account link."""

    id: str
    name: str
    email: str
    verified: bool
    service_type: Optional[str] = None
    experience: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None
    portfolio: list[PortfolioItem] = Field(default_factory=list)

    @classmethod
    def from_profile(cls, profile: ServiceProviderProfile) -> "PublicProvider":
        return cls(
            id=profile.id,
            name=profile.name,
            email=profile.email,
            verified=profile.verified,
            service_type=profile.service_type,
            experience=profile.experience,
            description=profile.description,
            location=profile.location,
            phone=profile.phone,
            portfolio=profile.portfolio,
        )


# -----------------------------------------------------------------------------
# Requests / responses
# -----------------------------------------------------------------------------


class ProviderRegistration(APIModel):
    """Form fields of a provider registration."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    user_type: str = "serviceProvider"


class UpdateProviderProfileRequest(APIModel):
    """Allow-listed provider profile changes. Unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    service_type: Optional[str] = None
    experience: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("may not be null")
        return value


class AddPortfolioRequest(APIModel):
    """Request to append a portfolio entry."""

    project_id: Optional[str] = None
    description: str = Field(..., min_length=1)
    images: list[str] = Field(default_factory=list)


class ProviderListResponse(APIModel):
    providers: list[PublicProvider]


class ProviderResponse(APIModel):
    provider: PublicProvider


class ProviderUpdateResponse(APIModel):
    message: str
    provider: PublicProvider


class PortfolioResponse(APIModel):
    message: str
    portfolio: PortfolioItem
