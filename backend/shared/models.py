"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """
    Base for models that cross the HTTP boundary.

    Attributes are snake_case in Python and camelCase on the wire.
    Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class UserRole(str, Enum):
    """Account roles."""

    REGULAR = "regular"
    SERVICE_PROVIDER = "serviceProvider"


class Identity(BaseModel):
    """
    The authenticated principal for a single request.

    Built by the auth middleware from a verified token and discarded at
    the end of the request. Never persisted.
    """

    id: str = Field(..., description="User ID from the token subject")
    role: UserRole = Field(..., description="Account role from the token")
    verified: bool = Field(
        default=False,
        description="Provider verification state (resolved by the verified gate)",
    )

    model_config = {"frozen": True}


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str
