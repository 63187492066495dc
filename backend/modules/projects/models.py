"""
Projects module data models.

A project is a unit of work owned by one service provider and done for
one client.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Union
from pydantic import ConfigDict, Field, field_validator

from shared.models import APIModel


class ProjectStatus(str, Enum):
    """Project lifecycle status."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ProjectCategory(str, Enum):
    """Kinds of work offered on the marketplace."""

    CONSTRUCTION = "construction"
    INTERIOR_DESIGN = "interior-design"
    RENOVATION = "renovation"
    MAINTENANCE = "maintenance"


class MilestoneStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class Milestone(APIModel):
    """A dated checkpoint within a project."""

    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    status: MilestoneStatus = MilestoneStatus.PENDING


class Review(APIModel):
    """Client feedback on a project."""

    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None
    client: Optional[str] = None
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ClientSummary(APIModel):
    """Client reference expanded with the fields shown to providers."""

    id: str
    name: Optional[str] = None
    email: Optional[str] = None


class Project(APIModel):
    """A project as returned by the API."""

    id: str
    title: str
    description: str
    service_provider: str = Field(..., description="Owning provider profile ID")
    client: Union[ClientSummary, str] = Field(
        ...,
        description="Client user ID, expanded to name/email on reads",
    )
    status: ProjectStatus = ProjectStatus.PENDING
    category: ProjectCategory
    budget: Optional[float] = None
    location: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    images: list[str] = Field(default_factory=list)
    documents: list[str] = Field(default_factory=list)
    milestones: list[Milestone] = Field(default_factory=list)
    reviews: list[Review] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# -----------------------------------------------------------------------------
# Requests / responses
# -----------------------------------------------------------------------------


class CreateProjectRequest(APIModel):
    """Request to create a project for the calling provider."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    client: str = Field(..., min_length=1, description="Client user ID")
    category: ProjectCategory
    budget: Optional[float] = Field(None, ge=0)
    location: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


# Accepted on update but never written
IMMUTABLE_FIELDS = frozenset({"service_provider", "client"})

# Columns that may be changed but never cleared
_REQUIRED_ON_UPDATE = (
    "title",
    "description",
    "status",
    "category",
    "start_date",
    "images",
    "documents",
    "milestones",
    "reviews",
)


class UpdateProjectRequest(APIModel):
    """
    Allow-listed project changes.

    Unknown keys are rejected. `serviceProvider` and `client` are accepted
    so that clients echoing a full project back don't fail, but they are
    dropped by `changes()`.
    """

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    status: Optional[ProjectStatus] = None
    category: Optional[ProjectCategory] = None
    budget: Optional[float] = Field(None, ge=0)
    location: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    images: Optional[list[str]] = None
    documents: Optional[list[str]] = None
    milestones: Optional[list[Milestone]] = None
    reviews: Optional[list[Review]] = None

    service_provider: Optional[Any] = None
    client: Optional[Any] = None

    @field_validator(*_REQUIRED_ON_UPDATE)
    @classmethod
    def _not_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("may not be null")
        return value

    def changes(self) -> dict[str, Any]:
        """Fields to write, as JSON-ready values keyed by attribute name."""
        return self.model_dump(
            mode="json",
            exclude_unset=True,
            exclude=set(IMMUTABLE_FIELDS),
        )


class ProjectResponse(APIModel):
    project: Project


class ProjectListResponse(APIModel):
    projects: list[Project]


class ProjectMutationResponse(APIModel):
    message: str
    project: Project
