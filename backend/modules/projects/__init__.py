"""
Projects module.

Ownership-scoped project CRUD for service providers.

Public API:
- IProjectRepository: Storage interface
- Project, ProjectStatus, ProjectCategory, Milestone, Review: Models
- ProjectNotFoundError: Raised for missing and foreign projects alike
"""

from .interfaces import IProjectRepository
from .models import (
    Project,
    ProjectStatus,
    ProjectCategory,
    Milestone,
    MilestoneStatus,
    Review,
    ClientSummary,
    CreateProjectRequest,
    UpdateProjectRequest,
)
from .exceptions import ProjectNotFoundError

__all__ = [
    "IProjectRepository",
    "Project",
    "ProjectStatus",
    "ProjectCategory",
    "Milestone",
    "MilestoneStatus",
    "Review",
    "ClientSummary",
    "CreateProjectRequest",
    "UpdateProjectRequest",
    "ProjectNotFoundError",
]
