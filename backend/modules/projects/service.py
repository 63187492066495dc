"""
Projects service implementation.

Ownership-scoped CRUD for the calling service provider's projects.
"""

import logging
import uuid
from datetime import datetime, timezone

from modules.services.service import ServiceProviderService

from .exceptions import ProjectNotFoundError
from .interfaces import IProjectRepository
from .models import (
    CreateProjectRequest,
    Project,
    ProjectStatus,
    UpdateProjectRequest,
)

logger = logging.getLogger(__name__)


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
    except (ValueError, TypeError):
        return False
    return True


class ProjectService:
    """
    Project operations for service providers.

    Every operation first resolves the caller's provider profile from the
    user ID in the token. Reads, updates and deletes of a project that
    exists but belongs to another provider fail exactly like a missing
    project (404).
    """

    def __init__(self, projects: IProjectRepository, providers: ServiceProviderService):
        self._projects = projects
        self._providers = providers

    async def create_project(self, user_id: str, request: CreateProjectRequest) -> Project:
        """Create a project owned by the caller. Status starts as pending."""
        provider = self._providers.require_profile(
            user_id,
            "Only service providers can create projects",
        )
        data = request.model_dump(mode="json", exclude_none=True)
        data["service_provider"] = provider.id
        data["status"] = ProjectStatus.PENDING.value
        data.setdefault("start_date", datetime.now(timezone.utc).isoformat())

        project = self._projects.create(data)
        logger.info("Provider %s created project %s", provider.id, project.id)
        return project

    async def list_projects(self, user_id: str) -> list[Project]:
        provider = self._providers.require_profile(user_id)
        return self._projects.list_for_provider(provider.id)

    async def get_project(self, user_id: str, project_id: str) -> Project:
        provider = self._providers.require_profile(user_id)
        project = None
        if _is_uuid(project_id):
            project = self._projects.get_for_provider(project_id, provider.id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    async def update_project(
        self,
        user_id: str,
        project_id: str,
        request: UpdateProjectRequest,
    ) -> Project:
        """Apply allow-listed changes; owner and client are never rewritten."""
        provider = self._providers.require_profile(user_id)
        if not _is_uuid(project_id):
            raise ProjectNotFoundError(project_id)

        changes = request.changes()
        if not changes:
            return await self.get_project(user_id, project_id)

        project = self._projects.update_for_provider(project_id, provider.id, changes)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    async def delete_project(self, user_id: str, project_id: str) -> None:
        provider = self._providers.require_profile(user_id)
        if not _is_uuid(project_id) or not self._projects.delete_for_provider(
            project_id, provider.id
        ):
            raise ProjectNotFoundError(project_id)
        logger.info("Provider %s deleted project %s", provider.id, project_id)
