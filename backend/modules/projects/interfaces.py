"""
Projects module interface.

Every read and write except create is scoped by the owning provider ID,
so a repository can never hand one provider another provider's project.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import Project


@runtime_checkable
class IProjectRepository(Protocol):
    """Storage contract for projects."""

    def create(self, data: dict[str, Any]) -> Project:
        """Insert a project row and return it with generated fields."""
        ...

    def list_for_provider(self, provider_id: str) -> list[Project]:
        """Projects owned by a provider, newest first, client expanded."""
        ...

    def get_for_provider(self, project_id: str, provider_id: str) -> Optional[Project]:
        """The project if it exists and is owned by the provider, else None."""
        ...

    def update_for_provider(
        self,
        project_id: str,
        provider_id: str,
        changes: dict[str, Any],
    ) -> Optional[Project]:
        """Apply changes to an owned project. None if missing or not owned."""
        ...

    def delete_for_provider(self, project_id: str, provider_id: str) -> bool:
        """Delete an owned project. False if missing or not owned."""
        ...
