"""
Project repository for database access.

Encapsulates Supabase queries and data mapping for the `projects` table.
The owning provider and client are stored as `service_provider_id` and
`client_id` foreign keys.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from shared.repository import BaseRepository
from .models import ClientSummary, Milestone, Project, Review

# Embeds the client's name and email through the client_id foreign key
_SELECT_WITH_CLIENT = "*, client:users!client_id(id, name, email)"

# API attribute -> column, where they differ
_COLUMNS = {
    "service_provider": "service_provider_id",
    "client": "client_id",
}


class ProjectRepository(BaseRepository[Project]):
    """
    Repository for project data access.

    Every query except insert filters on `service_provider_id`; ownership
    scoping is part of the query, not a check done after loading.
    """

    TABLE = "projects"

    def create(self, data: dict[str, Any]) -> Project:
        result = self._execute(
            self._db.table(self.TABLE).insert(self._to_columns(data))
        )
        return self._map_to_project(result.data[0])

    def list_for_provider(self, provider_id: str) -> list[Project]:
        result = self._execute(
            self._db.table(self.TABLE)
            .select(_SELECT_WITH_CLIENT)
            .eq("service_provider_id", provider_id)
            .order("created_at", desc=True)
        )
        return [self._map_to_project(row) for row in result.data]

    def get_for_provider(self, project_id: str, provider_id: str) -> Optional[Project]:
        result = self._execute(
            self._db.table(self.TABLE)
            .select(_SELECT_WITH_CLIENT)
            .eq("id", project_id)
            .eq("service_provider_id", provider_id)
        )
        if not result.data:
            return None
        return self._map_to_project(result.data[0])

    def update_for_provider(
        self,
        project_id: str,
        provider_id: str,
        changes: dict[str, Any],
    ) -> Optional[Project]:
        data = self._to_columns(changes)
        data["updated_at"] = datetime.now(timezone.utc).isoformat()
        result = self._execute(
            self._db.table(self.TABLE)
            .update(data)
            .eq("id", project_id)
            .eq("service_provider_id", provider_id)
        )
        if not result.data:
            return None
        return self._map_to_project(result.data[0])

    def delete_for_provider(self, project_id: str, provider_id: str) -> bool:
        result = self._execute(
            self._db.table(self.TABLE)
            .delete()
            .eq("id", project_id)
            .eq("service_provider_id", provider_id)
        )
        return bool(result.data)

    # -------------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------------

    def _to_columns(self, data: dict[str, Any]) -> dict[str, Any]:
        return {_COLUMNS.get(key, key): value for key, value in data.items()}

    def _map_to_project(self, data: dict[str, Any]) -> Project:
        embedded = data.get("client")
        if isinstance(embedded, dict):
            client: Any = ClientSummary(
                id=str(embedded["id"]),
                name=embedded.get("name"),
                email=embedded.get("email"),
            )
        else:
            client = str(data["client_id"])

        return Project(
            id=str(data["id"]),
            title=data["title"],
            description=data["description"],
            service_provider=str(data["service_provider_id"]),
            client=client,
            status=data.get("status") or "pending",
            category=data["category"],
            budget=data.get("budget"),
            location=data.get("location"),
            start_date=data.get("start_date"),
            end_date=data.get("end_date"),
            images=data.get("images") or [],
            documents=data.get("documents") or [],
            milestones=[Milestone(**m) for m in data.get("milestones") or []],
            reviews=[Review(**r) for r in data.get("reviews") or []],
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
