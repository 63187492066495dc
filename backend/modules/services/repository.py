"""
Service provider repository for database access.

Encapsulates Supabase queries and data mapping for the
`service_providers` table.
"""

import re
from datetime import datetime, timezone
from typing import Any, Optional

from shared.repository import BaseRepository
from .models import PortfolioItem, ServiceProviderProfile

# Characters with meaning inside a PostgREST or=(...) filter
_FILTER_SYNTAX = re.compile(r"[,()*%\\]")


class ProviderRepository(BaseRepository[ServiceProviderProfile]):
    """
    Repository for provider profiles.

    Note: This repository does NOT perform authorization checks.
    """

    TABLE = "service_providers"

    def create(self, data: dict[str, Any]) -> ServiceProviderProfile:
        result = self._execute(self._db.table(self.TABLE).insert(data))
        return self._map_to_profile(result.data[0])

    def get_by_id(self, provider_id: str) -> Optional[ServiceProviderProfile]:
        return self._first(
            self._db.table(self.TABLE).select("*").eq("id", provider_id)
        )

    def get_by_user_id(self, user_id: str) -> Optional[ServiceProviderProfile]:
        return self._first(
            self._db.table(self.TABLE).select("*").eq("user_id", user_id)
        )

    def get_by_email(self, email: str) -> Optional[ServiceProviderProfile]:
        return self._first(
            self._db.table(self.TABLE).select("*").eq("email", email.lower())
        )

    def list_providers(
        self,
        verified: Optional[bool] = None,
    ) -> list[ServiceProviderProfile]:
        query = self._db.table(self.TABLE).select("*")
        if verified is not None:
            query = query.eq("verified", verified)
        result = self._execute(query.order("created_at", desc=True))
        return [self._map_to_profile(row) for row in result.data]

    def search(
        self,
        query: Optional[str] = None,
        service_type: Optional[str] = None,
    ) -> list[ServiceProviderProfile]:
        builder = self._db.table(self.TABLE).select("*")

        term = _FILTER_SYNTAX.sub("", query or "").strip()
        if term:
            builder = builder.or_(f"name.ilike.*{term}*,description.ilike.*{term}*")

        kind = _FILTER_SYNTAX.sub("", service_type or "").strip()
        if kind:
            builder = builder.ilike("service_type", f"%{kind}%")

        result = self._execute(builder.order("created_at", desc=True))
        return [self._map_to_profile(row) for row in result.data]

    def update(
        self,
        provider_id: str,
        changes: dict[str, Any],
    ) -> Optional[ServiceProviderProfile]:
        data = dict(changes)
        data["updated_at"] = datetime.now(timezone.utc).isoformat()
        return self._first(
            self._db.table(self.TABLE).update(data).eq("id", provider_id)
        )

    def add_portfolio_item(
        self,
        provider_id: str,
        item: PortfolioItem,
    ) -> Optional[ServiceProviderProfile]:
        profile = self.get_by_id(provider_id)
        if profile is None:
            return None
        portfolio = [p.model_dump(mode="json") for p in profile.portfolio]
        portfolio.append(item.model_dump(mode="json"))
        return self.update(provider_id, {"portfolio": portfolio})

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _first(self, query: Any) -> Optional[ServiceProviderProfile]:
        result = self._execute(query)
        if not result.data:
            return None
        return self._map_to_profile(result.data[0])

    def _map_to_profile(self, data: dict[str, Any]) -> ServiceProviderProfile:
        return ServiceProviderProfile(
            id=str(data["id"]),
            name=data["name"],
            email=data["email"],
            user_id=str(data["user_id"]),
            user_type=data.get("user_type") or "serviceProvider",
            license_file=data.get("license_file"),
            verified=bool(data.get("verified", False)),
            service_type=data.get("service_type"),
            experience=data.get("experience"),
            description=data.get("description"),
            location=data.get("location"),
            phone=data.get("phone"),
            portfolio=[PortfolioItem(**p) for p in data.get("portfolio") or []],
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
