"""
User repository for database access.

Encapsulates Supabase queries and data mapping for the `users` table.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from shared.repository import BaseRepository
from .models import User


class UserRepository(BaseRepository[User]):
    """
    Repository for user accounts.

    Note: This repository does NOT perform authorization checks.
    The service layer decides who may read or change which account.
    """

    TABLE = "users"

    def create(self, data: dict[str, Any]) -> User:
        result = self._execute(self._db.table(self.TABLE).insert(data))
        return self._map_to_user(result.data[0])

    def get_by_id(self, user_id: str) -> Optional[User]:
        result = self._execute(
            self._db.table(self.TABLE).select("*").eq("id", user_id)
        )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def get_by_email(self, email: str) -> Optional[User]:
        result = self._execute(
            self._db.table(self.TABLE).select("*").eq("email", email.lower())
        )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def update(self, user_id: str, changes: dict[str, Any]) -> Optional[User]:
        data = dict(changes)
        data["updated_at"] = datetime.now(timezone.utc).isoformat()
        result = self._execute(
            self._db.table(self.TABLE).update(data).eq("id", user_id)
        )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def delete(self, user_id: str) -> bool:
        result = self._execute(
            self._db.table(self.TABLE).delete().eq("id", user_id)
        )
        return bool(result.data)

    # -------------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------------

    def _map_to_user(self, data: dict[str, Any]) -> User:
        return User(
            id=str(data["id"]),
            name=data["name"],
            email=data["email"],
            password_hash=data["password_hash"],
            role=data.get("role") or "regular",
            phone=data.get("phone"),
            address=data.get("address"),
            membership=data.get("membership"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )
