"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and translating store failures into the
application's exception hierarchy.
"""

import logging
from typing import Any, TypeVar, Generic

from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import ConflictError, StoreError


T = TypeVar("T")

logger = logging.getLogger(__name__)

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"


class BaseRepository(Generic[T]):
    """
    Base class for all Supabase repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - _execute() which runs a query builder and maps APIError

    Subclasses implement domain-specific data access methods and handle
    dict-to-Pydantic model mapping internally.

    Example:
        class ProjectRepository(BaseRepository[Project]):
            def get_by_id(self, project_id: str) -> Optional[Project]:
                result = self._execute(
                    self._db.table("projects").select("*").eq("id", project_id)
                )
                if not result.data:
                    return None
                return self._map_to_project(result.data[0])
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _execute(self, query: Any) -> Any:
        """
        Execute a PostgREST query builder.

        Raises:
            ConflictError: On a unique constraint violation.
            StoreError: On any other store-side failure.
        """
        try:
            return query.execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise ConflictError(
                    e.message or "Duplicate value",
                    code="DUPLICATE",
                    details={"hint": e.details},
                )
            logger.warning("Store error (code=%s): %s", e.code, e.message)
            raise StoreError(e.message or str(e), details={"store_code": e.code})
