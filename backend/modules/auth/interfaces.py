"""
Authentication module interface.

Services depend on IUserRepository, not the Supabase implementation.
This enables testing with in-memory stores and mocks.
"""

from typing import Any, Protocol, Optional, runtime_checkable

from .models import User


@runtime_checkable
class IUserRepository(Protocol):
    """
    Storage contract for user accounts.

    Implementations must enforce email uniqueness at the store level and
    raise ConflictError when it is violated.
    """

    def create(self, data: dict[str, Any]) -> User:
        """Insert a user row and return it with generated fields."""
        ...

    def get_by_id(self, user_id: str) -> Optional[User]:
        """Get a user by ID, or None."""
        ...

    def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email (case-insensitive), or None."""
        ...

    def update(self, user_id: str, changes: dict[str, Any]) -> Optional[User]:
        """Apply column changes and return the updated user, or None if absent."""
        ...

    def delete(self, user_id: str) -> bool:
        """Delete a user. Returns True if a row was removed."""
        ...
