"""
Service provider module interface.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import PortfolioItem, ServiceProviderProfile


@runtime_checkable
class IProviderRepository(Protocol):
    """
    Storage contract for provider profiles.

    Implementations must enforce unique `email` and `user_id` at the store
    level and raise ConflictError when either is violated.
    """

    def create(self, data: dict[str, Any]) -> ServiceProviderProfile:
        """Insert a profile row and return it with generated fields."""
        ...

    def get_by_id(self, provider_id: str) -> Optional[ServiceProviderProfile]:
        ...

    def get_by_user_id(self, user_id: str) -> Optional[ServiceProviderProfile]:
        """Get the profile linked to a user account, or None."""
        ...

    def get_by_email(self, email: str) -> Optional[ServiceProviderProfile]:
        ...

    def list_providers(self, verified: Optional[bool] = None) -> list[ServiceProviderProfile]:
        """List profiles newest first, optionally filtered by verification."""
        ...

    def search(
        self,
        query: Optional[str] = None,
        service_type: Optional[str] = None,
    ) -> list[ServiceProviderProfile]:
        """
        Case-insensitive substring search.

        `query` matches name or description; `service_type` matches the
        service type. Either may be omitted.
        """
        ...

    def update(
        self,
        provider_id: str,
        changes: dict[str, Any],
    ) -> Optional[ServiceProviderProfile]:
        ...

    def add_portfolio_item(
        self,
        provider_id: str,
        item: PortfolioItem,
    ) -> Optional[ServiceProviderProfile]:
        """Append a portfolio entry and return the updated profile."""
        ...
