"""
Service provider service implementation.

Provider registration (user account plus linked profile), the public
directory, and the provider's own profile and portfolio management.
"""

import logging
from typing import Optional, Sequence

from shared.exceptions import ConflictError
from shared.models import UserRole
from modules.auth.exceptions import EmailAlreadyRegisteredError
from modules.auth.models import AuthResponse, PublicUser
from modules.auth.service import AccountService
from modules.uploads.models import UploadedFile

from .exceptions import ProviderNotFoundError, ProviderProfileMissingError
from .interfaces import IProviderRepository
from .models import (
    AddPortfolioRequest,
    PortfolioItem,
    ProviderRegistration,
    PublicProvider,
    ServiceProviderProfile,
    UpdateProviderProfileRequest,
)

logger = logging.getLogger(__name__)


class ServiceProviderService:
    """
    Provider-facing operations.

    Registration writes two rows (user, then profile) without a store-level
    transaction. If the profile insert fails the user row is deleted again
    so no account is left without its profile.
    """

    def __init__(self, accounts: AccountService, providers: IProviderRepository):
        self._accounts = accounts
        self._providers = providers

    async def register(
        self,
        registration: ProviderRegistration,
        files: Sequence[UploadedFile] = (),
    ) -> AuthResponse:
        """
        Register a service provider.

        Args:
            registration: Name, email and password from the form
            files: License documents already stored by the upload gate;
                the first one becomes the profile's license file

        Raises:
            EmailAlreadyRegisteredError: Email used by a user or a provider
        """
        email = registration.email.lower()
        self._accounts.ensure_email_available(email)

        user = self._accounts.create_user(
            registration.name,
            email,
            registration.password,
            UserRole.SERVICE_PROVIDER,
        )

        try:
            profile = self._providers.create({
                "name": registration.name,
                "email": email,
                "user_id": user.id,
                "user_type": UserRole.SERVICE_PROVIDER.value,
                "license_file": files[0].path if files else None,
                "verified": False,
            })
        except Exception as e:
            logger.warning(
                "Provider profile insert failed for user %s, removing the account: %s",
                user.id,
                e,
            )
            self._accounts.delete_user(user.id)
            if isinstance(e, ConflictError):
                raise EmailAlreadyRegisteredError(email)
            raise

        logger.info("Registered service provider %s (user %s)", profile.id, user.id)
        return AuthResponse(
            message="Service provider registered successfully",
            token=self._accounts.issue_token(user),
            user=PublicUser.from_user(user),
        )

    # -------------------------------------------------------------------------
    # Directory
    # -------------------------------------------------------------------------

    async def list_providers(self, verified: Optional[bool] = None) -> list[PublicProvider]:
        return [
            PublicProvider.from_profile(p)
            for p in self._providers.list_providers(verified)
        ]

    async def get_provider(self, provider_id: str) -> PublicProvider:
        profile = self._providers.get_by_id(provider_id)
        if profile is None:
            raise ProviderNotFoundError(provider_id)
        return PublicProvider.from_profile(profile)

    async def search(
        self,
        query: Optional[str] = None,
        service_type: Optional[str] = None,
    ) -> list[PublicProvider]:
        return [
            PublicProvider.from_profile(p)
            for p in self._providers.search(query, service_type)
        ]

    # -------------------------------------------------------------------------
    # Provider's own profile
    # -------------------------------------------------------------------------

    def require_profile(
        self,
        user_id: str,
        message: str = "Access denied",
    ) -> ServiceProviderProfile:
        profile = self._providers.get_by_user_id(user_id)
        if profile is None:
            raise ProviderProfileMissingError(user_id, message)
        return profile

    async def update_profile(
        self,
        user_id: str,
        request: UpdateProviderProfileRequest,
    ) -> PublicProvider:
        profile = self.require_profile(user_id)
        changes = request.model_dump(exclude_unset=True)
        if not changes:
            return PublicProvider.from_profile(profile)

        updated = self._providers.update(profile.id, changes)
        if updated is None:
            raise ProviderNotFoundError(profile.id)
        return PublicProvider.from_profile(updated)

    async def add_portfolio_item(
        self,
        user_id: str,
        request: AddPortfolioRequest,
    ) -> PortfolioItem:
        profile = self.require_profile(user_id)
        item = PortfolioItem(
            project_id=request.project_id,
            description=request.description,
            images=request.images,
        )
        if self._providers.add_portfolio_item(profile.id, item) is None:
            raise ProviderNotFoundError(profile.id)
        return item
