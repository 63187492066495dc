"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations: settings, the Supabase client, repositories, the token
codec, the upload gate and the services built on them.

Tests install a container whose repositories are in-memory doubles;
routes only ever see the dependency functions at the bottom of this file.
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from supabase import Client
    from modules.auth.interfaces import IUserRepository
    from modules.auth.passwords import PasswordHasher
    from modules.auth.service import AccountService, TokenCodec
    from modules.membership.service import MembershipService
    from modules.projects.interfaces import IProjectRepository
    from modules.projects.service import ProjectService
    from modules.services.interfaces import IProviderRepository
    from modules.services.service import ServiceProviderService
    from modules.uploads.service import UploadGate


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Repositories and the upload gate may be passed in
    explicitly; anything not passed is built from settings.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        users: "IUserRepository | None" = None,
        providers: "IProviderRepository | None" = None,
        projects: "IProjectRepository | None" = None,
        upload_gate: "UploadGate | None" = None,
    ) -> None:
        self._settings = settings
        self._users = users
        self._providers = providers
        self._projects = projects
        self._upload_gate = upload_gate

        self._token_codec: "TokenCodec | None" = None
        self._password_hasher: "PasswordHasher | None" = None
        self._account_service: "AccountService | None" = None
        self._provider_service: "ServiceProviderService | None" = None
        self._project_service: "ProjectService | None" = None
        self._membership_service: "MembershipService | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def db(self) -> "Client":
        """Get the Supabase client (only touched when a repository is built)."""
        from shared.database import get_supabase_client
        return get_supabase_client()

    # -------------------------------------------------------------------------
    # Repositories
    # -------------------------------------------------------------------------

    @property
    def users(self) -> "IUserRepository":
        if self._users is None:
            from modules.auth.repository import UserRepository
            self._users = UserRepository(self.db)
        return self._users

    @property
    def providers(self) -> "IProviderRepository":
        if self._providers is None:
            from modules.services.repository import ProviderRepository
            self._providers = ProviderRepository(self.db)
        return self._providers

    @property
    def projects(self) -> "IProjectRepository":
        if self._projects is None:
            from modules.projects.repository import ProjectRepository
            self._projects = ProjectRepository(self.db)
        return self._projects

    # -------------------------------------------------------------------------
    # Infrastructure services
    # -------------------------------------------------------------------------

    @property
    def token_codec(self) -> "TokenCodec":
        """Get the token codec. Raises ConfigurationError without a JWT secret."""
        if self._token_codec is None:
            from modules.auth.service import TokenCodec
            self._token_codec = TokenCodec.from_settings(self.settings)
        return self._token_codec

    @property
    def password_hasher(self) -> "PasswordHasher":
        if self._password_hasher is None:
            from modules.auth.passwords import PasswordHasher
            self._password_hasher = PasswordHasher(rounds=self.settings.bcrypt_rounds)
        return self._password_hasher

    @property
    def upload_gate(self) -> "UploadGate":
        if self._upload_gate is None:
            from modules.uploads.service import UploadGate
            self._upload_gate = UploadGate.from_settings(self.settings)
        return self._upload_gate

    # -------------------------------------------------------------------------
    # Domain services
    # -------------------------------------------------------------------------

    @property
    def accounts(self) -> "AccountService":
        if self._account_service is None:
            from modules.auth.service import AccountService
            self._account_service = AccountService(
                users=self.users,
                providers=self.providers,
                codec=self.token_codec,
                hasher=self.password_hasher,
            )
        return self._account_service

    @property
    def service_providers(self) -> "ServiceProviderService":
        if self._provider_service is None:
            from modules.services.service import ServiceProviderService
            self._provider_service = ServiceProviderService(
                accounts=self.accounts,
                providers=self.providers,
            )
        return self._provider_service

    @property
    def project_service(self) -> "ProjectService":
        if self._project_service is None:
            from modules.projects.service import ProjectService
            self._project_service = ProjectService(
                projects=self.projects,
                providers=self.service_providers,
            )
        return self._project_service

    @property
    def membership(self) -> "MembershipService":
        if self._membership_service is None:
            from modules.membership.service import MembershipService
            self._membership_service = MembershipService(users=self.users)
        return self._membership_service

    def reset(self) -> None:
        """
        Reset all cached services.

        Injected repositories are kept; everything built lazily is dropped.
        """
        self._token_codec = None
        self._password_hasher = None
        self._account_service = None
        self._provider_service = None
        self._project_service = None
        self._membership_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def set_container(container: ServiceContainer) -> None:
    """Install a pre-built container (used by tests and scripts)."""
    global _container
    _container = container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_token_codec() -> "TokenCodec":
    """FastAPI dependency for the token codec."""
    return get_container().token_codec


def get_upload_gate() -> "UploadGate":
    """FastAPI dependency for the upload gate."""
    return get_container().upload_gate


def get_provider_repository() -> "IProviderRepository":
    """FastAPI dependency for provider profile storage."""
    return get_container().providers


def get_account_service() -> "AccountService":
    """FastAPI dependency for the account service."""
    return get_container().accounts


def get_provider_service() -> "ServiceProviderService":
    """FastAPI dependency for the service provider service."""
    return get_container().service_providers


def get_project_service() -> "ProjectService":
    """FastAPI dependency for the project service."""
    return get_container().project_service


def get_membership_service() -> "MembershipService":
    """FastAPI dependency for the membership service."""
    return get_container().membership
