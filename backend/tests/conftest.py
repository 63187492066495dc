"""
Shared test fixtures and utilities.

Provides in-memory repositories that behave like the Supabase-backed ones
(including unique email constraints), a service container wired to them,
and a TestClient for end-to-end route tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import ServiceContainer, reset_container, set_container
from shared.config import Settings
from shared.exceptions import ConflictError
from shared.models import UserRole
from modules.auth.models import User
from modules.projects.models import Project
from modules.services.models import PortfolioItem, ServiceProviderProfile


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryUserRepository:
    """Dict-backed IUserRepository with a unique email index."""

    def __init__(self) -> None:
        self.rows: dict[str, User] = {}

    def create(self, data: dict[str, Any]) -> User:
        if self.get_by_email(data["email"]) is not None:
            raise ConflictError("duplicate key value violates users_email_key", code="DUPLICATE")
        user = User.model_validate(
            {**data, "id": str(uuid4()), "created_at": _now(), "updated_at": _now()}
        )
        self.rows[user.id] = user
        return user

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.rows.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        email = email.lower()
        return next((u for u in self.rows.values() if u.email == email), None)

    def update(self, user_id: str, changes: dict[str, Any]) -> Optional[User]:
        user = self.rows.get(user_id)
        if user is None:
            return None
        other = self.get_by_email(changes["email"]) if "email" in changes else None
        if other is not None and other.id != user_id:
            raise ConflictError("duplicate key value violates users_email_key", code="DUPLICATE")
        updated = User.model_validate(
            {**user.model_dump(), **changes, "updated_at": _now()}
        )
        self.rows[user_id] = updated
        return updated

    def delete(self, user_id: str) -> bool:
        return self.rows.pop(user_id, None) is not None


class InMemoryProviderRepository:
    """Dict-backed IProviderRepository with unique email and user_id."""

    def __init__(self) -> None:
        self.rows: dict[str, ServiceProviderProfile] = {}
        self.fail_next_create: Optional[Exception] = None

    def create(self, data: dict[str, Any]) -> ServiceProviderProfile:
        if self.fail_next_create is not None:
            error, self.fail_next_create = self.fail_next_create, None
            raise error
        if self.get_by_email(data["email"]) or self.get_by_user_id(data["user_id"]):
            raise ConflictError(
                "duplicate key value violates service_providers_email_key",
                code="DUPLICATE",
            )
        profile = ServiceProviderProfile.model_validate(
            {**data, "id": str(uuid4()), "created_at": _now(), "updated_at": _now()}
        )
        self.rows[profile.id] = profile
        return profile

    def get_by_id(self, provider_id: str) -> Optional[ServiceProviderProfile]:
        return self.rows.get(provider_id)

    def get_by_user_id(self, user_id: str) -> Optional[ServiceProviderProfile]:
        return next((p for p in self.rows.values() if p.user_id == user_id), None)

    def get_by_email(self, email: str) -> Optional[ServiceProviderProfile]:
        email = email.lower()
        return next((p for p in self.rows.values() if p.email == email), None)

    def list_providers(self, verified: Optional[bool] = None) -> list[ServiceProviderProfile]:
        profiles = list(reversed(self.rows.values()))
        if verified is not None:
            profiles = [p for p in profiles if p.verified == verified]
        return profiles

    def search(
        self,
        query: Optional[str] = None,
        service_type: Optional[str] = None,
    ) -> list[ServiceProviderProfile]:
        results = []
        for profile in self.list_providers():
            if query:
                haystack = f"{profile.name} {profile.description or ''}".lower()
                if query.lower() not in haystack:
                    continue
            if service_type and service_type.lower() not in (profile.service_type or "").lower():
                continue
            results.append(profile)
        return results

    def update(
        self,
        provider_id: str,
        changes: dict[str, Any],
    ) -> Optional[ServiceProviderProfile]:
        profile = self.rows.get(provider_id)
        if profile is None:
            return None
        updated = ServiceProviderProfile.model_validate(
            {**profile.model_dump(), **changes, "updated_at": _now()}
        )
        self.rows[provider_id] = updated
        return updated

    def add_portfolio_item(
        self,
        provider_id: str,
        item: PortfolioItem,
    ) -> Optional[ServiceProviderProfile]:
        profile = self.rows.get(provider_id)
        if profile is None:
            return None
        updated = profile.model_copy(update={"portfolio": [*profile.portfolio, item]})
        self.rows[provider_id] = updated
        return updated

    def mark_verified(self, email: str) -> None:
        profile = self.get_by_email(email)
        self.rows[profile.id] = profile.model_copy(update={"verified": True})


class InMemoryProjectRepository:
    """Dict-backed IProjectRepository; every lookup is scoped to the owner."""

    def __init__(self) -> None:
        self.rows: dict[str, Project] = {}

    def create(self, data: dict[str, Any]) -> Project:
        project = Project.model_validate(
            {**data, "id": str(uuid4()), "created_at": _now(), "updated_at": _now()}
        )
        self.rows[project.id] = project
        return project

    def list_for_provider(self, provider_id: str) -> list[Project]:
        return [
            p for p in reversed(self.rows.values())
            if p.service_provider == provider_id
        ]

    def get_for_provider(self, project_id: str, provider_id: str) -> Optional[Project]:
        project = self.rows.get(project_id)
        if project is None or project.service_provider != provider_id:
            return None
        return project

    def update_for_provider(
        self,
        project_id: str,
        provider_id: str,
        changes: dict[str, Any],
    ) -> Optional[Project]:
        project = self.get_for_provider(project_id, provider_id)
        if project is None:
            return None
        updated = Project.model_validate(
            {**project.model_dump(), **changes, "updated_at": _now()}
        )
        self.rows[project_id] = updated
        return updated

    def delete_for_provider(self, project_id: str, provider_id: str) -> bool:
        if self.get_for_provider(project_id, provider_id) is None:
            return False
        del self.rows[project_id]
        return True


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing uploads at a temp dir, with fast bcrypt."""
    return Settings(
        jwt_secret=TEST_JWT_SECRET,
        upload_dir=str(tmp_path / "uploads"),
        base_url="http://testserver",
        bcrypt_rounds=4,
    )


@pytest.fixture
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def providers() -> InMemoryProviderRepository:
    return InMemoryProviderRepository()


@pytest.fixture
def projects() -> InMemoryProjectRepository:
    return InMemoryProjectRepository()


@pytest.fixture
def container(settings, users, providers, projects):
    """Install a container backed by the in-memory repositories."""
    container = ServiceContainer(
        settings,
        users=users,
        providers=providers,
        projects=projects,
    )
    set_container(container)
    yield container
    reset_container()


@pytest.fixture
def client(container) -> TestClient:
    """TestClient on a fresh app; unexpected errors become 500 responses."""
    return TestClient(create_app(), raise_server_exceptions=False)


@pytest.fixture
def auth_headers_for(container) -> Callable[..., dict[str, str]]:
    """Build Authorization headers carrying a token for any subject."""

    def build(user_id: str, role: UserRole = UserRole.REGULAR) -> dict[str, str]:
        token = container.token_codec.issue(user_id, role)
        return {"Authorization": f"Bearer {token}"}

    return build


@pytest.fixture
def signup(client) -> Callable[..., dict[str, Any]]:
    """Register an account over HTTP and return the response body."""

    def register(
        name: str,
        email: str,
        user_type: str = "regular",
        password: str = "secret123",
    ) -> dict[str, Any]:
        response = client.post(
            "/api/auth/register",
            json={
                "name": name,
                "email": email,
                "password": password,
                "userType": user_type,
            },
        )
        assert response.status_code == 201, response.text
        body = response.json()
        body["headers"] = {"Authorization": f"Bearer {body['token']}"}
        return body

    return register


@pytest.fixture
def expired_token() -> str:
    """A correctly signed token issued 25 hours ago."""
    from modules.auth.models import TokenSettings
    from modules.auth.service import TokenCodec

    codec = TokenCodec(TokenSettings(secret=TEST_JWT_SECRET))
    return codec.issue(
        "user-123",
        UserRole.REGULAR,
        issued_at=datetime.now(timezone.utc) - timedelta(hours=25),
    )
