"""Tests for the token codec and account service."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from shared.exceptions import ConfigurationError
from shared.models import UserRole
from modules.auth.exceptions import (
    EmailAlreadyRegisteredError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    UserNotFoundError,
)
from modules.auth.models import (
    LoginRequest,
    RegisterRequest,
    TokenSettings,
    UpdateProfileRequest,
)
from modules.auth.passwords import PasswordHasher
from modules.auth.service import AccountService, TokenCodec

SECRET = "test-secret"


@pytest.fixture
def codec() -> TokenCodec:
    return TokenCodec(TokenSettings(secret=SECRET))


@pytest.fixture
def accounts(users, providers, codec) -> AccountService:
    return AccountService(
        users=users,
        providers=providers,
        codec=codec,
        hasher=PasswordHasher(rounds=4),
    )


class TestTokenCodec:
    def test_roundtrip(self, codec):
        token = codec.issue("user-1", UserRole.SERVICE_PROVIDER)
        identity = codec.verify(token)
        assert identity.id == "user-1"
        assert identity.role is UserRole.SERVICE_PROVIDER
        assert identity.verified is False

    def test_token_lives_24_hours(self, codec):
        issued = datetime(2024, 1, 1, tzinfo=timezone.utc)
        token = codec.issue("user-1", UserRole.REGULAR, issued_at=issued)
        claims = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False})
        assert claims["exp"] - claims["iat"] == 24 * 3600
        assert claims == {
            "id": "user-1",
            "role": "regular",
            "iat": int(issued.timestamp()),
            "exp": int((issued + timedelta(hours=24)).timestamp()),
        }

    def test_still_valid_just_before_expiry(self, codec):
        issued = datetime.now(timezone.utc) - timedelta(hours=23, minutes=59)
        token = codec.issue("user-1", UserRole.REGULAR, issued_at=issued)
        assert codec.verify(token).id == "user-1"

    def test_expired_after_24_hours(self, codec):
        issued = datetime.now(timezone.utc) - timedelta(hours=24, seconds=1)
        token = codec.issue("user-1", UserRole.REGULAR, issued_at=issued)
        with pytest.raises(ExpiredTokenError) as exc_info:
            codec.verify(token)
        assert exc_info.value.message == "Unauthorized: Token has expired"

    def test_wrong_signature_is_invalid(self, codec):
        other = TokenCodec(TokenSettings(secret="another-secret"))
        token = other.issue("user-1", UserRole.REGULAR)
        with pytest.raises(InvalidTokenError):
            codec.verify(token)

    def test_garbage_is_invalid(self, codec):
        with pytest.raises(InvalidTokenError) as exc_info:
            codec.verify("not.a.token")
        assert exc_info.value.message == "Unauthorized: Invalid token"

    @pytest.mark.parametrize("token", [None, ""])
    def test_empty_token_is_missing(self, codec, token):
        with pytest.raises(MissingTokenError):
            codec.verify(token)

    def test_claims_missing_role_are_invalid(self, codec):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"id": "user-1", "iat": int(now.timestamp()), "exp": int(now.timestamp()) + 60},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            codec.verify(token)

    def test_token_without_expiry_is_invalid(self, codec):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"id": "user-1", "role": "regular", "iat": int(now.timestamp())},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            codec.verify(token)

    def test_missing_secret_fails_fast(self):
        with pytest.raises(ConfigurationError) as exc_info:
            TokenCodec(TokenSettings(secret=""))
        assert exc_info.value.code == "JWT_SECRET_MISSING"

    def test_from_settings(self, settings):
        codec = TokenCodec.from_settings(settings)
        assert codec.settings.expires_in == timedelta(hours=24)
        assert codec.settings.algorithm == "HS256"


class TestAccountService:
    @pytest.mark.asyncio
    async def test_register_creates_regular_user(self, accounts, users, codec):
        response = await accounts.register(
            RegisterRequest(name="Bob", email="Bob@Example.com", password="secret123")
        )

        assert response.message == "User registered successfully"
        assert response.user.email == "bob@example.com"
        assert response.user.role is UserRole.REGULAR
        stored = users.get_by_email("bob@example.com")
        assert stored.password_hash != "secret123"
        assert codec.verify(response.token).id == stored.id

    @pytest.mark.asyncio
    async def test_register_rejects_duplicate_email(self, accounts):
        request = RegisterRequest(name="Bob", email="bob@example.com", password="secret123")
        await accounts.register(request)

        with pytest.raises(EmailAlreadyRegisteredError) as exc_info:
            await accounts.register(request)
        assert exc_info.value.message == "Email already registered"

    @pytest.mark.asyncio
    async def test_register_rejects_email_used_by_provider(self, accounts, providers):
        providers.create({
            "name": "Ada",
            "email": "ada@example.com",
            "user_id": "user-9",
            "user_type": "serviceProvider",
            "verified": False,
        })

        with pytest.raises(EmailAlreadyRegisteredError):
            await accounts.register(
                RegisterRequest(name="Imposter", email="ADA@example.com", password="secret123")
            )

    def test_create_user_maps_store_conflict(self, accounts, users):
        users.create({"name": "Bob", "email": "bob@example.com", "password_hash": "x"})

        with pytest.raises(EmailAlreadyRegisteredError):
            accounts.create_user("Bob", "bob@example.com", "secret123", UserRole.REGULAR)

    @pytest.mark.asyncio
    async def test_login_success(self, accounts):
        await accounts.register(
            RegisterRequest(name="Bob", email="bob@example.com", password="secret123")
        )

        response = await accounts.login(
            LoginRequest(email="BOB@example.com", password="secret123")
        )
        assert response.message == "Login successful"
        assert response.user.name == "Bob"

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, accounts):
        await accounts.register(
            RegisterRequest(name="Bob", email="bob@example.com", password="secret123")
        )

        with pytest.raises(InvalidCredentialsError):
            await accounts.login(LoginRequest(email="bob@example.com", password="wrong-pass"))

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, accounts):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await accounts.login(LoginRequest(email="ghost@example.com", password="secret123"))
        assert exc_info.value.message == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_get_profile_missing_user(self, accounts):
        with pytest.raises(UserNotFoundError):
            await accounts.get_profile("missing")

    @pytest.mark.asyncio
    async def test_update_profile(self, accounts, users):
        registered = await accounts.register(
            RegisterRequest(name="Bob", email="bob@example.com", password="secret123")
        )

        profile = await accounts.update_profile(
            registered.user.id,
            UpdateProfileRequest(phone="555-0100", email="Robert@Example.com"),
        )

        assert profile.phone == "555-0100"
        assert profile.email == "robert@example.com"
        assert users.get_by_id(registered.user.id).name == "Bob"

    @pytest.mark.asyncio
    async def test_update_profile_keeps_own_email(self, accounts):
        registered = await accounts.register(
            RegisterRequest(name="Bob", email="bob@example.com", password="secret123")
        )

        profile = await accounts.update_profile(
            registered.user.id,
            UpdateProfileRequest(email="bob@example.com", name="Bobby"),
        )
        assert profile.name == "Bobby"

    @pytest.mark.asyncio
    async def test_update_profile_rejects_taken_email(self, accounts):
        await accounts.register(
            RegisterRequest(name="Ada", email="ada@example.com", password="secret123")
        )
        bob = await accounts.register(
            RegisterRequest(name="Bob", email="bob@example.com", password="secret123")
        )

        with pytest.raises(EmailAlreadyRegisteredError):
            await accounts.update_profile(
                bob.user.id,
                UpdateProfileRequest(email="ada@example.com"),
            )
