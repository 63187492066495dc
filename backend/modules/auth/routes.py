"""
Account API endpoints.

Registration, login, the caller's own profile and membership upgrades.
"""

from fastapi import APIRouter, Depends

from api.dependencies import (
    get_account_service,
    get_membership_service,
    get_provider_service,
)
from api.middleware.auth import get_current_identity
from shared.models import Identity, MessageResponse, UserRole
from modules.membership.models import UpgradeMembershipRequest
from modules.membership.service import MembershipService
from modules.services.models import ProviderRegistration
from modules.services.service import ServiceProviderService

from .models import (
    AuthResponse,
    LoginRequest,
    ProfileUpdateResponse,
    RegisterRequest,
    UpdateProfileRequest,
    UserResponse,
)
from .service import AccountService

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    request: RegisterRequest,
    accounts: AccountService = Depends(get_account_service),
    providers: ServiceProviderService = Depends(get_provider_service),
) -> AuthResponse:
    """
    Register an account.

    `userType: serviceProvider` also creates the (unverified) provider
    profile; license documents can only be sent through the multipart
    provider registration.
    """
    if request.user_type == UserRole.SERVICE_PROVIDER:
        return await providers.register(
            ProviderRegistration(
                name=request.name,
                email=request.email,
                password=request.password,
            )
        )
    return await accounts.register(request)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
) -> AuthResponse:
    return await accounts.login(request)


@router.get("/me", response_model=UserResponse)
async def get_me(
    identity: Identity = Depends(get_current_identity),
    accounts: AccountService = Depends(get_account_service),
) -> UserResponse:
    """Get the caller's profile."""
    return UserResponse(user=await accounts.get_profile(identity.id))


@router.put("/profile", response_model=ProfileUpdateResponse)
async def update_profile(
    request: UpdateProfileRequest,
    identity: Identity = Depends(get_current_identity),
    accounts: AccountService = Depends(get_account_service),
) -> ProfileUpdateResponse:
    user = await accounts.update_profile(identity.id, request)
    return ProfileUpdateResponse(message="Profile updated successfully", user=user)


@router.put("/membership", response_model=ProfileUpdateResponse)
async def upgrade_membership(
    request: UpgradeMembershipRequest,
    identity: Identity = Depends(get_current_identity),
    membership: MembershipService = Depends(get_membership_service),
) -> ProfileUpdateResponse:
    """Start a membership for one billing cycle from now."""
    user = await membership.upgrade(identity.id, request)
    return ProfileUpdateResponse(message="Membership updated successfully", user=user)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    identity: Identity = Depends(get_current_identity),
) -> MessageResponse:
    """Tokens are stateless; the client discards its copy."""
    return MessageResponse(message="Logged out")
