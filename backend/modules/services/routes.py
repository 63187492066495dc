"""
Service provider API endpoints.

Provider registration (multipart, with license documents), the public
directory, and the provider's own profile and portfolio.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from pydantic import EmailStr

from api.dependencies import get_provider_service, get_upload_gate
from api.middleware.auth import require_service_provider, require_verified
from shared.models import Identity
from modules.auth.models import AuthResponse
from modules.uploads.service import UploadGate

from .models import (
    AddPortfolioRequest,
    PortfolioResponse,
    ProviderListResponse,
    ProviderRegistration,
    ProviderResponse,
    ProviderUpdateResponse,
    UpdateProviderProfileRequest,
)
from .service import ServiceProviderService

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register_provider(
    name: str = Form(..., min_length=1, max_length=200),
    email: EmailStr = Form(...),
    password: str = Form(..., min_length=8, max_length=128),
    user_type: str = Form("serviceProvider", alias="userType"),
    documents: Optional[list[UploadFile]] = File(None),
    service: ServiceProviderService = Depends(get_provider_service),
    gate: UploadGate = Depends(get_upload_gate),
) -> AuthResponse:
    """
    Register a service provider.

    Documents are validated and stored first; if registration then fails
    they are removed again.
    """
    registration = ProviderRegistration(
        name=name,
        email=email,
        password=password,
        user_type=user_type,
    )
    stored = await gate.store("documents", documents or [])
    try:
        return await service.register(registration, stored)
    except Exception:
        gate.discard(stored)
        raise


@router.get("/providers", response_model=ProviderListResponse)
async def list_providers(
    verified: Optional[bool] = Query(default=None, description="Filter by verification"),
    service: ServiceProviderService = Depends(get_provider_service),
) -> ProviderListResponse:
    """List providers, newest first."""
    return ProviderListResponse(providers=await service.list_providers(verified))


@router.get("/providers/{provider_id}", response_model=ProviderResponse)
async def get_provider(
    provider_id: str,
    service: ServiceProviderService = Depends(get_provider_service),
) -> ProviderResponse:
    return ProviderResponse(provider=await service.get_provider(provider_id))


@router.get("/search", response_model=ProviderListResponse)
async def search_providers(
    query: Optional[str] = Query(default=None, description="Matches name or description"),
    service_type: Optional[str] = Query(default=None, alias="serviceType"),
    service: ServiceProviderService = Depends(get_provider_service),
) -> ProviderListResponse:
    """Case-insensitive substring search over the directory."""
    return ProviderListResponse(providers=await service.search(query, service_type))


@router.put("/profile", response_model=ProviderUpdateResponse)
async def update_provider_profile(
    request: UpdateProviderProfileRequest,
    identity: Identity = Depends(require_service_provider),
    service: ServiceProviderService = Depends(get_provider_service),
) -> ProviderUpdateResponse:
    provider = await service.update_profile(identity.id, request)
    return ProviderUpdateResponse(
        message="Profile updated successfully",
        provider=provider,
    )


@router.post("/portfolio", response_model=PortfolioResponse, status_code=201)
async def add_portfolio_item(
    request: AddPortfolioRequest,
    identity: Identity = Depends(require_verified),
    service: ServiceProviderService = Depends(get_provider_service),
) -> PortfolioResponse:
    """Append a portfolio entry. Only verified providers may do this."""
    item = await service.add_portfolio_item(identity.id, request)
    return PortfolioResponse(
        message="Project added to portfolio successfully",
        portfolio=item,
    )
