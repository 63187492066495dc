"""
Membership API endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_membership_service
from api.middleware.auth import get_current_identity
from shared.models import Identity

from .models import MembershipStatus, TierListResponse
from .service import MembershipService

router = APIRouter()


@router.get("/tiers", response_model=TierListResponse)
async def list_tiers(
    service: MembershipService = Depends(get_membership_service),
) -> TierListResponse:
    """List the premium tiers with monthly and yearly pricing."""
    return TierListResponse(tiers=await service.list_tiers())


@router.get("/me", response_model=MembershipStatus)
async def get_my_membership(
    identity: Identity = Depends(get_current_identity),
    service: MembershipService = Depends(get_membership_service),
) -> MembershipStatus:
    return await service.get_status(identity.id)
