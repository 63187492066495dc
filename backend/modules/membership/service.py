"""
Membership service implementation.

Serves the premium tier catalog and records a user's membership. Payment
capture happens outside this backend; upgrading only records the tier and
its validity window.
"""

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Optional

from modules.auth.exceptions import UserNotFoundError
from modules.auth.interfaces import IUserRepository
from modules.auth.models import UserProfile

from .models import (
    BillingCycle,
    Membership,
    MembershipStatus,
    MembershipTier,
    TierId,
    TierPricing,
    UpgradeMembershipRequest,
)

logger = logging.getLogger(__name__)

CYCLE_LENGTH = {
    BillingCycle.MONTHLY: timedelta(days=30),
    BillingCycle.YEARLY: timedelta(days=365),
}

TIERS: tuple[MembershipTier, ...] = (
    MembershipTier(
        id=TierId.SILVER,
        name="Silver",
        description="Perfect for individuals and small projects",
        pricing=TierPricing(monthly=Decimal("49"), yearly=Decimal("490")),
        benefits=["Priority booking", "Basic support", "5% discount"],
        storage_limit="5GB",
    ),
    MembershipTier(
        id=TierId.GOLD,
        name="Gold",
        description="Ideal for growing businesses",
        pricing=TierPricing(monthly=Decimal("99"), yearly=Decimal("990")),
        benefits=[
            "Priority booking",
            "Dedicated manager",
            "10% discount",
            "Exclusive consultations",
        ],
        storage_limit="50GB",
        popular_choice=True,
    ),
    MembershipTier(
        id=TierId.PLATINUM,
        name="Platinum",
        description="For enterprise-level needs",
        pricing=TierPricing(monthly=Decimal("199"), yearly=Decimal("1990")),
        benefits=[
            "All Gold benefits",
            "15% discount",
            "VIP access",
            "Annual trend reports",
        ],
        storage_limit="Unlimited",
    ),
)


class MembershipService:
    """Tier catalog and membership upgrades."""

    def __init__(self, users: IUserRepository):
        self._users = users

    async def list_tiers(self) -> list[MembershipTier]:
        return list(TIERS)

    async def get_status(
        self,
        user_id: str,
        now: Optional[datetime] = None,
    ) -> MembershipStatus:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        now = now or datetime.now(timezone.utc)
        membership = user.membership
        return MembershipStatus(
            membership=membership,
            active=membership is not None and membership.end_date > now,
        )

    async def upgrade(
        self,
        user_id: str,
        request: UpgradeMembershipRequest,
        now: Optional[datetime] = None,
    ) -> UserProfile:
        """Start a membership at `now` for one billing cycle."""
        start = now or datetime.now(timezone.utc)
        membership = Membership(
            type=request.tier,
            billing_cycle=request.billing_cycle,
            start_date=start,
            end_date=start + CYCLE_LENGTH[request.billing_cycle],
        )
        user = self._users.update(
            user_id,
            {"membership": membership.model_dump(mode="json")},
        )
        if user is None:
            raise UserNotFoundError(user_id)

        logger.info(
            "User %s upgraded to %s (%s)",
            user_id,
            request.tier.value,
            request.billing_cycle.value,
        )
        return UserProfile.from_user(user)
