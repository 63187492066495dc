"""
Membership module data models.

Premium tiers offered on the membership storefront and the membership
record stored on a user.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import Field

from shared.models import APIModel


class TierId(str, Enum):
    """Premium membership tiers."""

    SILVER = "silver"
    GOLD = "gold"
    PLATINUM = "platinum"


class BillingCycle(str, Enum):
    """How often a membership is billed."""

    MONTHLY = "monthly"
    YEARLY = "yearly"


class TierPricing(APIModel):
    """Price points for one tier."""

    monthly: Decimal
    yearly: Decimal
    currency: str = "USD"


class MembershipTier(APIModel):
    """A tier as shown on the storefront."""

    id: TierId
    name: str
    description: str
    pricing: TierPricing
    benefits: list[str] = Field(default_factory=list)
    storage_limit: str
    popular_choice: bool = False


class Membership(APIModel):
    """Membership held by a user."""

    type: TierId
    billing_cycle: BillingCycle
    start_date: datetime
    end_date: datetime


class UpgradeMembershipRequest(APIModel):
    """Request to start or change a membership."""

    tier: TierId
    billing_cycle: BillingCycle = BillingCycle.MONTHLY


class TierListResponse(APIModel):
    """Storefront catalog."""

    tiers: list[MembershipTier]


class MembershipStatus(APIModel):
    """Membership with its derived state."""

    membership: Optional[Membership] = None
    active: bool = False
