"""
Membership module.

Premium tier catalog and membership upgrades.
"""

from .models import (
    BillingCycle,
    Membership,
    MembershipTier,
    TierId,
    UpgradeMembershipRequest,
)

__all__ = [
    "BillingCycle",
    "Membership",
    "MembershipTier",
    "TierId",
    "UpgradeMembershipRequest",
]
