"""
Subscription tiers and per-user subscription status.
"""

import calendar
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from config.constants import CAMPAIGN_LIMITS


class SubscriptionTier(Enum):
    FREE = "free"
    PREMIUM = "premium"
    ENTERPRISE = "enterprise"


def add_months(moment: datetime, months: int) -> datetime:
    """Same day-of-month `months` later, clamped to the month's last day."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


@dataclass(frozen=True)
class SubscriptionStatus:
    """
    A user's plan, paid-period expiry and campaign usage.

    A paid plan whose expiry has passed (or was never set) behaves as free.
    """
    plan: SubscriptionTier = SubscriptionTier.FREE
    expires_at: Optional[datetime] = None
    used_campaigns: int = 0

    def is_within_paid_period(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at >= now

    def effective_tier(self, now: datetime) -> SubscriptionTier:
        if self.plan is SubscriptionTier.FREE or not self.is_within_paid_period(now):
            return SubscriptionTier.FREE
        return self.plan

    @property
    def campaign_limit(self) -> int:
        return CAMPAIGN_LIMITS.get(self.plan.value, CAMPAIGN_LIMITS["free"])

    def can_create_campaign(self, now: datetime) -> bool:
        """Paid, in period, and under the monthly campaign limit."""
        if self.effective_tier(now) is SubscriptionTier.FREE:
            return False
        return self.used_campaigns < self.campaign_limit

    def upgraded_to_premium(self, now: datetime, months: int = 1) -> 'SubscriptionStatus':
        """Premium plan extended from the current expiry, or from now if lapsed."""
        start = self.expires_at if self.expires_at is not None and self.expires_at > now else now
        return replace(self, plan=SubscriptionTier.PREMIUM, expires_at=add_months(start, months))

    def to_dict(self, now: datetime) -> Dict[str, Any]:
        return {
            "plan": self.plan.value,
            "effectiveTier": self.effective_tier(now).value,
            "expiresAt": self.expires_at.isoformat() if self.expires_at else None,
            "usedCampaigns": self.used_campaigns,
            "campaignLimit": self.campaign_limit,
        }
