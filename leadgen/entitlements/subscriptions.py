"""
In-memory subscription directory.

Stands in for the user table behind the subscription lookup. Exposes the
async `get_subscription_tier(user_id)` callable the pipeline is injected with.
"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from config.constants import PREMIUM_PERIOD_MONTHS
from config.logging_config import get_logger

from ..errors import EntitlementLookupFailure
from .tiers import SubscriptionStatus, SubscriptionTier

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemorySubscriptionDirectory:
    """
    Usage:
        directory = InMemorySubscriptionDirectory()
        directory.upgrade_to_premium("user-1")
        tier = await directory.get_subscription_tier("user-1")
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or _utcnow
        self._statuses: Dict[str, SubscriptionStatus] = {}

    def get_status(self, user_id: str) -> SubscriptionStatus:
        """Unknown users are on the free plan."""
        return self._statuses.get(user_id, SubscriptionStatus())

    def set_status(self, user_id: str, status: SubscriptionStatus) -> None:
        self._statuses[user_id] = status

    async def get_subscription_tier(self, user_id: str) -> SubscriptionTier:
        """
        Effective tier for a user.

        Raises:
            EntitlementLookupFailure: empty user id
        """
        if not user_id:
            raise EntitlementLookupFailure(user_id, "no user id")
        tier = self.get_status(user_id).effective_tier(self._clock())
        logger.debug(f"Tier for {user_id}: {tier.value}")
        return tier

    def upgrade_to_premium(self, user_id: str) -> SubscriptionStatus:
        """Grant one paid period after a successful payment."""
        status = self.get_status(user_id).upgraded_to_premium(
            self._clock(), months=PREMIUM_PERIOD_MONTHS,
        )
        self._statuses[user_id] = status
        logger.info(f"Upgraded {user_id} to premium until {status.expires_at.isoformat()}")
        return status

    def record_campaign(self, user_id: str) -> SubscriptionStatus:
        """Count one created campaign against the user's monthly limit."""
        current = self.get_status(user_id)
        status = replace(current, used_campaigns=current.used_campaigns + 1)
        self._statuses[user_id] = status
        return status
