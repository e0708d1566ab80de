"""
Entitlement gate: which subscription tiers may enter which gated stage.

Pure and synchronous. The tier is looked up elsewhere and passed in.
"""

from enum import Enum
from typing import Dict, FrozenSet, Mapping, Optional

from .tiers import SubscriptionTier


class GatedStage(Enum):
    DOWNLOAD = "download"


DEFAULT_RULES: Dict[GatedStage, FrozenSet[SubscriptionTier]] = {
    GatedStage.DOWNLOAD: frozenset({SubscriptionTier.PREMIUM, SubscriptionTier.ENTERPRISE}),
}


class EntitlementGate:
    """
    Table-driven gate.

    Usage:
        gate = EntitlementGate()
        gate.can_proceed(SubscriptionTier.FREE, GatedStage.DOWNLOAD)     # False
        gate.can_proceed(SubscriptionTier.PREMIUM, GatedStage.DOWNLOAD)  # True
    """

    def __init__(self, rules: Optional[Mapping[GatedStage, FrozenSet[SubscriptionTier]]] = None):
        self._rules = dict(DEFAULT_RULES if rules is None else rules)

    def can_proceed(self, tier: SubscriptionTier, stage: GatedStage) -> bool:
        allowed = self._rules.get(stage)
        if allowed is None:
            return True
        return tier in allowed


def can_proceed(tier: SubscriptionTier, stage: GatedStage = GatedStage.DOWNLOAD) -> bool:
    """Default-rules shortcut."""
    return EntitlementGate().can_proceed(tier, stage)
