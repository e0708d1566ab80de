"""
Subscription tiers, the subscription directory and the entitlement gate.
"""

from .tiers import SubscriptionTier, SubscriptionStatus, add_months
from .subscriptions import InMemorySubscriptionDirectory
from .gate import GatedStage, EntitlementGate, DEFAULT_RULES, can_proceed

__all__ = [
    'SubscriptionTier',
    'SubscriptionStatus',
    'add_months',
    'InMemorySubscriptionDirectory',
    'GatedStage',
    'EntitlementGate',
    'DEFAULT_RULES',
    'can_proceed',
]
