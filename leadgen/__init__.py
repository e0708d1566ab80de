"""
LeadGen Studio

Guided lead magnet generation: campaign input → concepts → outline →
entitlement gate → structured document → themed render blocks.
"""

from .errors import (
    LeadGenError,
    ValidationError,
    GenerationFailure,
    EntitlementLookupFailure,
    StaleSelectionError,
    InvalidTransitionError,
    PipelineBusyError,
)

__version__ = "1.0.0"

__all__ = [
    'LeadGenError',
    'ValidationError',
    'GenerationFailure',
    'EntitlementLookupFailure',
    'StaleSelectionError',
    'InvalidTransitionError',
    'PipelineBusyError',
]
