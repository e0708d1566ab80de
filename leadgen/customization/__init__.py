"""
User branding / CTA overrides and the merge into a generated document.
"""

from .options import (
    CustomizationOptions,
    is_valid_url,
    is_valid_email,
    is_valid_color,
)
from .merger import merge

__all__ = [
    'CustomizationOptions',
    'is_valid_url',
    'is_valid_email',
    'is_valid_color',
    'merge',
]
