"""
Customization options a user can attach to a campaign: CTA wording, links,
logo and brand colors/font.

All fields are optional except colors and font, which carry defaults, so
`CustomizationOptions()` is the "skip customization" value.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlparse

from config.constants import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_PRIMARY_COLOR,
    DEFAULT_SECONDARY_COLOR,
)
from config.logging_config import get_logger

from ..errors import ValidationError

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def is_valid_url(value: str) -> bool:
    """Absolute http(s) URL with a host and no whitespace."""
    if not value or any(ch.isspace() for ch in value):
        return False
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value or ""))


def is_valid_color(value: str) -> bool:
    return bool(HEX_COLOR_PATTERN.match(value or ""))


@dataclass(frozen=True)
class CustomizationOptions:
    """
    Branding and CTA overrides.

    Usage:
        options = CustomizationOptions(
            cta_text="Let's talk",
            booking_url="https://cal.example.com/acme",
            support_email="hello@acme.test",
        )
        options.validate_or_raise()
    """
    cta_text: Optional[str] = None
    primary_action_label: Optional[str] = None
    booking_url: Optional[str] = None
    website_url: Optional[str] = None
    support_email: Optional[str] = None
    logo_data_uri: Optional[str] = None
    primary_color: str = DEFAULT_PRIMARY_COLOR
    secondary_color: str = DEFAULT_SECONDARY_COLOR
    font_family: str = DEFAULT_FONT_FAMILY

    def validate(self) -> List[Tuple[str, str]]:
        """
        Check every field.

        Returns:
            List of (field, message) pairs keyed by the camelCase field
            name used in to_dict(), in field order. Empty when valid.
        """
        problems: List[Tuple[str, str]] = []

        for name, key in (("booking_url", "bookingUrl"), ("website_url", "websiteUrl")):
            value = getattr(self, name)
            if value is not None and not is_valid_url(value):
                problems.append((key, f"not a well-formed URL: {value!r}"))

        if self.support_email is not None and not is_valid_email(self.support_email):
            problems.append(("supportEmail", f"not a valid e-mail address: {self.support_email!r}"))

        if self.logo_data_uri is not None and not self.logo_data_uri.startswith("data:image/"):
            problems.append(("logoDataUri", "logo must be a data:image/... URI"))

        for name, key in (("primary_color", "primaryColor"), ("secondary_color", "secondaryColor")):
            if not is_valid_color(getattr(self, name)):
                problems.append((key, f"not a hex color: {getattr(self, name)!r}"))

        if not (self.font_family or "").strip():
            problems.append(("fontFamily", "font family is required"))

        return problems

    def validate_or_raise(self) -> None:
        """
        Raises:
            ValidationError: naming the first invalid field
        """
        problems = self.validate()
        if problems:
            logger.warning(f"Customization rejected: {problems}")
            field, message = problems[0]
            raise ValidationError(field, message, errors=[f"{f}: {m}" for f, m in problems])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ctaText": self.cta_text,
            "primaryActionLabel": self.primary_action_label,
            "bookingUrl": self.booking_url,
            "websiteUrl": self.website_url,
            "supportEmail": self.support_email,
            "logoDataUri": self.logo_data_uri,
            "primaryColor": self.primary_color,
            "secondaryColor": self.secondary_color,
            "fontFamily": self.font_family,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CustomizationOptions':
        """Build from camelCase keys; blank strings count as unset."""
        def opt(key: str) -> Optional[str]:
            value = data.get(key)
            if value is None or not str(value).strip():
                return None
            return str(value).strip()

        return cls(
            cta_text=opt("ctaText"),
            primary_action_label=opt("primaryActionLabel"),
            booking_url=opt("bookingUrl"),
            website_url=opt("websiteUrl"),
            support_email=opt("supportEmail"),
            logo_data_uri=opt("logoDataUri"),
            primary_color=opt("primaryColor") or DEFAULT_PRIMARY_COLOR,
            secondary_color=opt("secondaryColor") or DEFAULT_SECONDARY_COLOR,
            font_family=opt("fontFamily") or DEFAULT_FONT_FAMILY,
        )
