"""
Customization Merger

merge(document, options) -> new StructuredDocument

Precedence:
    content (title page, introduction, sections, CTA body)  ← document
    CTA headline, action label, links, branding            ← options (when set)

The same function serves the customized and the default flow; skipping
customization means passing CustomizationOptions().
"""

from dataclasses import replace

from config.logging_config import get_logger

from ..document.model import Branding, StructuredDocument
from .options import CustomizationOptions

logger = get_logger(__name__)


def merge(document: StructuredDocument, options: CustomizationOptions) -> StructuredDocument:
    """
    Validate options and attach them to a copy of the document.

    Raises:
        ValidationError: an option field is invalid; nothing is produced
    """
    options.validate_or_raise()

    cta = document.call_to_action
    merged_cta = replace(
        cta,
        title=options.cta_text or cta.title,
        action_label=options.primary_action_label or cta.action_label,
        booking_url=options.booking_url or cta.booking_url,
        website_url=options.website_url or cta.website_url,
        support_email=options.support_email or cta.support_email,
    )
    branding = Branding(
        primary_color=options.primary_color,
        secondary_color=options.secondary_color,
        font_family=options.font_family,
        logo_data_uri=options.logo_data_uri,
    )

    logger.debug(f"Merged customization into {document.title_page.title!r}")
    return replace(document, call_to_action=merged_cta, branding=branding)
