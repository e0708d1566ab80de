"""
Wizard API Models

Pydantic request/response models for the lead magnet wizard API.
"""

from pydantic import BaseModel, Field
from typing import List, Dict, Optional, Any
from enum import Enum

from leadgen.customization import CustomizationOptions
from leadgen.pipeline import CampaignInput, Tone


class ToneName(str, Enum):
    """Writing tone offered on the input form"""
    PROFESSIONAL = "professional"
    FRIENDLY = "friendly"
    CASUAL = "casual"
    AUTHORITATIVE = "authoritative"
    MOTIVATIONAL = "motivational"


class RenderFormat(str, Enum):
    JSON = "json"
    MARKDOWN = "markdown"


# ==================== REQUEST MODELS ====================

class CreateSessionRequest(BaseModel):
    """Start a wizard session for a user"""
    user_id: str = Field(..., min_length=1, description="Whose subscription gates the download")


class CampaignInputRequest(BaseModel):
    """First wizard step: who you are and who you serve"""
    operator_name: str = Field(default="", description="Your name")
    operator_title: str = Field(default="", description="Your title/position")
    brand_name: str = Field(default="")
    audience_description: str = Field(default="", description="Who the lead magnet is for")
    niche_label: str = Field(default="")
    problem_statement: str = Field(default="", description="The audience's main problem")
    desired_outcome: str = Field(default="", description="What the audience wants to achieve")
    tone: ToneName = Field(default=ToneName.PROFESSIONAL)

    class Config:
        json_schema_extra = {
            "example": {
                "operator_name": "Dana Lee",
                "operator_title": "Founder",
                "brand_name": "Acme",
                "audience_description": "small retailers",
                "niche_label": "retail marketing",
                "problem_statement": "foot traffic is down",
                "desired_outcome": "more repeat customers",
                "tone": "friendly",
            }
        }

    def to_campaign(self) -> CampaignInput:
        # Blank fields are passed through; the pipeline reports them
        return CampaignInput(
            operator_name=self.operator_name.strip(),
            brand_name=self.brand_name.strip(),
            audience_description=self.audience_description.strip(),
            niche_label=self.niche_label.strip(),
            problem_statement=self.problem_statement.strip(),
            desired_outcome=self.desired_outcome.strip(),
            operator_title=self.operator_title.strip(),
            tone=Tone(self.tone.value),
        )


class CustomizationRequest(BaseModel):
    """Optional branding and CTA overrides"""
    cta_text: Optional[str] = None
    primary_action_label: Optional[str] = None
    booking_url: Optional[str] = None
    website_url: Optional[str] = None
    support_email: Optional[str] = None
    logo_data_uri: Optional[str] = None
    primary_color: Optional[str] = None
    secondary_color: Optional[str] = None
    font_family: Optional[str] = None

    def to_options(self, defaults: CustomizationOptions) -> CustomizationOptions:
        """Blank values fall back to `defaults`."""
        def pick(name: str):
            value = getattr(self, name)
            if value is None or not value.strip():
                return getattr(defaults, name)
            return value.strip()

        return CustomizationOptions(**{
            name: pick(name) for name in (
                "cta_text", "primary_action_label", "booking_url", "website_url",
                "support_email", "logo_data_uri", "primary_color", "secondary_color",
                "font_family",
            )
        })


class SelectConceptRequest(BaseModel):
    """Pick one of the generated concepts"""
    concept_id: str
    customization: Optional[CustomizationRequest] = None


class ApproveOutlineRequest(BaseModel):
    """
    Approve the outline under review.

    Omitted fields keep the current draft value. `review_token` must match
    the review being approved when edits are sent.
    """
    review_token: Optional[str] = None
    title: Optional[str] = None
    introduction: Optional[str] = None
    core_points: Optional[List[str]] = None


# ==================== RESPONSE MODELS ====================

class SessionResponse(BaseModel):
    """Current wizard state"""
    session_id: str
    user_id: str
    stage: str
    busy: bool = False
    record_id: Optional[str] = None
    state: Dict[str, Any] = Field(default_factory=dict)


class RenderResponse(BaseModel):
    """Rendered document blocks"""
    session_id: str
    page_count: int
    blocks: List[Dict[str, Any]]


class SubscriptionResponse(BaseModel):
    user_id: str
    plan: str
    effective_tier: str
    expires_at: Optional[str] = None
    used_campaigns: int = 0
    campaign_limit: int = 0


class ErrorResponse(BaseModel):
    """Error body for 4xx responses"""
    error: str
    message: str
    field: Optional[str] = None
    errors: List[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: str = "ok"
    generator: str
    provider: Optional[str] = None
    available_providers: List[str] = Field(default_factory=list)
    active_sessions: int = 0


class ProviderHealthResponse(BaseModel):
    """Live check of each configured provider"""
    healthy: bool
    providers: Dict[str, bool]
