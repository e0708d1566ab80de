"""
Wizard API Router

FastAPI endpoints that drive one GenerationPipeline per session:

    POST   /api/wizard/sessions                      start a session
    GET    /api/wizard/sessions/{id}                 current state
    POST   /api/wizard/sessions/{id}/submit          campaign input → concepts
    POST   /api/wizard/sessions/{id}/select          concept (+ customization) → outline
    POST   /api/wizard/sessions/{id}/approve         outline → gate → document
    POST   /api/wizard/sessions/{id}/recheck         re-run the entitlement gate
    POST   /api/wizard/sessions/{id}/retry           retry the failed stage
    POST   /api/wizard/sessions/{id}/back            previous stage
    POST   /api/wizard/sessions/{id}/reset           start over
    GET    /api/wizard/sessions/{id}/render          rendered blocks (json | markdown)
    GET    /api/wizard/subscriptions/{user_id}       subscription status
    POST   /api/wizard/subscriptions/{user_id}/upgrade
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from config.constants import API_PREFIX
from config.logging_config import get_logger
from leadgen.document import DocumentRenderer, RenderTheme, blocks_to_markdown
from leadgen.errors import InvalidTransitionError
from leadgen.pipeline import CompleteStage, OutlineDraft, OutlineReviewStage

from .session_store import WizardSession
from .wizard_models import (
    ApproveOutlineRequest,
    CampaignInputRequest,
    CreateSessionRequest,
    ErrorResponse,
    RenderFormat,
    RenderResponse,
    SelectConceptRequest,
    SessionResponse,
    SubscriptionResponse,
)
from .wizard_service import WizardService, get_wizard_service

logger = get_logger(__name__)

router = APIRouter(prefix=API_PREFIX, tags=["Lead Magnet Wizard"])

ERROR_RESPONSES = {
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
}

_renderer = DocumentRenderer()


def get_session(session_id: str, service: WizardService = Depends(get_wizard_service)) -> WizardSession:
    return service.sessions.require(session_id)


def _session_response(session: WizardSession) -> SessionResponse:
    state = session.pipeline.state
    return SessionResponse(
        session_id=session.session_id,
        user_id=session.user_id,
        stage=state.stage.value,
        busy=session.pipeline.busy,
        record_id=session.record_id,
        state=state.to_dict(),
    )


# ==================== SESSION ENDPOINTS ====================

@router.post("/sessions", response_model=SessionResponse, status_code=201)
async def create_session(
    request: CreateSessionRequest,
    service: WizardService = Depends(get_wizard_service),
):
    """Start a wizard session in the Input stage."""
    session = service.sessions.create(request.user_id)
    return _session_response(session)


@router.get("/sessions/{session_id}", response_model=SessionResponse, responses=ERROR_RESPONSES)
async def get_session_state(session: WizardSession = Depends(get_session)):
    return _session_response(session)


@router.delete("/sessions/{session_id}", responses=ERROR_RESPONSES)
async def delete_session(
    session: WizardSession = Depends(get_session),
    service: WizardService = Depends(get_wizard_service),
):
    service.sessions.delete(session.session_id)
    return {"deleted": session.session_id}


# ==================== TRANSITION ENDPOINTS ====================

@router.post("/sessions/{session_id}/submit", response_model=SessionResponse, responses=ERROR_RESPONSES)
async def submit_campaign(
    request: CampaignInputRequest,
    session: WizardSession = Depends(get_session),
):
    """
    Submit the campaign input and generate concepts.

    A generation error keeps the session in `input` with `state.error` set.
    """
    await session.pipeline.submit(request.to_campaign())
    return _session_response(session)


@router.post("/sessions/{session_id}/select", response_model=SessionResponse, responses=ERROR_RESPONSES)
async def select_concept(
    request: SelectConceptRequest,
    session: WizardSession = Depends(get_session),
    service: WizardService = Depends(get_wizard_service),
):
    """Pick a concept; customization is stored and validated on approval."""
    customization = None
    if request.customization is not None:
        customization = request.customization.to_options(service.default_customization())
    await session.pipeline.select(request.concept_id, customization)
    return _session_response(session)


@router.post("/sessions/{session_id}/approve", response_model=SessionResponse, responses=ERROR_RESPONSES)
async def approve_outline(
    request: ApproveOutlineRequest,
    session: WizardSession = Depends(get_session),
    service: WizardService = Depends(get_wizard_service),
):
    """Apply outline edits (if any), approve, check entitlement and generate."""
    outline = None
    edits = (request.review_token, request.title, request.introduction, request.core_points)
    if any(value is not None for value in edits):
        state = session.pipeline.state
        if not isinstance(state, OutlineReviewStage):
            raise InvalidTransitionError("approve", state.stage.value)
        current = state.draft
        outline = OutlineDraft(
            title=request.title if request.title is not None else current.title,
            introduction=request.introduction if request.introduction is not None else current.introduction,
            core_points=list(request.core_points if request.core_points is not None else current.core_points),
            review_token=request.review_token or current.review_token,
        )

    await session.pipeline.approve(outline)
    await service.store_if_complete(session)
    return _session_response(session)


@router.post("/sessions/{session_id}/recheck", response_model=SessionResponse, responses=ERROR_RESPONSES)
async def recheck_entitlement(
    session: WizardSession = Depends(get_session),
    service: WizardService = Depends(get_wizard_service),
):
    """Re-run the gate after an upgrade or a failed subscription lookup."""
    await session.pipeline.recheck_entitlement()
    await service.store_if_complete(session)
    return _session_response(session)


@router.post("/sessions/{session_id}/retry", response_model=SessionResponse, responses=ERROR_RESPONSES)
async def retry_stage(
    session: WizardSession = Depends(get_session),
    service: WizardService = Depends(get_wizard_service),
):
    await session.pipeline.retry()
    await service.store_if_complete(session)
    return _session_response(session)


@router.post("/sessions/{session_id}/back", response_model=SessionResponse, responses=ERROR_RESPONSES)
async def go_back(session: WizardSession = Depends(get_session)):
    session.pipeline.go_back()
    return _session_response(session)


@router.post("/sessions/{session_id}/reset", response_model=SessionResponse, responses=ERROR_RESPONSES)
async def reset_session(
    session: WizardSession = Depends(get_session),
    service: WizardService = Depends(get_wizard_service),
):
    """Start over. A session with a step still running gets a fresh pipeline."""
    if session.pipeline.busy:
        session = service.sessions.restart(session.session_id)
    else:
        session.pipeline.reset()
        session.record_id = None
    return _session_response(session)


# ==================== RENDER ENDPOINTS ====================

@router.get("/sessions/{session_id}/render", responses=ERROR_RESPONSES)
async def render_document(
    format: RenderFormat = RenderFormat.JSON,
    session: WizardSession = Depends(get_session),
):
    """Render the completed document as blocks or markdown."""
    state = session.pipeline.state
    if not isinstance(state, CompleteStage):
        raise InvalidTransitionError("render", state.stage.value)

    theme = RenderTheme.from_branding(state.document.branding)
    blocks = _renderer.render(state.document, theme)

    if format is RenderFormat.MARKDOWN:
        return PlainTextResponse(blocks_to_markdown(blocks), media_type="text/markdown")

    return RenderResponse(
        session_id=session.session_id,
        page_count=len(_renderer.paginate(blocks)),
        blocks=[b.to_dict() for b in blocks],
    )


# ==================== SUBSCRIPTION ENDPOINTS ====================

def _subscription_response(user_id: str, service: WizardService) -> SubscriptionResponse:
    data = service.directory.get_status(user_id).to_dict(datetime.now(timezone.utc))
    return SubscriptionResponse(
        user_id=user_id,
        plan=data["plan"],
        effective_tier=data["effectiveTier"],
        expires_at=data["expiresAt"],
        used_campaigns=data["usedCampaigns"],
        campaign_limit=data["campaignLimit"],
    )


@router.get("/subscriptions/{user_id}", response_model=SubscriptionResponse)
async def get_subscription(user_id: str, service: WizardService = Depends(get_wizard_service)):
    return _subscription_response(user_id, service)


@router.post("/subscriptions/{user_id}/upgrade", response_model=SubscriptionResponse)
async def upgrade_subscription(user_id: str, service: WizardService = Depends(get_wizard_service)):
    """Grant one premium period (called after a confirmed payment)."""
    service.directory.upgrade_to_premium(user_id)
    return _subscription_response(user_id, service)
