#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
FastAPI Web Server - REST API for LeadGen Studio.

Exposes the lead magnet wizard (one generation pipeline per session), the
document renderer and the subscription directory over HTTP.

Usage:
    # Start server
    uvicorn api.main:app --host 0.0.0.0 --port 8000

    # Or run directly
    python -m api.main

API Documentation:
    - OpenAPI docs: http://localhost:8000/docs
    - ReDoc: http://localhost:8000/redoc

Configuration:
    Environment variables:
    - OPENAI_API_KEY: OpenAI API key
    - ANTHROPIC_API_KEY: Anthropic API key (optional)
    - PROVIDER: openai | anthropic (default: openai)
    - USE_TEMPLATE_GENERATOR: offline generator, no key needed
"""

from fastapi import FastAPI, Request, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pathlib import Path
import sys
from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.logging_config import get_logger
from leadgen import __version__
from leadgen.errors import (
    GenerationFailure,
    InvalidTransitionError,
    PipelineBusyError,
    StaleSelectionError,
    ValidationError,
)

from api.session_store import SessionNotFoundError
from api.wizard_models import HealthResponse, ProviderHealthResponse
from api.wizard_router import router as wizard_router
from api.wizard_service import WizardService, get_wizard_service

logger = get_logger(__name__)


# =============================================================================
# App
# =============================================================================

app = FastAPI(
    title="LeadGen Studio API",
    description="Guided lead magnet generation: concepts, outline review, gated download",
    version=__version__,
)

# CORS middleware - Restricted to allowed origins
ALLOWED_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",  # Vite dev server
    "http://127.0.0.1:5173",
    "http://localhost:8000",
    "http://127.0.0.1:8000",
]
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(wizard_router)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(SessionNotFoundError)
def session_not_found_handler(request: Request, exc: SessionNotFoundError):
    return JSONResponse(
        status_code=404,
        content={"error": "session_not_found", "message": str(exc)},
    )


@app.exception_handler(ValidationError)
def validation_error_handler(request: Request, exc: ValidationError):
    """Bad user input; the wizard stays where it was."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "validation_error",
            "message": exc.message,
            "field": exc.field,
            "errors": exc.errors,
        },
    )


@app.exception_handler(StaleSelectionError)
def stale_selection_handler(request: Request, exc: StaleSelectionError):
    return JSONResponse(
        status_code=409,
        content={"error": "stale_selection", "message": str(exc)},
    )


@app.exception_handler(InvalidTransitionError)
def invalid_transition_handler(request: Request, exc: InvalidTransitionError):
    return JSONResponse(
        status_code=409,
        content={"error": "invalid_transition", "message": str(exc)},
    )


@app.exception_handler(PipelineBusyError)
def pipeline_busy_handler(request: Request, exc: PipelineBusyError):
    return JSONResponse(
        status_code=409,
        content={"error": "busy", "message": str(exc)},
    )


@app.exception_handler(GenerationFailure)
def generation_failure_handler(request: Request, exc: GenerationFailure):
    # Pipeline transitions capture failures in state; this only fires for
    # errors raised outside a transition.
    logger.error(f"Unhandled generation failure: {exc}")
    return JSONResponse(
        status_code=502,
        content={"error": "generation_failed", "message": exc.message},
    )


# =============================================================================
# Health
# =============================================================================

@app.get("/health", response_model=HealthResponse)
async def health(service: WizardService = Depends(get_wizard_service)):
    """Service health and the active generator."""
    return HealthResponse(
        status="ok",
        generator=service.generator_name,
        provider=service.settings.provider,
        available_providers=service.available_providers(),
        active_sessions=len(service.sessions),
    )


@app.get("/health/providers", response_model=ProviderHealthResponse)
async def provider_health(service: WizardService = Depends(get_wizard_service)):
    """Round trip to every provider with a key; costs one tiny completion each."""
    results = await service.check_providers()
    return ProviderHealthResponse(
        healthy=bool(results) and all(results.values()),
        providers=results,
    )


# =============================================================================
# Main Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    logger.info("Starting LeadGen Studio API Server...")
    logger.info("API Documentation: http://localhost:8000/docs")

    uvicorn.run(app, host="0.0.0.0", port=8000, log_level="info")
