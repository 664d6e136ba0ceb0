"""
Router API routes.

POST /route exposes the discovery protocol to hosts that cannot embed
the library directly; GET /health reports configuration.
"""

import structlog
from fastapi import APIRouter, Depends, status

from luis_router.api.dependencies import get_orchestrator, get_settings
from luis_router.api.models import HealthResponse, RouteRequest, RouteResponse
from luis_router.config import Settings
from luis_router.exceptions import RouterConfigurationError
from luis_router.retry.orchestrator import RetryOrchestrator

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post(
    "/route",
    response_model=RouteResponse,
    status_code=status.HTTP_200_OK,
    summary="Find the LUIS applications for an utterance",
    responses={
        200: {"description": "Discovery finished (apps may be empty)"},
        400: {"description": "Invalid request format"},
        500: {"description": "Router credentials not configured"},
    },
)
async def route_utterance(
    request: RouteRequest,
    orchestrator: RetryOrchestrator = Depends(get_orchestrator),
    settings: Settings = Depends(get_settings),
) -> RouteResponse:
    """
    Run discovery for one utterance.

    Exhaustion is reported through ``exhausted`` rather than an error
    status, matching the library contract.
    """
    application_code = request.application_code or settings.LUIS_ROUTER_APPLICATION_CODE
    if not application_code or not settings.LUIS_ROUTER_ENCRYPTION_KEY:
        raise RouterConfigurationError(
            "Router application code and encryption key must be configured",
            details={
                "has_application_code": bool(application_code),
                "has_encryption_key": bool(settings.LUIS_ROUTER_ENCRYPTION_KEY),
            },
        )

    structlog.contextvars.bind_contextvars(session_id=request.session_id)
    result = await orchestrator.route_with_metadata(
        request.session_id,
        request.text,
        application_code,
        settings.LUIS_ROUTER_ENCRYPTION_KEY,
    )

    return RouteResponse(
        apps=[app.to_wire() for app in result.apps],
        exhausted=result.exhausted,
        attempts=result.metadata.total_attempts,
        identity_exchanges=len(result.metadata.identity_exchanges),
        latency_ms=result.metadata.total_latency_ms,
    )


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Liveness check; does not call the router."""
    return HealthResponse(
        status="ok",
        version=settings.APP_VERSION,
        router_url=settings.LUIS_ROUTER_URL,
        token_cache_backend=settings.TOKEN_CACHE_BACKEND,
    )
