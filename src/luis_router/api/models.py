"""
Request/response models for the router HTTP API.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class RouteRequest(BaseModel):
    """Body of POST /route."""

    session_id: str = Field(..., min_length=1, description="Conversation session id (token slot)")
    text: str = Field(..., min_length=1, description="Utterance to classify")
    application_code: Optional[str] = Field(
        default=None,
        description="Overrides LUIS_ROUTER_APPLICATION_CODE for this call",
    )


class RouteResponse(BaseModel):
    """Result of POST /route."""

    apps: list[dict[str, Any]] = Field(default_factory=list, description="LuisAppDetails as sent by the router")
    exhausted: bool = Field(..., description="True when every attempt failed; apps is then empty")
    attempts: int = Field(..., ge=1, description="Discovery attempts made")
    identity_exchanges: int = Field(..., ge=0, description="Identity exchanges performed")
    latency_ms: int = Field(..., ge=0)


class HealthResponse(BaseModel):
    status: str
    version: str
    router_url: str
    token_cache_backend: str
