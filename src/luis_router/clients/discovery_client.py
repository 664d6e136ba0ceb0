"""
Protected discovery call against POST {router}/luisdiscovery.

Request:
    Authorization: Bearer <cached token>
    {"Text": "...", "BingSpellCheckSubscriptionKey": "..."|null, "EnableLuisTelemetry": bool}

Response (2xx):
    {"Result": {"LuisAppDetails": [{...}, ...]}}
"""

from typing import Optional

import structlog

from luis_router.clients.base_client import RouterHttpClient
from luis_router.exceptions import RouterTransportError
from luis_router.models.outcomes import (
    DiscoveryFailure,
    DiscoveryOutcome,
    DiscoverySuccess,
    DiscoveryUnauthorized,
)
from luis_router.models.router_models import DiscoveryRequest, DiscoveryResponse
from luis_router.monitoring.metrics import discovery_attempts_total
from luis_router.persistence.token_cache import TokenCache

logger = structlog.get_logger(__name__)


class DiscoveryClient:
    """
    Asks the router which LUIS applications match an utterance.

    Classifies the HTTP result into DiscoverySuccess, DiscoveryUnauthorized
    (401) or DiscoveryFailure (any other status). Transport failures are
    not classified; they propagate as RouterTransportError.
    """

    DISCOVERY_PATH = "/luisdiscovery"

    def __init__(
        self,
        http: RouterHttpClient,
        token_cache: TokenCache,
        bing_spell_check_subscription_key: Optional[str] = None,
        enable_luis_telemetry: bool = False,
    ):
        self.http = http
        self.token_cache = token_cache
        self.bing_spell_check_subscription_key = bing_spell_check_subscription_key
        self.enable_luis_telemetry = enable_luis_telemetry

    def build_request(self, text: str) -> DiscoveryRequest:
        return DiscoveryRequest(
            text=text,
            bing_spell_check_subscription_key=self.bing_spell_check_subscription_key,
            enable_luis_telemetry=self.enable_luis_telemetry,
        )

    async def discover(self, session_id: str, text: str) -> DiscoveryOutcome:
        """
        Run one discovery call with the session's current token.

        Args:
            session_id: Conversation session owning the token
            text: Utterance to classify

        Returns:
            DiscoveryOutcome variant

        Raises:
            RouterTransportError: The router could not be reached or the
                2xx body could not be decoded
        """
        token = await self.token_cache.get(session_id)
        payload = self.build_request(text).model_dump(by_alias=True)
        # h11 rejects header values with trailing whitespace; a cold cache sends a bare "Bearer"
        headers = {"Authorization": f"Bearer {token}".rstrip()}

        try:
            response = await self.http.post_json(self.DISCOVERY_PATH, payload, headers=headers)
        except RouterTransportError:
            discovery_attempts_total.labels(outcome="transport_error").inc()
            raise

        if response.is_success:
            try:
                body = self.http.parse_body(response, DiscoveryResponse)
            except RouterTransportError:
                discovery_attempts_total.labels(outcome="transport_error").inc()
                raise
            apps = body.result.luis_app_details
            logger.info(
                "Discovery succeeded",
                session_id=session_id,
                apps_count=len(apps),
            )
            discovery_attempts_total.labels(outcome="success").inc()
            return DiscoverySuccess(apps=apps)

        if response.status_code == 401:
            logger.info(
                "Discovery unauthorized",
                session_id=session_id,
                had_token=bool(token),
            )
            discovery_attempts_total.labels(outcome="unauthorized").inc()
            return DiscoveryUnauthorized()

        logger.warning(
            "Discovery failed",
            session_id=session_id,
            status_code=response.status_code,
        )
        discovery_attempts_total.labels(outcome="failure").inc()
        return DiscoveryFailure(status_code=response.status_code)
