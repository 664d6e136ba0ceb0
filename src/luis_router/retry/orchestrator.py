"""
Token-acquisition-and-retry protocol for LUIS discovery.

One route call runs at most ``max_retries + 1`` discovery attempts:

    Success       -> return the application list
    Unauthorized  -> identity exchange, next attempt immediately
    Failure       -> next attempt immediately (the attempt is spent)
    transport err -> sleep ``retry_delay_seconds``, next attempt

A cold token cache is the normal first-call case: the first discovery
gets a 401, the exchange stores a token, the second discovery succeeds.
Running out of attempts is not an error; the result is an empty list
with ``exhausted`` set in the metadata.

Usage:
    orchestrator = RetryOrchestrator(discovery_client, identity_client)
    apps = await orchestrator.route(session_id, text, app_code, key)
"""

import asyncio
import time
from typing import Optional

import structlog

from luis_router.clients.discovery_client import DiscoveryClient
from luis_router.clients.identity_client import IdentityClient
from luis_router.config import Settings
from luis_router.exceptions import RouterTransportError
from luis_router.models.outcomes import (
    DiscoveryOutcome,
    DiscoverySuccess,
    DiscoveryUnauthorized,
    IdentityExchangeResult,
)
from luis_router.models.router_models import LuisAppDetail
from luis_router.monitoring.metrics import route_results_total
from luis_router.retry.metadata import TRANSPORT_ERROR, RouteMetadata, RouteResult

logger = structlog.get_logger(__name__)

DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY_SECONDS = 0.1


class RetryOrchestrator:
    """
    Sequences discovery calls, re-authenticating on 401.

    Calls are strictly sequential; no two requests for one route call are
    in flight together. The orchestrator holds no lock on the token
    cache, so two concurrent route calls for the same session may both
    refresh the token.

    Attributes:
        discovery_client: Performs POST /luisdiscovery
        identity_client: Performs POST /identity
        max_retries: Retries after the first attempt
        retry_delay_seconds: Fixed backoff after a transport error
    """

    def __init__(
        self,
        discovery_client: DiscoveryClient,
        identity_client: IdentityClient,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay_seconds: float = DEFAULT_RETRY_DELAY_SECONDS,
    ):
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if retry_delay_seconds < 0:
            raise ValueError("retry_delay_seconds must be >= 0")

        self.discovery_client = discovery_client
        self.identity_client = identity_client
        self.max_retries = max_retries
        self.retry_delay_seconds = retry_delay_seconds

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        discovery_client: DiscoveryClient,
        identity_client: IdentityClient,
    ) -> "RetryOrchestrator":
        return cls(
            discovery_client,
            identity_client,
            max_retries=settings.MAX_RETRIES,
            retry_delay_seconds=settings.RETRY_DELAY_SECONDS,
        )

    async def route(
        self,
        session_id: str,
        text: str,
        application_code: str,
        encryption_key: str,
    ) -> list[LuisAppDetail]:
        """
        Return the LUIS applications matching ``text``.

        An empty list means either that nothing matched or that every
        attempt failed; use route_with_metadata() to tell them apart.
        """
        result = await self.route_with_metadata(
            session_id, text, application_code, encryption_key
        )
        return result.apps

    async def route_with_metadata(
        self,
        session_id: str,
        text: str,
        application_code: str,
        encryption_key: str,
    ) -> RouteResult:
        """
        Run the discovery/re-authentication loop.

        Args:
            session_id: Conversation session owning the token slot
            text: Utterance to classify
            application_code: Code sent in the identity exchange
            encryption_key: Key for encrypting the identity payload

        Returns:
            RouteResult with the applications and the call history
        """
        start = time.perf_counter()
        outcomes: list[str] = []
        exchanges: list[IdentityExchangeResult] = []
        transport_errors = 0

        attempt = 0
        while attempt <= self.max_retries:
            outcome: Optional[DiscoveryOutcome] = None
            try:
                outcome = await self.discovery_client.discover(session_id, text)
                outcomes.append(outcome.kind.value)

                if isinstance(outcome, DiscoverySuccess):
                    return self._finish(
                        outcome.apps, start, outcomes, exchanges, transport_errors,
                        exhausted=False, session_id=session_id,
                    )

                if isinstance(outcome, DiscoveryUnauthorized):
                    exchange = await self.identity_client.exchange(
                        session_id, application_code, encryption_key
                    )
                    exchanges.append(exchange)
                else:
                    logger.info(
                        "Discovery attempt spent on non-success status",
                        session_id=session_id,
                        attempt=attempt + 1,
                        status_code=outcome.status_code,
                    )

            except RouterTransportError as e:
                if outcome is None:
                    outcomes.append(TRANSPORT_ERROR)
                transport_errors += 1
                logger.warning(
                    "Transport error, backing off",
                    session_id=session_id,
                    attempt=attempt + 1,
                    max_attempts=self.max_retries + 1,
                    error_type=type(e).__name__,
                    error=e.message,
                    delay_seconds=self.retry_delay_seconds,
                )
                await asyncio.sleep(self.retry_delay_seconds)

            attempt += 1

        logger.warning(
            "Route attempts exhausted",
            session_id=session_id,
            total_attempts=len(outcomes),
            identity_exchanges=len(exchanges),
            transport_errors=transport_errors,
        )
        return self._finish(
            [], start, outcomes, exchanges, transport_errors,
            exhausted=True, session_id=session_id,
        )

    def _finish(
        self,
        apps: list[LuisAppDetail],
        start: float,
        outcomes: list[str],
        exchanges: list[IdentityExchangeResult],
        transport_errors: int,
        exhausted: bool,
        session_id: str,
    ) -> RouteResult:
        metadata = RouteMetadata(
            total_attempts=len(outcomes),
            outcomes=outcomes,
            identity_exchanges=exchanges,
            transport_errors=transport_errors,
            total_latency_ms=int((time.perf_counter() - start) * 1000),
            exhausted=exhausted,
        )

        if exhausted:
            label = "exhausted"
        elif apps:
            label = "matched"
        else:
            label = "empty"
        route_results_total.labels(result=label).inc()

        logger.info(
            "Route completed",
            session_id=session_id,
            result=label,
            apps_count=len(apps),
            total_attempts=metadata.total_attempts,
            total_latency_ms=metadata.total_latency_ms,
        )
        return RouteResult(apps=apps, metadata=metadata)
