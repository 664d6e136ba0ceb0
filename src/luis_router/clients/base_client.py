"""
Shared HTTP plumbing for calls to the LUIS router.

Owns one pooled httpx.AsyncClient used by both IdentityClient and
DiscoveryClient, so a route call reuses the same connection for the
identity exchange and the retried discovery.

httpx exceptions never leave this module: they are wrapped in
RouterTransportError subclasses, which is what the retry orchestrator
recovers from.
"""

import time
from typing import Any, Optional, TypeVar

import httpx
import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from luis_router.config import Settings
from luis_router.exceptions import (
    RouterResponseError,
    RouterTimeoutError,
    RouterTransportError,
)
from luis_router.monitoring.metrics import router_request_latency_seconds

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class RouterHttpClient:
    """
    Async HTTP client for the router service.

    Features:
    - Lazily created, persistent httpx.AsyncClient (connection pooling)
    - Per-request timeout
    - Optional TLS verification bypass for development routers with
      self-signed certificates
    - Latency histogram per endpoint
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        verify_tls: bool = True,
        connection_limits: Optional[httpx.Limits] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize router HTTP client.

        Args:
            base_url: Router base URL (e.g. https://router.example.com)
            timeout: Request timeout in seconds
            verify_tls: Validate the server certificate
            connection_limits: httpx pool limits (default: 10 max connections)
            transport: Custom httpx transport (tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.verify_tls = verify_tls
        self._connection_limits = connection_limits or httpx.Limits(
            max_keepalive_connections=5,
            max_connections=10,
            keepalive_expiry=30.0,
        )
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        if not verify_tls:
            logger.warning(
                "TLS certificate validation disabled for router calls",
                base_url=self.base_url,
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> "RouterHttpClient":
        return cls(
            base_url=settings.LUIS_ROUTER_URL,
            timeout=settings.LUIS_ROUTER_TIMEOUT,
            verify_tls=settings.LUIS_ROUTER_VERIFY_TLS,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                verify=self.verify_tls,
                transport=self._transport,
            )
            logger.debug("Created new httpx AsyncClient", base_url=self.base_url)
        return self._client

    async def post_json(
        self,
        path: str,
        payload: dict[str, Any],
        headers: Optional[dict[str, str]] = None,
    ) -> httpx.Response:
        """
        POST a JSON body and return the raw response, whatever its status.

        Raises:
            RouterTimeoutError: No answer within the timeout
            RouterTransportError: Connection, TLS or protocol failure
        """
        endpoint = path.strip("/")
        client = await self._get_client()
        start = time.perf_counter()
        try:
            response = await client.post(path, json=payload, headers=headers)
        except httpx.TimeoutException as e:
            logger.warning("Router request timeout", endpoint=endpoint, timeout=self.timeout)
            raise RouterTimeoutError(
                f"Request to /{endpoint} timed out after {self.timeout}s",
                details={"endpoint": endpoint, "timeout": self.timeout},
            ) from e
        except httpx.RequestError as e:
            logger.warning(
                "Router network error",
                endpoint=endpoint,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise RouterTransportError(
                f"Network error calling /{endpoint}: {e}",
                details={"endpoint": endpoint, "error_type": type(e).__name__},
            ) from e
        finally:
            router_request_latency_seconds.labels(endpoint=endpoint).observe(
                time.perf_counter() - start
            )

        logger.debug(
            "Router responded",
            endpoint=endpoint,
            status_code=response.status_code,
        )
        return response

    @staticmethod
    def parse_body(response: httpx.Response, model: type[ModelT]) -> ModelT:
        """
        Decode a 2xx body into ``model``.

        Raises:
            RouterResponseError: Body is not JSON or does not match the model
        """
        try:
            return model.model_validate(response.json())
        except ValueError as e:
            # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
            details: dict[str, Any] = {
                "status_code": response.status_code,
                "model": model.__name__,
            }
            if isinstance(e, PydanticValidationError):
                details["errors"] = e.errors(include_input=False)
            raise RouterResponseError(
                f"Malformed router response for {model.__name__}",
                details=details,
            ) from e

    async def close(self) -> None:
        """Close the HTTP client connection."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed router HTTP client")

    async def __aenter__(self) -> "RouterHttpClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"timeout={self.timeout}s, "
            f"verify_tls={self.verify_tls})"
        )
