"""
Identity exchange against POST {router}/identity.

Request body:  {"AppIdentity": "<base64 AES ciphertext of IdentityRequest JSON>"}
Response body: {"token": "<bearer token>"}
"""

import structlog

from luis_router.clients.base_client import RouterHttpClient
from luis_router.models.outcomes import IdentityExchangeResult
from luis_router.models.router_models import (
    IdentityEnvelope,
    IdentityRequest,
    IdentityResponse,
)
from luis_router.monitoring.metrics import identity_exchanges_total
from luis_router.persistence.token_cache import TokenCache
from luis_router.security.cipher import Encryptor

logger = structlog.get_logger(__name__)


class IdentityClient:
    """
    Obtains a bearer token for a session and stores it in the token cache.

    A non-2xx answer is not an error here: the cache is left exactly as
    it was and REJECTED is returned. Transport failures propagate as
    RouterTransportError.
    """

    IDENTITY_PATH = "/identity"

    def __init__(
        self,
        http: RouterHttpClient,
        token_cache: TokenCache,
        encryptor: Encryptor,
    ):
        self.http = http
        self.token_cache = token_cache
        self.encryptor = encryptor

    def build_app_identity(self, application_code: str, encryption_key: str) -> str:
        """Serialize a fresh IdentityRequest and encrypt it."""
        request = IdentityRequest(appcode=application_code)
        return self.encryptor.encrypt(request.model_dump_json(), encryption_key)

    async def exchange(
        self,
        session_id: str,
        application_code: str,
        encryption_key: str,
    ) -> IdentityExchangeResult:
        """
        Exchange an encrypted application code for a token.

        Args:
            session_id: Conversation session whose token slot is refreshed
            application_code: Code issued by the router for this bot
            encryption_key: Shared 32-character key

        Returns:
            ACCEPTED if the token cache was updated, REJECTED otherwise

        Raises:
            RouterTransportError: The router could not be reached or the
                2xx body could not be decoded
        """
        envelope = IdentityEnvelope(
            app_identity=self.build_app_identity(application_code, encryption_key)
        )
        response = await self.http.post_json(
            self.IDENTITY_PATH, envelope.model_dump(by_alias=True)
        )

        if not response.is_success:
            logger.warning(
                "Identity exchange rejected",
                session_id=session_id,
                status_code=response.status_code,
            )
            identity_exchanges_total.labels(result=IdentityExchangeResult.REJECTED.value).inc()
            return IdentityExchangeResult.REJECTED

        identity = self.http.parse_body(response, IdentityResponse)
        await self.token_cache.set(session_id, identity.token)

        logger.info(
            "Identity exchange accepted",
            session_id=session_id,
            token_length=len(identity.token),
        )
        identity_exchanges_total.labels(result=IdentityExchangeResult.ACCEPTED.value).inc()
        return IdentityExchangeResult.ACCEPTED
