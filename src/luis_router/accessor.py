"""
Entry points for a host bot.

LuisRouterAccessor is what the conversation layer holds on to: the
session token cache plus the recognizers for every registered LUIS
application. build_orchestrator() wires the router clients around the
same token cache.
"""

from dataclasses import dataclass
from typing import Any, Optional

from luis_router.clients.base_client import RouterHttpClient
from luis_router.clients.discovery_client import DiscoveryClient
from luis_router.clients.identity_client import IdentityClient
from luis_router.config import Settings
from luis_router.persistence.token_cache import TokenCache
from luis_router.recognizers import LuisRecognizer, build_recognizers
from luis_router.retry.orchestrator import RetryOrchestrator
from luis_router.security.cipher import AesEcbEncryptor, Encryptor


@dataclass(frozen=True)
class LuisRouterAccessor:
    token_cache: TokenCache
    recognizers: dict[str, LuisRecognizer]

    def get_recognizer(self, name: str) -> Optional[LuisRecognizer]:
        return self.recognizers.get(name)


def build_accessor(
    settings: Settings,
    token_cache: TokenCache,
    telemetry_client: Any = None,
) -> LuisRouterAccessor:
    """Bundle the token cache with recognizers built from settings."""
    return LuisRouterAccessor(
        token_cache=token_cache,
        recognizers=build_recognizers(settings, telemetry_client),
    )


def build_orchestrator(
    settings: Settings,
    token_cache: TokenCache,
    http: Optional[RouterHttpClient] = None,
    encryptor: Optional[Encryptor] = None,
) -> RetryOrchestrator:
    """
    Create a fully wired RetryOrchestrator.

    Args:
        settings: Application settings
        token_cache: Session token storage shared by both clients
        http: Router HTTP client (default: built from settings)
        encryptor: Identity payload cipher (default: AesEcbEncryptor)

    Returns:
        RetryOrchestrator
    """
    http = http or RouterHttpClient.from_settings(settings)

    discovery_client = DiscoveryClient(
        http,
        token_cache,
        bing_spell_check_subscription_key=settings.BING_SPELL_CHECK_SUBSCRIPTION_KEY,
        enable_luis_telemetry=settings.ENABLE_LUIS_TELEMETRY,
    )
    identity_client = IdentityClient(http, token_cache, encryptor or AesEcbEncryptor())

    return RetryOrchestrator.from_settings(settings, discovery_client, identity_client)
