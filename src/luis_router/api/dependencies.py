"""
FastAPI dependency injection for the router API.

Provides process-wide singletons: settings, token cache, the pooled
router HTTP client and the orchestrator built on top of them.
"""

from functools import lru_cache

from luis_router.accessor import build_orchestrator
from luis_router.clients.base_client import RouterHttpClient
from luis_router.config import Settings, settings
from luis_router.persistence.token_cache import TokenCache, create_token_cache
from luis_router.retry.orchestrator import RetryOrchestrator


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings singleton.

    Returns:
        Settings instance
    """
    return settings


@lru_cache()
def get_token_cache() -> TokenCache:
    """
    Get the token cache selected by TOKEN_CACHE_BACKEND.

    The in-memory backend only works with a single worker process.
    """
    return create_token_cache(get_settings())


@lru_cache()
def get_router_http_client() -> RouterHttpClient:
    """Get singleton router HTTP client with connection pooling."""
    return RouterHttpClient.from_settings(get_settings())


@lru_cache()
def get_orchestrator() -> RetryOrchestrator:
    """
    Get singleton orchestrator.

    Shares the token cache and HTTP client singletons above.
    """
    return build_orchestrator(
        get_settings(),
        get_token_cache(),
        http=get_router_http_client(),
    )
