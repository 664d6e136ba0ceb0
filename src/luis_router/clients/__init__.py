"""
Router service clients.

Components:
- RouterHttpClient: pooled httpx client shared by both endpoints
- IdentityClient: POST /identity, refreshes the session token
- DiscoveryClient: POST /luisdiscovery, classifies the response
- exceptions: re-exported from luis_router.exceptions
"""

from luis_router.clients.base_client import RouterHttpClient
from luis_router.clients.discovery_client import DiscoveryClient
from luis_router.clients.identity_client import IdentityClient
from luis_router.exceptions import (
    RouterClientError,
    RouterConfigurationError,
    RouterResponseError,
    RouterTimeoutError,
    RouterTransportError,
)

__all__ = [
    "RouterHttpClient",
    "DiscoveryClient",
    "IdentityClient",
    "RouterClientError",
    "RouterConfigurationError",
    "RouterResponseError",
    "RouterTimeoutError",
    "RouterTransportError",
]
