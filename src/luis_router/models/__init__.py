"""
Data models for the LUIS router client.

- router_models: JSON wire models for /identity and /luisdiscovery
- outcomes: tagged results returned by the clients
"""

from luis_router.models.outcomes import (
    DiscoveryFailure,
    DiscoveryOutcome,
    DiscoveryOutcomeKind,
    DiscoverySuccess,
    DiscoveryUnauthorized,
    IdentityExchangeResult,
)
from luis_router.models.router_models import (
    DiscoveryRequest,
    DiscoveryResponse,
    IdentityEnvelope,
    IdentityRequest,
    IdentityResponse,
    LuisAppDetail,
)

__all__ = [
    "DiscoveryFailure",
    "DiscoveryOutcome",
    "DiscoveryOutcomeKind",
    "DiscoverySuccess",
    "DiscoveryUnauthorized",
    "IdentityExchangeResult",
    "DiscoveryRequest",
    "DiscoveryResponse",
    "IdentityEnvelope",
    "IdentityRequest",
    "IdentityResponse",
    "LuisAppDetail",
]
