"""
Route metadata tracking.

RouteMetadata records what one route call did, and RouteResult pairs it
with the returned application list so callers can tell "the router found
nothing" from "we gave up".
"""

from dataclasses import dataclass, field

from luis_router.models.outcomes import DiscoveryOutcomeKind, IdentityExchangeResult
from luis_router.models.router_models import LuisAppDetail

TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class RouteMetadata:
    """
    History of a single route call.

    Attributes:
        total_attempts: Discovery attempts made (including ones that raised)
        outcomes: Per-attempt outcome, in order: a DiscoveryOutcomeKind
            value or "transport_error"
        identity_exchanges: Results of identity exchanges, in order
        transport_errors: Number of attempts that ended in a transport error
        total_latency_ms: Wall time of the whole call
        exhausted: True when the attempt budget ran out without a 2xx
    """

    total_attempts: int
    outcomes: list[str] = field(default_factory=list)
    identity_exchanges: list[IdentityExchangeResult] = field(default_factory=list)
    transport_errors: int = 0
    total_latency_ms: int = 0
    exhausted: bool = False

    def __post_init__(self) -> None:
        if self.total_attempts < 1:
            raise ValueError("total_attempts must be >= 1")

        if len(self.outcomes) != self.total_attempts:
            raise ValueError("outcomes must have one entry per attempt")

        if self.total_latency_ms < 0:
            raise ValueError("total_latency_ms must be >= 0")

        if self.exhausted and DiscoveryOutcomeKind.SUCCESS.value in self.outcomes:
            raise ValueError("an exhausted route cannot contain a successful attempt")


@dataclass(frozen=True)
class RouteResult:
    """Applications returned by a route call plus how they were obtained."""

    apps: list[LuisAppDetail]
    metadata: RouteMetadata

    @property
    def exhausted(self) -> bool:
        return self.metadata.exhausted
