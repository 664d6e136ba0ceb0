"""
Outcome types for router calls.

Discovery results are a tagged union so the orchestrator (and tests)
can tell a 401 apart from any other non-success status instead of
folding both into "no match".
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from luis_router.models.router_models import LuisAppDetail


class IdentityExchangeResult(str, Enum):
    """
    Result of a single identity exchange.

    REJECTED means the router answered non-2xx and the token cache was
    left untouched.
    """

    ACCEPTED = "accepted"
    REJECTED = "rejected"


class DiscoveryOutcomeKind(str, Enum):
    SUCCESS = "success"
    UNAUTHORIZED = "unauthorized"
    FAILURE = "failure"


@dataclass(frozen=True)
class DiscoverySuccess:
    """2xx from /luisdiscovery. ``apps`` keeps the router's order and may be empty."""

    apps: list[LuisAppDetail] = field(default_factory=list)
    kind: DiscoveryOutcomeKind = field(default=DiscoveryOutcomeKind.SUCCESS, init=False)


@dataclass(frozen=True)
class DiscoveryUnauthorized:
    """401 from /luisdiscovery: the cached token is missing or stale."""

    kind: DiscoveryOutcomeKind = field(default=DiscoveryOutcomeKind.UNAUTHORIZED, init=False)


@dataclass(frozen=True)
class DiscoveryFailure:
    """Any other non-2xx status from /luisdiscovery."""

    status_code: int
    kind: DiscoveryOutcomeKind = field(default=DiscoveryOutcomeKind.FAILURE, init=False)


DiscoveryOutcome = Union[DiscoverySuccess, DiscoveryUnauthorized, DiscoveryFailure]
