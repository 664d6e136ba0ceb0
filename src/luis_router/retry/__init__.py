"""
Retry orchestration for LUIS discovery.

Main Components:
    - RetryOrchestrator: discovery loop with re-authentication on 401
      and fixed backoff on transport errors
    - RouteMetadata: immutable history of one route call
    - RouteResult: applications plus metadata

Usage:
    >>> from luis_router.retry import RetryOrchestrator
    >>> orchestrator = RetryOrchestrator(discovery_client, identity_client)
    >>> result = await orchestrator.route_with_metadata(session_id, text, code, key)
"""

from luis_router.retry.metadata import RouteMetadata, RouteResult
from luis_router.retry.orchestrator import RetryOrchestrator

__all__ = [
    "RetryOrchestrator",
    "RouteMetadata",
    "RouteResult",
]
