"""Prometheus metrics for router calls."""

from luis_router.monitoring.metrics import (
    discovery_attempts_total,
    identity_exchanges_total,
    route_results_total,
    router_request_latency_seconds,
)

__all__ = [
    "discovery_attempts_total",
    "identity_exchanges_total",
    "route_results_total",
    "router_request_latency_seconds",
]
