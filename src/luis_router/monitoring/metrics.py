"""Prometheus metrics for the LUIS router client.

Exposed at /metrics by the API host. Useful alert signals:
- identity_exchanges_total{result="rejected"} (bad application code or key)
- route_results_total{result="exhausted"} (router unreachable or auth broken)
- discovery_attempts_total{outcome="transport_error"} (network instability)
"""

from prometheus_client import Counter, Histogram

# === Discovery ===

discovery_attempts_total = Counter(
    "luis_router_discovery_attempts_total",
    "Discovery attempts by outcome",
    ["outcome"],
)
"""
Labels:
- outcome: success, unauthorized, failure, transport_error
"""

# === Identity ===

identity_exchanges_total = Counter(
    "luis_router_identity_exchanges_total",
    "Identity exchanges by result",
    ["result"],
)
"""
Labels:
- result: accepted, rejected
"""

# === Route ===

route_results_total = Counter(
    "luis_router_route_results_total",
    "Completed route calls by result",
    ["result"],
)
"""
Labels:
- result: matched (non-empty list), empty (router answered with no apps),
  exhausted (attempt budget spent without a 2xx)
"""

router_request_latency_seconds = Histogram(
    "luis_router_request_latency_seconds",
    "Latency of calls to the router service",
    ["endpoint"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0],
)
"""
Labels:
- endpoint: identity, luisdiscovery
"""
