"""Prometheus metrics — request and registration counters exposed on /metrics.

Invariants:
    - Counters are module-level singletons registered once in the default registry
    - Label values are bounded (HTTP method/status, registration action, member decision)
"""

from prometheus_client import Counter, make_asgi_app

API_REQUESTS_TOTAL = Counter(
    "club_api_requests_total",
    "Total number of API requests",
    ["method", "status"],
)

EVENT_REGISTRATIONS_TOTAL = Counter(
    "club_event_registrations_total",
    "Total number of event registration transitions",
    ["action"],  # "registered", "cancelled"
)

MEMBER_STATUS_DECISIONS_TOTAL = Counter(
    "club_member_status_decisions_total",
    "Total number of decisions on member status",
    ["decision"],  # "pending", "approved", "declined"
)


def record_request(method: str, status_code: int) -> None:
    API_REQUESTS_TOTAL.labels(method=method, status=str(status_code)).inc()


def record_registration(action: str) -> None:
    EVENT_REGISTRATIONS_TOTAL.labels(action=action).inc()


def record_status_decision(decision: str) -> None:
    MEMBER_STATUS_DECISIONS_TOTAL.labels(decision=decision).inc()


def metrics_app():
    """ASGI app serving the default registry in Prometheus text format."""
    return make_asgi_app()
