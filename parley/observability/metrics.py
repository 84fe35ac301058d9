"""
Prometheus Metrics for the parley backend.

METRIC TYPES:
    - Counter: Value only goes up (registrations, conversations, messages, errors)
    - Histogram: Distribution (request latency)
"""

from prometheus_client import (
    Histogram,
    Counter,
    generate_latest,
    CONTENT_TYPE_LATEST,
)


# =============================================================================
# METRICS DEFINITIONS
# =============================================================================
REQUEST_LATENCY = Histogram(
    "http_server_request_duration_seconds",
    "Http request latency in seconds",
    ["method", "route", "http_status_code"],
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1, 2, 5],
)

USERS_REGISTERED_TOTAL = Counter(
    "parley_users_registered_total",
    "Total number of user registrations",
    ["method"],
)

CONVERSATIONS_INITIATED_TOTAL = Counter(
    "parley_conversations_initiated_total",
    "Total number of initiateConversation calls by outcome",
    ["outcome"],
)

MESSAGES_POSTED_TOTAL = Counter(
    "parley_messages_posted_total",
    "Total number of messages stored",
)

ERRORS_TOTAL = Counter(
    "parley_errors_total",
    "Total number of rejected operations by error type",
    ["error_type"],
)


# =============================================================================
# RECORDING FUNCTIONS
# =============================================================================
def observe_request_latency(method: str, route: str, status_code: int, duration: float):
    REQUEST_LATENCY.labels(
        method=method, route=route, http_status_code=str(status_code)
    ).observe(duration)


def increment_users_registered(method: str):
    """method is "email" or "phone"."""
    USERS_REGISTERED_TOTAL.labels(method=method).inc()


def increment_conversations_initiated(outcome: str):
    """outcome is "created" or "existing"."""
    CONVERSATIONS_INITIATED_TOTAL.labels(outcome=outcome).inc()


def increment_messages_posted():
    MESSAGES_POSTED_TOTAL.inc()


def increment_error(error_type: str):
    ERRORS_TOTAL.labels(error_type=error_type).inc()


def get_metrics_content() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST
