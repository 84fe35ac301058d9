"""Observability package for the parley backend."""

from parley.observability.metrics import (
    increment_conversations_initiated,
    increment_messages_posted,
    increment_users_registered,
    increment_error,
    observe_request_latency,
    get_metrics_content,
)

__all__ = [
    "increment_conversations_initiated",
    "increment_messages_posted",
    "increment_users_registered",
    "increment_error",
    "observe_request_latency",
    "get_metrics_content",
]
