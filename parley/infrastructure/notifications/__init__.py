from parley.infrastructure.notifications.logging_push_notifier import (
    LoggingPushNotifier,
)

__all__ = ["LoggingPushNotifier"]
