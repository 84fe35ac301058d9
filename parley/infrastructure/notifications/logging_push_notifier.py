"""
LoggingPushNotifier - records push notifications in the application log.

Device delivery (APNs / FCM) happens in a separate gateway; this notifier
is the hand-off point and keeps a trace of what would be sent.
"""

import logging

from parley.domain.ports.services import PushNotification, PushNotifier

logger = logging.getLogger(__name__)


class LoggingPushNotifier(PushNotifier):
    async def send(self, notification: PushNotification) -> None:
        logger.info(
            f"Push notification to {notification.recipient_id}: "
            f"{notification.title} ({len(notification.body)} chars)"
        )
