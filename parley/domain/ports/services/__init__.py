from parley.domain.ports.services.push_notifier import PushNotification, PushNotifier

__all__ = ["PushNotification", "PushNotifier"]
