"""
Push Notifier Port - fire-and-forget delivery of a notification to one device.

Callers never let a notifier failure fail the operation that triggered it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class PushNotification:
    recipient_id: str
    token: str
    title: str
    body: str
    data: dict[str, Any] = field(default_factory=dict)


class PushNotifier(ABC):
    @abstractmethod
    async def send(self, notification: PushNotification) -> None: ...
