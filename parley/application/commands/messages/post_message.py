"""
Post Message Command.

Flow:
1. Sender must be set, must exist and must currently be a member
2. Message is stamped (now, or the supplied replay timestamp) and stored
3. Every other member with a push token is notified in a background task,
   best effort; the post does not wait for the notifier
4. The stored message is returned joined to the sender's live record
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from parley.application.common.interfaces import Command, CommandHandler
from parley.application.services.conversation_reader import (
    ConversationReader,
    MessageView,
    to_conversation_id,
)
from parley.application.services.user_directory import UserDirectory
from parley.config.settings import Config
from parley.domain.entities.message import Message
from parley.domain.entities.user import User
from parley.domain.exceptions import InvalidInputError, NotMemberError, UnknownSenderError
from parley.domain.ports.repositories import MessageRepository
from parley.domain.ports.services import PushNotification, PushNotifier
from parley.domain.value_objects.conversation_id import ConversationId
from parley.domain.value_objects.user_id import UserId
from parley.observability import increment_messages_posted
from parley.utils.concurrency import gather_all

logger = logging.getLogger(__name__)

# Strong references keep scheduled sends alive until they finish
_pending_notifications: set[asyncio.Task] = set()


async def drain_notifications() -> None:
    """Wait for every scheduled push notification to finish."""
    if _pending_notifications:
        await asyncio.gather(*_pending_notifications, return_exceptions=True)


@dataclass(frozen=True)
class PostMessageCommand(Command[MessageView]):
    conversation_id: str
    sender_id: str
    body: str
    timestamp: Optional[Union[datetime, str]] = None


class PostMessageHandler(CommandHandler[MessageView]):
    def __init__(
        self,
        message_repository: MessageRepository,
        conversation_reader: ConversationReader,
        user_directory: UserDirectory,
        push_notifier: PushNotifier,
        notifications_enabled: bool = None,
    ):
        self._message_repository = message_repository
        self._conversation_reader = conversation_reader
        self._user_directory = user_directory
        self._push_notifier = push_notifier
        self._notifications_enabled = (
            Config.PUSH_NOTIFICATIONS_ENABLED
            if notifications_enabled is None
            else notifications_enabled
        )

    async def execute(self, command: PostMessageCommand) -> MessageView:
        if not command.sender_id:
            raise InvalidInputError("sender must be set")
        if not command.conversation_id:
            raise InvalidInputError("conversationId must be set")

        sender_id = UserId(command.sender_id)
        conversation_id = to_conversation_id(command.conversation_id)

        sender = await self._user_directory.get_user(sender_id.value)
        if sender is None:
            raise UnknownSenderError()
        member_ids = await self._conversation_reader.member_ids(conversation_id)
        if sender_id not in member_ids:
            raise NotMemberError("Sender is not part of the conversation")

        message = Message.create(
            conversation_id, sender_id, command.body, timestamp=command.timestamp
        )
        await self._message_repository.append(message)
        increment_messages_posted()
        logger.info(f"Message posted to {conversation_id} by {sender_id}")

        if self._notifications_enabled:
            task = asyncio.create_task(
                self._notify_members(conversation_id, sender, message, member_ids)
            )
            _pending_notifications.add(task)
            task.add_done_callback(_pending_notifications.discard)

        return MessageView(
            conversation_id=message.conversation_id,
            sender_id=message.sender_id,
            sender=sender,
            body=message.body,
            timestamp=message.timestamp,
        )

    async def _notify_members(
        self,
        conversation_id: ConversationId,
        sender: User,
        message: Message,
        member_ids: list[UserId],
    ) -> None:
        # Notification failures never fail the post
        try:
            recipients = await self._user_directory.get_users(
                [uid for uid in member_ids if uid != sender.id]
            )
            notifications = [
                PushNotification(
                    recipient_id=user.id.value,
                    token=user.push_token,
                    title=Config.PUSH_NOTIFICATION_TITLE.format(
                        sender=sender.display_name
                    ),
                    body=message.body,
                    data={
                        "conversationId": conversation_id.value,
                        "sender": sender.id.value,
                    },
                )
                for user in recipients
                if user is not None and user.push_token
            ]
            if notifications:
                await gather_all(*(self._push_notifier.send(n) for n in notifications))
        except Exception as e:
            logger.warning(
                f"Push notification failed for conversation {conversation_id}: {str(e)}"
            )
