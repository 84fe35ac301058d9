"""Message commands."""

from .post_message import PostMessageCommand, PostMessageHandler, drain_notifications

__all__ = ["PostMessageCommand", "PostMessageHandler", "drain_notifications"]
