"""
DTOs - Data Transfer Objects for the HTTP boundary.
"""

from parley.application.dto.user import UserDTO
from parley.application.dto.conversation import ConversationDTO, MessageDTO

__all__ = ["UserDTO", "MessageDTO", "ConversationDTO"]
