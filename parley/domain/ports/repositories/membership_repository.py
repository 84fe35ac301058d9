"""
Membership Repository Port - the membership index.

Stores (user, conversation) pairs and answers both directions:
user -> conversation ids, conversation -> member ids in join order.
"""

from abc import ABC, abstractmethod

from parley.domain.entities.membership import Membership
from parley.domain.value_objects.conversation_id import ConversationId
from parley.domain.value_objects.user_id import UserId


class MembershipRepository(ABC):
    @abstractmethod
    async def conversation_ids_of(self, user_id: UserId) -> list[ConversationId]: ...

    @abstractmethod
    async def members_of(self, conversation_id: ConversationId) -> list[UserId]:
        """Member ids ordered by join time; the first one started the conversation."""

    @abstractmethod
    async def add(self, membership: Membership) -> None: ...

    @abstractmethod
    async def remove(
        self, user_id: UserId, conversation_id: ConversationId
    ) -> bool: ...
