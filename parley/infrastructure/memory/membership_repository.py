from parley.domain.entities.membership import Membership
from parley.domain.ports.repositories import MembershipRepository
from parley.domain.value_objects.conversation_id import ConversationId
from parley.domain.value_objects.user_id import UserId


class InMemoryMembershipRepository(MembershipRepository):
    def __init__(self):
        # Insertion order of the dict doubles as join order
        self._records: dict[tuple[str, str], Membership] = {}

    async def conversation_ids_of(self, user_id: UserId) -> list[ConversationId]:
        return [
            m.conversation_id
            for (uid, _), m in self._records.items()
            if uid == user_id.value
        ]

    async def members_of(self, conversation_id: ConversationId) -> list[UserId]:
        return [
            m.user_id
            for (_, cid), m in self._records.items()
            if cid == conversation_id.value
        ]

    async def add(self, membership: Membership) -> None:
        key = (membership.user_id.value, membership.conversation_id.value)
        self._records.setdefault(key, membership)

    async def remove(self, user_id: UserId, conversation_id: ConversationId) -> bool:
        return self._records.pop((user_id.value, conversation_id.value), None) is not None
