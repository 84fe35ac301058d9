"""
Conversation Resolver - at most one conversation per group of users.

Given an initiator and the other participants, either returns the existing
conversation whose membership is exactly that group, or allocates a new
conversation id and writes one membership record per participant.

The lookup-then-create sequence is not atomic. Two concurrent calls for the
same group can both miss and both create; sequential calls always converge
on the first conversation. A crash between the per-participant writes leaves
a conversation only some members can see until the same call is retried.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from parley.application.services.user_directory import UserDirectory, is_id_collection
from parley.domain.entities.membership import Membership
from parley.domain.exceptions import InvalidInputError, InvalidParticipantsError
from parley.domain.ports.repositories import MembershipRepository
from parley.domain.value_objects.conversation_id import ConversationId
from parley.domain.value_objects.user_id import UserId
from parley.observability import increment_conversations_initiated
from parley.utils.concurrency import gather_all

logger = logging.getLogger(__name__)


def _dedupe(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


class ConversationResolver:
    def __init__(self, memberships: MembershipRepository, users: UserDirectory):
        self._memberships = memberships
        self._users = users

    async def existing_conversation_id(
        self, user_ids: Any
    ) -> Optional[ConversationId]:
        """
        Find the one conversation whose members are exactly `user_ids`.

        Steps:
        1. Fetch every user's conversation ids concurrently and intersect them
        2. Keep only candidates whose member set equals the requested set
           (a conversation of A, B and C is not a match for A and B)
        3. Exactly one survivor is the answer; none or several means no match
        """
        if not is_id_collection(user_ids):
            raise InvalidInputError(
                "existingConversationIdAmongstUsers requires a collection of user ids"
            )
        wanted = _dedupe(list(user_ids))
        if not wanted:
            raise InvalidInputError(
                "existingConversationIdAmongstUsers requires at least one user id"
            )
        try:
            uids = [UserId(raw) for raw in wanted]
        except InvalidInputError:
            return None

        per_user = await gather_all(
            *(self._memberships.conversation_ids_of(uid) for uid in uids)
        )
        common = set(per_user[0]).intersection(*per_user[1:])
        candidates = [cid for cid in per_user[0] if cid in common]
        if not candidates:
            return None

        member_lists = await gather_all(
            *(self._memberships.members_of(cid) for cid in candidates)
        )
        exact = [
            cid
            for cid, members in zip(candidates, member_lists)
            if set(members) == set(uids)
        ]
        if len(exact) > 1:
            logger.warning(
                f"{len(exact)} conversations share the same members: "
                f"{[cid.value for cid in exact]}"
            )
        return exact[0] if len(exact) == 1 else None

    async def resolve(
        self, initiator_id: Any, other_ids: Any
    ) -> tuple[ConversationId, bool]:
        """Return (conversation_id, created)."""
        if not isinstance(initiator_id, str) or not initiator_id:
            raise InvalidInputError(
                "initiateConversation requires userId string parameter "
                f"but had {initiator_id} instead"
            )
        if not is_id_collection(other_ids):
            raise InvalidInputError("initiateConversation requires array")

        others = _dedupe(list(other_ids))
        if initiator_id in others:
            raise InvalidInputError("Cannot start a conversation with yourself")
        if not others:
            raise InvalidInputError(
                "initiateConversation requires at least one other participant"
            )

        participants = [initiator_id, *others]

        # Never allocate a conversation for users that do not exist
        if not await self._users.validate_ids(participants):
            raise InvalidParticipantsError()

        existing = await self.existing_conversation_id(participants)
        if existing is not None:
            logger.info(f"Reusing conversation {existing} for {len(participants)} users")
            increment_conversations_initiated("existing")
            return existing, False

        conversation_id = ConversationId.generate()
        joined_at = datetime.now(timezone.utc)
        # Initiator first; offsets keep join order stable across backends
        for position, raw in enumerate(participants):
            await self._memberships.add(
                Membership(
                    user_id=UserId(raw),
                    conversation_id=conversation_id,
                    joined_at=joined_at + timedelta(microseconds=position),
                )
            )
        logger.info(
            f"Created conversation {conversation_id} for {len(participants)} users"
        )
        increment_conversations_initiated("created")
        return conversation_id, True
