"""
Conversations API Router - conversations, membership and messages.

Flow:
  HTTP Request → Router → Command/Query → Handler → Services → Repositories
                                      ↓
  HTTP Response ← Router ← DTO ← Result

Static paths (/ids, /existing) are declared before /{conversation_id} so
they are not captured as conversation ids.
"""

from datetime import datetime
from logging import getLogger
from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from parley.application.commands.conversations import (
    InitiateConversationCommand,
    InitiateConversationHandler,
    JoinConversationCommand,
    JoinConversationHandler,
    RemoveFromConversationCommand,
    RemoveFromConversationHandler,
)
from parley.application.commands.messages import PostMessageCommand, PostMessageHandler
from parley.application.dto import ConversationDTO, MessageDTO, UserDTO
from parley.application.queries.conversations import (
    ExistingConversationIdAmongstUsersHandler,
    ExistingConversationIdAmongstUsersQuery,
    GetConversationHandler,
    GetConversationHistoryHandler,
    GetConversationHistoryQuery,
    GetConversationIdsHandler,
    GetConversationIdsQuery,
    GetConversationQuery,
    GetConversationUsersHandler,
    GetConversationUsersQuery,
)
from parley.presentation.dependencies.auth import AuthIdentity, get_current_identity

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class InitiateConversationRequest(BaseModel):
    """Other participants; the caller is always added as the initiator."""

    user_ids: list[str]


class ConversationIdResponse(BaseModel):
    conversation_id: Optional[str] = None


class ConversationIdsResponse(BaseModel):
    conversation_ids: list[str]


class MembershipResponse(BaseModel):
    conversation_id: str
    user_id: str


class PostMessageRequest(BaseModel):
    message: str


# ==================== ROUTER ====================

router = APIRouter(prefix="/conversations", tags=["conversations"])


# ==================== ENDPOINTS ====================


@router.post("", response_model=ConversationIdResponse, status_code=status.HTTP_200_OK)
@inject
async def initiate_conversation(
    request: InitiateConversationRequest,
    handler: FromDishka[InitiateConversationHandler],
    identity: AuthIdentity = Depends(get_current_identity),
):
    """Find or create the conversation of exactly the caller plus `user_ids`."""
    command = InitiateConversationCommand(
        user_id=identity.user_id,
        other_user_ids=tuple(request.user_ids),
    )
    conversation_id = await handler.execute(command)
    return ConversationIdResponse(conversation_id=conversation_id.value)


@router.get("", response_model=list[ConversationDTO])
@inject
async def get_conversation_history(
    handler: FromDishka[GetConversationHistoryHandler],
    identity: AuthIdentity = Depends(get_current_identity),
):
    """Every conversation the caller belongs to, with members and messages."""
    views = await handler.execute(GetConversationHistoryQuery(user_id=identity.user_id))
    return [ConversationDTO.from_view(view) for view in views]


@router.get("/ids", response_model=ConversationIdsResponse)
@inject
async def get_conversation_ids(
    handler: FromDishka[GetConversationIdsHandler],
    identity: AuthIdentity = Depends(get_current_identity),
):
    ids = await handler.execute(GetConversationIdsQuery(user_id=identity.user_id))
    return ConversationIdsResponse(conversation_ids=[cid.value for cid in ids])


@router.get("/existing", response_model=ConversationIdResponse)
@inject
async def existing_conversation_id(
    handler: FromDishka[ExistingConversationIdAmongstUsersHandler],
    user_ids: list[str] = Query(...),
    identity: AuthIdentity = Depends(get_current_identity),
):
    conversation_id = await handler.execute(
        ExistingConversationIdAmongstUsersQuery(user_ids=tuple(user_ids))
    )
    return ConversationIdResponse(
        conversation_id=conversation_id.value if conversation_id else None
    )


@router.get("/{conversation_id}", response_model=ConversationDTO)
@inject
async def get_conversation(
    conversation_id: str,
    handler: FromDishka[GetConversationHandler],
    since: Optional[datetime] = None,
    identity: AuthIdentity = Depends(get_current_identity),
):
    view = await handler.execute(
        GetConversationQuery(
            conversation_id=conversation_id,
            user_id=identity.user_id,
            since=since,
        )
    )
    return ConversationDTO.from_view(view)


@router.get("/{conversation_id}/users", response_model=list[UserDTO])
@inject
async def get_conversation_users(
    conversation_id: str,
    handler: FromDishka[GetConversationUsersHandler],
    identity: AuthIdentity = Depends(get_current_identity),
):
    users = await handler.execute(
        GetConversationUsersQuery(
            conversation_id=conversation_id,
            requester_id=identity.user_id,
        )
    )
    return [UserDTO.from_entity(user) for user in users]


@router.post(
    "/{conversation_id}/members",
    response_model=MembershipResponse,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def join_conversation(
    conversation_id: str,
    handler: FromDishka[JoinConversationHandler],
    identity: AuthIdentity = Depends(get_current_identity),
):
    await handler.execute(
        JoinConversationCommand(
            user_id=identity.user_id,
            conversation_id=conversation_id,
        )
    )
    return MembershipResponse(conversation_id=conversation_id, user_id=identity.user_id)


@router.delete("/{conversation_id}/members/me", response_model=MembershipResponse)
@inject
async def leave_conversation(
    conversation_id: str,
    handler: FromDishka[RemoveFromConversationHandler],
    identity: AuthIdentity = Depends(get_current_identity),
):
    await handler.execute(
        RemoveFromConversationCommand(
            user_id=identity.user_id,
            conversation_id=conversation_id,
        )
    )
    return MembershipResponse(conversation_id=conversation_id, user_id=identity.user_id)


@router.post(
    "/{conversation_id}/messages",
    response_model=MessageDTO,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def post_message(
    conversation_id: str,
    request: PostMessageRequest,
    handler: FromDishka[PostMessageHandler],
    identity: AuthIdentity = Depends(get_current_identity),
):
    view = await handler.execute(
        PostMessageCommand(
            conversation_id=conversation_id,
            sender_id=identity.user_id,
            body=request.message,
        )
    )
    return MessageDTO.from_view(view)
