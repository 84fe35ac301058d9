"""
Users API Router - registration, profile and directory lookups.

The caller's id (and email / phone number for registration) always comes
from the verified token; request bodies only carry profile fields.

Domain errors are not caught here. fastapi_app maps them to status codes.
"""

from logging import getLogger
from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from parley.application.commands.users import (
    DeleteUserCommand,
    DeleteUserHandler,
    RegisterUserWithEmailCommand,
    RegisterUserWithEmailHandler,
    RegisterUserWithPhoneNumberCommand,
    RegisterUserWithPhoneNumberHandler,
    UpdateUserCommand,
    UpdateUserHandler,
)
from parley.application.dto import UserDTO
from parley.application.queries.users import (
    GetUserHandler,
    GetUserQuery,
    LookupUserByEmailHandler,
    LookupUserByEmailQuery,
    LookupUserByPhoneNumberHandler,
    LookupUserByPhoneNumberQuery,
    ValidateUserIdsHandler,
    ValidateUserIdsQuery,
)
from parley.presentation.dependencies.auth import AuthIdentity, get_current_identity

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class RegisterUserRequest(BaseModel):
    """Display name falls back to the token's `name` claim."""

    display_name: Optional[str] = None
    push_token: Optional[str] = None


class UpdateUserRequest(BaseModel):
    display_name: Optional[str] = None
    push_token: Optional[str] = None


class UserLookupResponse(BaseModel):
    """`user` is null when nobody matches."""

    user: Optional[UserDTO] = None


class ValidateUserIdsRequest(BaseModel):
    user_ids: list[str]


class ValidateUserIdsResponse(BaseModel):
    valid: bool


class DeleteUserResponse(BaseModel):
    deleted: bool


# ==================== ROUTER ====================

router = APIRouter(prefix="/users", tags=["users"])


# ==================== ENDPOINTS ====================


@router.post(
    "/register/email",
    response_model=UserDTO,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def register_with_email(
    request: RegisterUserRequest,
    handler: FromDishka[RegisterUserWithEmailHandler],
    identity: AuthIdentity = Depends(get_current_identity),
):
    command = RegisterUserWithEmailCommand(
        user_id=identity.user_id,
        email=identity.email,
        display_name=request.display_name or identity.display_name,
        push_token=request.push_token,
    )
    user = await handler.execute(command)
    return UserDTO.from_entity(user)


@router.post(
    "/register/phone",
    response_model=UserDTO,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def register_with_phone_number(
    request: RegisterUserRequest,
    handler: FromDishka[RegisterUserWithPhoneNumberHandler],
    identity: AuthIdentity = Depends(get_current_identity),
):
    command = RegisterUserWithPhoneNumberCommand(
        user_id=identity.user_id,
        phone_number=identity.phone_number,
        display_name=request.display_name or identity.display_name,
        push_token=request.push_token,
    )
    user = await handler.execute(command)
    return UserDTO.from_entity(user)


@router.patch("/me", response_model=UserDTO, status_code=status.HTTP_200_OK)
@inject
async def update_me(
    request: UpdateUserRequest,
    handler: FromDishka[UpdateUserHandler],
    identity: AuthIdentity = Depends(get_current_identity),
):
    """Update display name and/or push token. Omitted fields are left alone."""
    command = UpdateUserCommand(
        user_id=identity.user_id,
        display_name=request.display_name,
        push_token=request.push_token,
    )
    user = await handler.execute(command)
    return UserDTO.from_entity(user)


@router.delete("/me", response_model=DeleteUserResponse, status_code=status.HTTP_200_OK)
@inject
async def delete_me(
    handler: FromDishka[DeleteUserHandler],
    identity: AuthIdentity = Depends(get_current_identity),
):
    deleted = await handler.execute(DeleteUserCommand(user_id=identity.user_id))
    return DeleteUserResponse(deleted=deleted)


@router.get("/lookup/email", response_model=UserLookupResponse)
@inject
async def lookup_by_email(
    handler: FromDishka[LookupUserByEmailHandler],
    email: str = Query(...),
    identity: AuthIdentity = Depends(get_current_identity),
):
    user = await handler.execute(LookupUserByEmailQuery(email=email))
    return UserLookupResponse(user=UserDTO.from_entity(user) if user else None)


@router.get("/lookup/phone", response_model=UserLookupResponse)
@inject
async def lookup_by_phone_number(
    handler: FromDishka[LookupUserByPhoneNumberHandler],
    phone_number: str = Query(...),
    identity: AuthIdentity = Depends(get_current_identity),
):
    user = await handler.execute(LookupUserByPhoneNumberQuery(phone_number=phone_number))
    return UserLookupResponse(user=UserDTO.from_entity(user) if user else None)


@router.post("/validate", response_model=ValidateUserIdsResponse)
@inject
async def validate_user_ids(
    request: ValidateUserIdsRequest,
    handler: FromDishka[ValidateUserIdsHandler],
    identity: AuthIdentity = Depends(get_current_identity),
):
    valid = await handler.execute(ValidateUserIdsQuery(user_ids=tuple(request.user_ids)))
    return ValidateUserIdsResponse(valid=valid)


@router.get("/{user_id}", response_model=UserLookupResponse)
@inject
async def get_user(
    user_id: str,
    handler: FromDishka[GetUserHandler],
    identity: AuthIdentity = Depends(get_current_identity),
):
    user = await handler.execute(GetUserQuery(user_id=user_id))
    return UserLookupResponse(user=UserDTO.from_entity(user) if user else None)
