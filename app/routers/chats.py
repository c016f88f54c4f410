# =============================================================================
# app/routers/chats.py - Chat & Message Endpoints
# =============================================================================
# Chat listing and message history/sending.
# All endpoints require authentication; /all and /user/{id} are admin-only.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.auth import get_current_user, require_roles, AuthUser
from app.dependencies import ChatServiceDep
from core.models.chat import MessageCreate, MessageResponse
from core.models.roles import Role

router = APIRouter()


@router.get("")
async def get_chats(
    chats: ChatServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    List the chats of the current user.

    Clients see their own chats, employees the chats assigned to them,
    commissioners the chats of the client they act for.
    """
    return {"chats": chats.list_chats_for_user(user)}


@router.get("/all", dependencies=[Depends(require_roles(Role.ADMIN))])
async def get_all_chats(chats: ChatServiceDep):
    """
    List every chat with service item, client and employee details.
    """
    return {"success": True, "data": chats.list_all_chats()}


@router.get("/user/{user_id}", dependencies=[Depends(require_roles(Role.ADMIN))])
async def get_chats_by_user_id(
    user_id: Annotated[int, Path(ge=1, description="Client or employee ID")],
    chats: ChatServiceDep,
):
    """
    List the chats where the given user is the client or the employee.
    """
    return {"success": True, "data": chats.list_chats_by_user_id(user_id)}


@router.get("/{chat_id}/messages", response_model=list[MessageResponse])
async def get_messages(
    chat_id: Annotated[int, Path(ge=1, description="Chat ID")],
    chats: ChatServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Get the messages of a chat, oldest first.

    Allowed for the chat's client, its employee and the client's commissioners.
    """
    return chats.list_messages(chat_id, user)


@router.post(
    "/{chat_id}/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    chat_id: Annotated[int, Path(ge=1, description="Chat ID")],
    request: MessageCreate,
    chats: ChatServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Send a message to a chat.

    Allowed for the chat's client, its employee and admins. The stored
    message is pushed to listeners of the chat as a receive-message event.
    """
    return chats.send_message(chat_id, user, request.content)
