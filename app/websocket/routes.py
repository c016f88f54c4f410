# =============================================================================
# app/websocket/routes.py - WebSocket Routes
# =============================================================================
# WebSocket endpoint for real-time chat messages.
#
# Connect: ws://host/ws/chats/{chat_id}?token={jwt}
# (the access cookie is used when no token query parameter is given)
#
# Events:
#   - {"type": "receive-message", "chatId": 3, "content": "...", "sender": 5, "createdAt": "..."}
# =============================================================================

import logging
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, Query

from app.config import settings
from app.auth.tokens import decode_access_token
from app.dependencies import get_db
from app.exceptions import MarketplaceException
from app.websocket.manager import websocket_manager
from core.access import can_read_chat
from core.services.chat_service import ChatService
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws/chats/{chat_id}")
async def chat_websocket(
    websocket: WebSocket,
    chat_id: int,
    token: str | None = Query(default=None, description="Access token"),
    db: SupabaseClient = Depends(get_db),
):
    """
    WebSocket endpoint for real-time chat messages.

    The principal must be allowed to read the chat: its client, its
    employee, or one of the client's commissioners.

    Close codes:
        4001: missing or invalid token
        4003: not allowed to read this chat
        4004: chat not found
    """
    # 1. Verify token
    raw_token = token or websocket.cookies.get(settings.TOKEN_COOKIE_NAME)
    if not raw_token:
        await websocket.close(code=4001, reason="Missing token")
        return

    try:
        user = decode_access_token(raw_token)
    except MarketplaceException as e:
        logger.warning(f"WebSocket auth failed: {e.message}")
        await websocket.close(code=4001, reason="Invalid token")
        return

    # 2. Verify the principal may read this chat
    try:
        participants = ChatService(db).load_participants(chat_id)
    except MarketplaceException as e:
        logger.warning(f"WebSocket: chat {chat_id} unavailable: {e.message}")
        await websocket.close(code=4004, reason="Chat not found")
        return

    if not can_read_chat(user.user_id, user.role, participants):
        logger.warning(
            f"WebSocket access denied: {user.role.value} {user.user_id} "
            f"tried to join chat {chat_id}"
        )
        await websocket.close(code=4003, reason="Access denied")
        return

    # 3. Accept connection and add to manager
    room = str(chat_id)
    await websocket_manager.connect(room, websocket)

    try:
        await websocket.send_json({
            "type": "connected",
            "chatId": chat_id,
            "message": "Connected to chat"
        })

        while True:
            data = await websocket.receive_text()
            if data == "ping":
                await websocket.send_text("pong")
            else:
                logger.debug(f"WebSocket received: {data[:100]}")

    except WebSocketDisconnect:
        logger.info(f"WebSocket client disconnected from chat {chat_id}")
    finally:
        websocket_manager.disconnect(room, websocket)


@router.get("/ws/status")
async def websocket_status():
    """
    Get WebSocket connection statistics.
    """
    return {
        "total_connections": websocket_manager.get_connection_count(),
        "active_chats": websocket_manager.get_active_chats(),
        "chat_count": len(websocket_manager.get_active_chats())
    }
