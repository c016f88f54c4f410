# =============================================================================
# app/websocket/__init__.py - WebSocket Module
# =============================================================================
# Provides real-time delivery of chat messages.
#
# Usage:
#   # Broadcast to everyone listening to a chat (inside the API process)
#   from app.websocket import websocket_manager
#   await websocket_manager.broadcast("3", {"type": "receive-message", ...})
#
#   # Publish from any process
#   from app.websocket.broadcast import publish_chat_message
#   publish_chat_message(3, event)
# =============================================================================

from app.websocket.manager import websocket_manager
from app.websocket.broadcast import (
    decode_event,
    publish_event,
    publish_chat_message,
    WEBSOCKET_CHANNEL,
)

__all__ = [
    "websocket_manager",
    "decode_event",
    "publish_event",
    "publish_chat_message",
    "WEBSOCKET_CHANNEL",
]
