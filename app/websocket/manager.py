# =============================================================================
# app/websocket/manager.py - WebSocket Connection Manager
# =============================================================================
# Manages WebSocket connections per chat and handles broadcasting.
#
# Usage:
#   from app.websocket import websocket_manager
#
#   await websocket_manager.connect(chat_id, websocket)
#   await websocket_manager.broadcast(chat_id, {"type": "receive-message", ...})
#   websocket_manager.disconnect(chat_id, websocket)
# =============================================================================

import logging
from typing import Dict, Set
from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Manages WebSocket connections organized by chat ID.

    Each chat can have several listeners (client, employee, commissioners,
    multiple browser tabs). Rooms are keyed by the chat ID as a string.
    """

    def __init__(self):
        # chat_id -> set of WebSocket connections
        self.connections: Dict[str, Set[WebSocket]] = {}
        self._total_connections = 0

    async def connect(self, chat_id: str, websocket: WebSocket) -> None:
        """
        Accept a new WebSocket connection and track it.
        """
        await websocket.accept()
        self.register(chat_id, websocket)

    def register(self, chat_id: str, websocket: WebSocket) -> None:
        """Track an already-accepted connection."""
        self.connections.setdefault(chat_id, set()).add(websocket)
        self._total_connections += 1

        logger.info(
            f"WebSocket joined chat {chat_id}. "
            f"Total connections: {self._total_connections}"
        )

    def disconnect(self, chat_id: str, websocket: WebSocket) -> None:
        """
        Remove a WebSocket connection from tracking.
        """
        room = self.connections.get(chat_id)
        if room is not None and websocket in room:
            room.discard(websocket)
            self._total_connections -= 1

            # Clean up empty rooms
            if not room:
                del self.connections[chat_id]

        logger.info(
            f"WebSocket left chat {chat_id}. "
            f"Total connections: {self._total_connections}"
        )

    async def broadcast(self, chat_id: str, message: dict) -> int:
        """
        Broadcast a message to all connections listening to a chat.

        Connections that fail to receive are dropped.

        Returns:
            int: Number of clients the message was sent to
        """
        if chat_id not in self.connections:
            logger.debug(f"No listeners for chat {chat_id}, skipping broadcast")
            return 0

        dead_connections: Set[WebSocket] = set()
        sent_count = 0

        for websocket in list(self.connections[chat_id]):
            try:
                await websocket.send_json(message)
                sent_count += 1
            except Exception as e:
                logger.warning(f"Failed to send to WebSocket: {e}")
                dead_connections.add(websocket)

        for ws in dead_connections:
            self.connections[chat_id].discard(ws)
            self._total_connections -= 1

        if dead_connections:
            logger.info(f"Cleaned up {len(dead_connections)} dead connections")

        if chat_id in self.connections and not self.connections[chat_id]:
            del self.connections[chat_id]

        logger.debug(
            f"Broadcast to chat {chat_id}: "
            f"type={message.get('type')}, sent to {sent_count} clients"
        )

        return sent_count

    def get_connection_count(self, chat_id: str | None = None) -> int:
        """
        Number of active connections, for one chat or in total.
        """
        if chat_id:
            return len(self.connections.get(chat_id, set()))
        return self._total_connections

    def get_active_chats(self) -> list[str]:
        """Chat IDs with at least one listener."""
        return list(self.connections.keys())


# Global singleton instance
websocket_manager = ConnectionManager()
