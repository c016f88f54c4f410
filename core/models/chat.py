# =============================================================================
# core/models/chat.py - Chat & Message Schemas
# =============================================================================
# These models define the API contract for chat operations:
# - MessageCreate: Body of POST /chats/{chat_id}/messages
# - MessageResponse: A stored message
# - MessageEvent: Real-time event pushed to chat listeners
#
# Messages are immutable once stored and are always listed oldest first.
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# Event name delivered to WebSocket listeners when a message is stored
RECEIVE_MESSAGE_EVENT = "receive-message"


class MessageCreate(BaseModel):
    """
    Schema for sending a chat message.

    Example:
        {
            "content": "Hi, when can the technician come by?"
        }
    """

    content: str | None = Field(
        default=None,
        max_length=5000,
        description="Message text"
    )


class MessageResponse(BaseModel):
    """
    A message as stored in the messages table.

    Example:
        {
            "id": 41,
            "chat_id": 3,
            "sender": 5,
            "content": "Hi, when can the technician come by?",
            "created_at": "2024-01-15T10:30:00Z"
        }
    """

    id: int
    chat_id: int
    sender: int
    content: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MessageEvent(BaseModel):
    """
    Payload fanned out to every listener of a chat after a message is stored.

    Field names follow the JSON keys the web client listens for.
    """

    chat_id: int = Field(..., serialization_alias="chatId")
    content: str
    sender: int
    created_at: Any = Field(..., serialization_alias="createdAt")

    def to_payload(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used on the wire."""
        payload = self.model_dump(by_alias=True)
        if isinstance(payload["createdAt"], datetime):
            payload["createdAt"] = payload["createdAt"].isoformat()
        return payload
