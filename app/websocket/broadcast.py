# =============================================================================
# app/websocket/broadcast.py - Cross-Process Broadcasting
# =============================================================================
# Publishes stored chat messages so every API process can push them to its
# WebSocket listeners.
#
# Uses Redis pub/sub for cross-process communication:
# - Request handlers call publish_chat_message() after storing a message
# - Each API process subscribes and broadcasts to its WebSocket clients
#
# Delivery is fire-and-forget: nothing is queued for offline listeners.
# =============================================================================

import json
import logging
from functools import lru_cache
from typing import Any

from core.models.chat import RECEIVE_MESSAGE_EVENT, MessageEvent

logger = logging.getLogger(__name__)

# Redis channel for WebSocket events
WEBSOCKET_CHANNEL = "marketplace:chat:events"


@lru_cache
def get_redis_client():
    """Get a Redis client for pub/sub operations."""
    import redis
    from app.config import settings
    return redis.from_url(settings.REDIS_URL)


def publish_event(chat_id: int, event_type: str, data: dict[str, Any]) -> bool:
    """
    Publish an event that will be broadcast to the listeners of a chat.

    Args:
        chat_id: The chat to broadcast to
        event_type: Event type (e.g. receive-message)
        data: Event data to include

    Returns:
        bool: True if published successfully
    """
    try:
        client = get_redis_client()

        message = json.dumps({
            "chat_id": chat_id,
            "type": event_type,
            "data": data,
        }, default=str)

        client.publish(WEBSOCKET_CHANNEL, message)

        logger.debug(f"Published {event_type} event for chat {chat_id}")
        return True

    except Exception as e:
        logger.error(f"Failed to publish event: {e}")
        return False


def publish_chat_message(chat_id: int, event: MessageEvent) -> bool:
    """
    Publish a receive-message event.

    Called after a message has been stored.
    """
    return publish_event(
        chat_id=chat_id,
        event_type=RECEIVE_MESSAGE_EVENT,
        data=event.to_payload(),
    )


def decode_event(raw: bytes | str) -> tuple[str, dict[str, Any]] | None:
    """
    Turn a raw pub/sub message into (chat key, outgoing frame).

    The outgoing frame is {"type": ..., **data}. Returns None for
    messages that aren't valid chat events.
    """
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"Invalid JSON in Redis message: {e}")
        return None

    if not isinstance(payload, dict) or payload.get("chat_id") is None:
        return None

    frame = {"type": payload.get("type"), **(payload.get("data") or {})}
    return str(payload["chat_id"]), frame
