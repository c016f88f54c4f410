# =============================================================================
# core/services/chat_service.py - Chat Business Logic
# =============================================================================
# Handles chat listing, message history and message sending.
# Separates HTTP concerns from database/business logic.
#
# Access rules live in core/access.py; this service loads the ids those
# rules need and calls them before touching messages.
# =============================================================================

import logging
from collections.abc import Callable
from typing import Any

from lib.supabase_client import SupabaseClient
from lib.utils import is_blank
from app.auth.models import AuthUser
from app.exceptions import BadRequestError, ChatNotFoundError, NotFoundError
from core.access import ChatParticipants, ensure_can_read_chat, ensure_can_send_message
from core.models.chat import MessageEvent
from core.models.roles import Role

logger = logging.getLogger(__name__)

# Relation embeds (PostgREST select syntax)
CLIENT_VIEW_COLUMNS = "*, service_item:service_items(name), employee:employees(name, email)"
EMPLOYEE_VIEW_COLUMNS = "*, service_item:service_items(name), client:clients(name, email)"
ADMIN_VIEW_COLUMNS = (
    "*, service_item:service_items(name), "
    "client:clients(name, email), employee:employees(name, email)"
)

# Publishes a stored message to real-time listeners; returns False on failure
MessagePublisher = Callable[[int, MessageEvent], bool]


class ChatService:
    """
    Service for chat and message operations.

    Args:
        db: Persistence handle
        publish: Optional real-time publisher called after a message is stored
    """

    def __init__(self, db: SupabaseClient, publish: MessagePublisher | None = None):
        self.db = db
        self.publish = publish

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_chat(self, chat_id: int) -> dict[str, Any]:
        """
        Raises:
            ChatNotFoundError: If the chat doesn't exist
        """
        chat = self.db.fetch_one("chats", {"id": chat_id})
        if not chat:
            raise ChatNotFoundError(chat_id)
        return chat

    def client_commissioner_ids(self, client_id: int) -> frozenset[int]:
        """IDs of every commissioner the client has delegated to."""
        rows = self.db.fetch_many("commissioners", {"client_id": client_id}, columns="id")
        return frozenset(row["id"] for row in rows)

    def load_participants(self, chat_id: int) -> ChatParticipants:
        """
        Load the chat and its client's commissioner set.

        Raises:
            ChatNotFoundError: If the chat doesn't exist
        """
        chat = self.get_chat(chat_id)
        return ChatParticipants(
            chat_id=chat["id"],
            client_id=chat["client_id"],
            employee_id=chat["employee_id"],
            commissioner_ids=self.client_commissioner_ids(chat["client_id"]),
        )

    # -------------------------------------------------------------------------
    # Chats
    # -------------------------------------------------------------------------

    def list_chats_for_user(self, user: AuthUser) -> list[dict[str, Any]]:
        """
        List the chats visible to the current principal.

        - CLIENT: chats they own, with employee contact details
        - EMPLOYEE: chats assigned to them, with client contact details
        - COMMISSIONER: chats of the client they act for
        - ADMIN: every chat

        Raises:
            NotFoundError: If the principal's record doesn't exist
        """
        if user.role == Role.ADMIN:
            return self.list_all_chats()

        if user.role == Role.CLIENT:
            self._require_record("clients", user.user_id)
            return self.db.fetch_many(
                "chats",
                {"client_id": user.user_id},
                columns=CLIENT_VIEW_COLUMNS,
            )

        if user.role == Role.EMPLOYEE:
            self._require_record("employees", user.user_id)
            return self.db.fetch_many(
                "chats",
                {"employee_id": user.user_id},
                columns=EMPLOYEE_VIEW_COLUMNS,
            )

        commissioner = self._require_record("commissioners", user.user_id)
        return self.db.fetch_many(
            "chats",
            {"client_id": commissioner["client_id"]},
            columns=CLIENT_VIEW_COLUMNS,
        )

    def list_all_chats(self) -> list[dict[str, Any]]:
        """Every chat with service item, client and employee embedded."""
        return self.db.fetch_many("chats", columns=ADMIN_VIEW_COLUMNS)

    def list_chats_by_user_id(self, user_id: int) -> list[dict[str, Any]]:
        """Chats where the user is either the client or the employee."""
        return self.db.fetch_many(
            "chats",
            any_of=f"client_id.eq.{user_id},employee_id.eq.{user_id}",
        )

    # -------------------------------------------------------------------------
    # Messages
    # -------------------------------------------------------------------------

    def list_messages(self, chat_id: int, user: AuthUser) -> list[dict[str, Any]]:
        """
        Messages of a chat, oldest first.

        Raises:
            ChatNotFoundError: If the chat doesn't exist
            ForbiddenError: If the principal may not read the chat
        """
        participants = self.load_participants(chat_id)
        ensure_can_read_chat(user.user_id, user.role, participants)

        return self.db.fetch_many(
            "messages",
            {"chat_id": chat_id},
            order_by="created_at",
        )

    def send_message(
        self,
        chat_id: int,
        user: AuthUser,
        content: str | None,
    ) -> dict[str, Any]:
        """
        Store a message and publish it to real-time listeners.

        Publishing is best-effort; a failed publish does not fail the send.

        Raises:
            ChatNotFoundError: If the chat doesn't exist
            ForbiddenError: If the principal may not send into the chat
            BadRequestError: If content is blank
        """
        chat = self.get_chat(chat_id)
        participants = ChatParticipants(
            chat_id=chat["id"],
            client_id=chat["client_id"],
            employee_id=chat["employee_id"],
        )
        ensure_can_send_message(user.user_id, user.role, participants)

        if is_blank(content):
            raise BadRequestError("Please provide message content")

        message = self.db.insert(
            "messages",
            {"chat_id": chat_id, "sender": user.user_id, "content": content},
        )
        logger.info(f"Stored message {message.get('id')} in chat {chat_id}")

        if self.publish is not None:
            event = MessageEvent(
                chat_id=chat_id,
                content=message.get("content", content),
                sender=user.user_id,
                created_at=message.get("created_at"),
            )
            if not self.publish(chat_id, event):
                logger.warning(f"Real-time publish failed for chat {chat_id}")

        return message

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _require_record(self, table: str, record_id: int) -> dict[str, Any]:
        record = self.db.fetch_one(table, {"id": record_id})
        if not record:
            raise NotFoundError("User not found", details={"user_id": record_id})
        return record
