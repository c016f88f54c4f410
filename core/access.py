# =============================================================================
# core/access.py - Chat & Commissioner Access Rules
# =============================================================================
# Pure decision functions used by the services:
# - can_read_chat / can_send_message: chat participation rules
# - owns_commissioner: commissioner ownership rule
# - ensure_*: same checks, raising ForbiddenError on DENY
#
# Nothing here touches the database; callers load the ids and pass them in.
#
# Note: commissioners of the chat's client may read a chat but may not send
# into it. Sending is limited to the chat's client, its employee and
# administrative roles.
# =============================================================================

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from app.exceptions import ForbiddenError
from core.models.roles import ADMINISTRATIVE_ROLES, Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatParticipants:
    """
    Everything the chat rules need to know about one chat.

    commissioner_ids is the commissioner set of the chat's client.
    """

    chat_id: int
    client_id: int
    employee_id: int
    commissioner_ids: frozenset[int] = field(default_factory=frozenset)


def can_read_chat(
    principal_id: int,
    role: Role,
    participants: ChatParticipants,
) -> bool:
    """
    The chat's client, its employee, or one of the client's commissioners.

    Clients, employees and commissioners live in separate tables, so the id
    is only compared with the field belonging to the principal's role.
    """
    if role == Role.CLIENT:
        return principal_id == participants.client_id
    if role == Role.EMPLOYEE:
        return principal_id == participants.employee_id
    if role == Role.COMMISSIONER:
        return principal_id in participants.commissioner_ids
    return False


def can_send_message(
    principal_id: int,
    role: Role,
    participants: ChatParticipants,
) -> bool:
    """Administrative role, or the chat's client or employee."""
    if role in ADMINISTRATIVE_ROLES:
        return True
    if role == Role.CLIENT:
        return principal_id == participants.client_id
    if role == Role.EMPLOYEE:
        return principal_id == participants.employee_id
    return False


def owns_commissioner(commissioner_ids: Iterable[int], commissioner_id: int) -> bool:
    """True when commissioner_id is in the client's commissioner set."""
    return commissioner_id in set(commissioner_ids)


def ensure_can_read_chat(
    principal_id: int,
    role: Role,
    participants: ChatParticipants,
) -> None:
    """
    Raise ForbiddenError unless the principal may read the chat.
    """
    if not can_read_chat(principal_id, role, participants):
        logger.warning(
            f"Denied read of chat {participants.chat_id} to principal "
            f"{principal_id} ({role.value})"
        )
        raise ForbiddenError(
            "You do not have access to this chat",
            details={"chat_id": participants.chat_id},
        )


def ensure_can_send_message(
    principal_id: int,
    role: Role,
    participants: ChatParticipants,
) -> None:
    """
    Raise ForbiddenError unless the principal may post into the chat.
    """
    if not can_send_message(principal_id, role, participants):
        logger.warning(
            f"Denied send to chat {participants.chat_id} for principal "
            f"{principal_id} ({role.value})"
        )
        raise ForbiddenError(
            "You are not authorized to send messages in this chat",
            details={"chat_id": participants.chat_id},
        )


def ensure_owns_commissioner(
    client_id: int,
    commissioner_ids: Iterable[int],
    commissioner_id: int,
) -> None:
    """
    Raise ForbiddenError unless the client manages the commissioner.
    """
    if not owns_commissioner(commissioner_ids, commissioner_id):
        logger.warning(
            f"Client {client_id} tried to modify commissioner {commissioner_id}"
        )
        raise ForbiddenError(
            "You are not authorized to modify this commissioner",
            details={"commissioner_id": commissioner_id},
        )
