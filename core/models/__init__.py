# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - roles.py: Closed set of principal roles
# - chat.py: Message request/response and real-time event schemas
# - commissioner.py: Commissioner and order-assignment schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .roles import ADMINISTRATIVE_ROLES, Role

from .chat import (
    RECEIVE_MESSAGE_EVENT,
    MessageCreate,
    MessageEvent,
    MessageResponse,
)

from .commissioner import (
    CommissionerCreate,
    CommissionerLogin,
    CommissionerResponse,
    CommissionerUpdate,
    OrderAssignment,
)

__all__ = [
    # Roles
    "ADMINISTRATIVE_ROLES",
    "Role",
    # Chat
    "RECEIVE_MESSAGE_EVENT",
    "MessageCreate",
    "MessageEvent",
    "MessageResponse",
    # Commissioner
    "CommissionerCreate",
    "CommissionerLogin",
    "CommissionerResponse",
    "CommissionerUpdate",
    "OrderAssignment",
]
