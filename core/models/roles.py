# =============================================================================
# core/models/roles.py - Principal Roles
# =============================================================================
# Closed set of roles carried in access tokens. Anything outside this enum
# is rejected when the token is decoded.
# =============================================================================

from enum import Enum


class Role(str, Enum):
    """
    Role of an authenticated principal.

    - CLIENT: End customer who owns orders and chats
    - EMPLOYEE: Internal staff member assigned to chats
    - COMMISSIONER: Agent acting on behalf of one client
    - ADMIN: Administrative staff
    """
    CLIENT = "CLIENT"
    EMPLOYEE = "EMPLOYEE"
    COMMISSIONER = "COMMISSIONER"
    ADMIN = "ADMIN"


# Roles allowed to post into any chat regardless of participation
ADMINISTRATIVE_ROLES = frozenset({Role.ADMIN})
