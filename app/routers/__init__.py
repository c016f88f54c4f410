# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - chats.py: Chat listing, message history and sending
# - commissioners.py: Commissioner management and login
# - orders.py: Commissioner-to-order assignment
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import chats
from . import commissioners
from . import orders

__all__ = [
    "health",
    "chats",
    "commissioners",
    "orders",
]
