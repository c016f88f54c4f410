# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .chat_service import ChatService
from .commissioner_service import CommissionerService
from .order_service import OrderService

__all__ = [
    "ChatService",
    "CommissionerService",
    "OrderService",
]
