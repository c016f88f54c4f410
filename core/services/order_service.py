# =============================================================================
# core/services/order_service.py - Order Business Logic
# =============================================================================
# Links commissioners to orders through the order_commissioners join table.
# =============================================================================

import logging
from typing import Any

from lib.supabase_client import SupabaseClient
from lib.utils import parse_id
from app.exceptions import BadRequestError, CommissionerNotFoundError, OrderNotFoundError

logger = logging.getLogger(__name__)


class OrderService:
    """
    Service for order operations.

    Args:
        db: Persistence handle
    """

    def __init__(self, db: SupabaseClient):
        self.db = db

    def assign_commissioner(
        self,
        commissioner_id: int | str | None,
        order_id: int | str | None,
    ) -> dict[str, Any]:
        """
        Link a commissioner to an order.

        Assigning the same commissioner twice leaves a single link.

        Returns:
            The order row

        Raises:
            BadRequestError: If either ID is missing or malformed
            CommissionerNotFoundError: If the commissioner doesn't exist
            OrderNotFoundError: If the order doesn't exist
        """
        if commissioner_id in (None, "") or order_id in (None, ""):
            raise BadRequestError("Please provide commissionerId and orderId")

        commissioner_pk = parse_id(commissioner_id, "commissionerId")
        order_pk = parse_id(order_id, "orderId")

        if not self.db.fetch_one("commissioners", {"id": commissioner_pk}, columns="id"):
            raise CommissionerNotFoundError(commissioner_pk)

        order = self.db.fetch_one("orders", {"id": order_pk})
        if not order:
            raise OrderNotFoundError(order_pk)

        self.db.upsert(
            "order_commissioners",
            {"order_id": order_pk, "commissioner_id": commissioner_pk},
            on_conflict="order_id,commissioner_id",
        )
        logger.info(f"Assigned commissioner {commissioner_pk} to order {order_pk}")
        return order
