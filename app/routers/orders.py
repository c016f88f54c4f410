# =============================================================================
# app/routers/orders.py - Order Endpoints
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import get_current_user, AuthUser
from app.dependencies import OrderServiceDep
from core.models.commissioner import OrderAssignment

router = APIRouter()


@router.post("/assign-commissioner")
async def assign_commissioner_to_order(
    request: OrderAssignment,
    orders: OrderServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Assign a commissioner to an order.

    Assigning an already-linked commissioner is a no-op.
    """
    order = orders.assign_commissioner(request.commissioner_id, request.order_id)
    return {"message": "Commissioner assigned to order", "order": order}
