"""
Order endpoints for API v1.

Customers place orders and read their own; admins read every order
(with decrypted game passwords) and update status and progress.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from zaiboost_api.app.core.security import get_current_user, require_admin
from zaiboost_api.app.models import OrderUpdate
from zaiboost_api.app.schemas.order import OrderAdminRead, OrderCreate, OrderCreated, OrderRead
from zaiboost_api.app.services.order_service import OrderService

router = APIRouter()


@router.post("", response_model=OrderCreated, status_code=status.HTTP_201_CREATED)
async def create_order(
    data: OrderCreate,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> OrderCreated:
    """Place an order for the signed-in user."""
    order = await OrderService.create_order(data, current_user)
    return OrderCreated(id=order.id)


@router.get("/admin", response_model=List[OrderAdminRead])
async def list_all_orders(current_user: Dict[str, Any] = Depends(require_admin)) -> List[OrderAdminRead]:
    """All orders with owner usernames and decrypted game passwords."""
    return await OrderService.list_all_orders()


@router.get("/user/{user_id}", response_model=List[OrderRead])
async def list_user_orders(
    user_id: int,
    current_user: Dict[str, Any] = Depends(get_current_user),
) -> List[OrderRead]:
    """Orders of one user.  Only that user or an admin may read them."""
    if current_user.get("role") != "admin" and current_user.get("id") != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return await OrderService.list_user_orders(user_id)


@router.patch("/{order_id}")
async def update_order(
    order_id: int,
    update: OrderUpdate,
    current_user: Dict[str, Any] = Depends(require_admin),
) -> Dict[str, bool]:
    """Change an order's status and/or current progress value."""
    await OrderService.update_order(order_id, update)
    return {"success": True}
