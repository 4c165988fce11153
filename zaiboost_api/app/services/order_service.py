"""
Business logic for boosting orders.

Customers create orders for themselves; only admins change them
afterwards, and only their ``status`` and ``current_value``.  Listings
join each order with its catalog service and owner by linear lookup,
which is fine for a memory-resident ledger.

The order total is taken from the client as the price the customer was
shown.  It is not recomputed; a total that differs from the catalog
quote is logged and stored anyway.
"""

import logging
from typing import Any, Dict, List

from ..core.crypto import decrypt_secret, encrypt_secret
from ..core.errors import NotFound
from ..core.store import get_ledger
from ..models import Order, OrderUpdate
from ..schemas.order import OrderAdminRead, OrderCreate, OrderRead

logger = logging.getLogger(__name__)


def _newest_first(orders: List[Order]) -> List[Order]:
    return sorted(orders, key=lambda o: (o.created_at, o.id), reverse=True)


class OrderService:
    """Service for creating, listing and updating orders."""

    @classmethod
    async def create_order(cls, data: OrderCreate, current_user: Dict[str, Any]) -> Order:
        """Create a pending order owned by ``current_user``.

        Raises ``NotFound`` if the referenced service does not exist.
        """
        ledger = get_ledger()
        service = ledger.get_service(data.service_id)
        if service is None:
            raise NotFound("Service not found")

        quoted = service.quote(data.start_value, data.target_value)
        if data.total_price is None:
            total_price = quoted
        else:
            total_price = data.total_price
            if total_price != quoted:
                logger.warning(
                    "Order total %s from user %s differs from catalog quote %s for service %s",
                    total_price,
                    current_user.get("id"),
                    quoted,
                    service.id,
                )

        order = ledger.add_order(
            user_id=current_user["id"],
            service_id=service.id,
            game=data.game or service.game,
            uid=data.uid,
            server=data.server,
            game_username=data.game_username,
            game_password=encrypt_secret(data.game_password),
            total_price=total_price,
            status="pending",
            start_value=data.start_value,
            current_value=data.start_value,
            target_value=data.target_value,
            notes=data.notes,
        )
        logger.info("Order %s created by user %s for service %s", order.id, order.user_id, service.id)
        return order

    @classmethod
    async def list_user_orders(cls, user_id: int) -> List[OrderRead]:
        """Orders owned by ``user_id``, newest first, without credentials."""
        ledger = get_ledger()
        result = []
        for order in _newest_first(ledger.list_orders(user_id=user_id)):
            service = ledger.get_service(order.service_id)
            result.append(
                OrderRead(
                    **order.model_dump(exclude={"game_password"}),
                    service_name=service.name if service else None,
                    service_category=service.category if service else None,
                )
            )
        return result

    @classmethod
    async def list_all_orders(cls) -> List[OrderAdminRead]:
        """Every order, newest first, with owner and decrypted game password."""
        ledger = get_ledger()
        result = []
        for order in _newest_first(ledger.list_orders()):
            service = ledger.get_service(order.service_id)
            user = ledger.get_user(order.user_id)
            result.append(
                OrderAdminRead(
                    **order.model_dump(exclude={"game_password"}),
                    service_name=service.name if service else None,
                    service_category=service.category if service else None,
                    username=user.username if user else None,
                    game_password=decrypt_secret(order.game_password) if order.game_password else None,
                )
            )
        return result

    @classmethod
    async def update_order(cls, order_id: int, update: OrderUpdate) -> Order:
        """Apply an admin update.  Raises ``NotFound`` for unknown ids.

        Orders that are already completed or cancelled can still be
        changed so that admins can correct mistakes; such edits are logged.
        """
        ledger = get_ledger()
        existing = ledger.get_order(order_id)
        if existing is None:
            raise NotFound("Order not found")
        if existing.is_terminal:
            logger.info(
                "Order %s is %s but is being updated: %s",
                order_id,
                existing.status,
                update.model_dump(exclude_none=True),
            )
        order = ledger.update_order(order_id, update)
        if order is None:
            raise NotFound("Order not found")
        logger.info("Order %s updated: status=%s current_value=%s", order.id, order.status, order.current_value)
        return order
