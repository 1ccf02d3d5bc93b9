from typing import Any, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shared.observability.metrics import shop_orders_total

from .models import Order
from .repository import OrderRepository
from .schemas import OrderCreate

logger = structlog.get_logger(__name__)


def items_total(items: list[dict[str, Any]]) -> Optional[int]:
    """Sum of price * quantity over the line items, or None if any item lacks them."""
    total = 0
    for item in items:
        price, quantity = item.get("price"), item.get("quantity")
        if not isinstance(price, (int, float)) or not isinstance(quantity, (int, float)):
            return None
        total += price * quantity
    return int(total)


class OrderService:
    @staticmethod
    async def create_order(db: AsyncSession, data: OrderCreate) -> Order:
        # The client total is stored as sent; a disagreeing line-item sum is only logged.
        computed = items_total(data.items)
        if computed is not None and computed != data.total:
            logger.warning("order_total_mismatch", client_total=data.total, items_total=computed)

        order = Order(
            customer_name=data.customer.name,
            customer_phone=data.customer.phone,
            customer_address=data.customer.address,
            note=data.customer.note or "",
            items=data.items,
            total=data.total,
            order_date=data.order_date,
            status="pending",
        )
        order = await OrderRepository.create_order(db, order)
        shop_orders_total.inc()
        logger.info("order_placed", order_id=order.id, total=order.total, item_count=len(order.items))
        return order
