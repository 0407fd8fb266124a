"""
Order lifecycle: checkout, lookup, status updates and cancellation.
"""
import logging
import math
import random
import string
import threading
import time
from datetime import datetime, timedelta, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from ..models.order import OrderDocument
from ..repositories.orders import OrderRepository
from ..schemas.order import CreateOrderRequest
from ..utils.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_TAX_RATE = 0.075
DEFAULT_DELIVERY_DAYS = 7

_BASE36 = string.digits + string.ascii_lowercase


def _random_token(length: int = 9) -> str:
    return "".join(random.choices(_BASE36, k=length))


_last_ms = 0
_clock_lock = threading.Lock()


def _next_ms() -> int:
    """Millisecond timestamp, bumped so no two calls in this process share one."""
    global _last_ms
    with _clock_lock:
        _last_ms = max(int(time.time() * 1000), _last_ms + 1)
        return _last_ms


def generate_order_identifiers() -> dict:
    """
    Generate the four identifiers of a new order.

    Timestamp plus random suffix; unique within one process, not across
    processes or restarts.
    """
    ms = _next_ms()
    return {
        "id": f"order_{ms}_{_random_token()}",
        "order_number": f"ORD-{ms}",
        "reference_id": f"REF-{ms}",
        "tracking_number": f"TRK-{ms}-{_random_token().upper()}",
    }


def _round_currency(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_totals(request: CreateOrderRequest, tax_rate: float = DEFAULT_TAX_RATE) -> dict:
    """Fill in whichever of subtotal/shipping/tax/total the client left out."""
    subtotal = request.subtotal
    if subtotal is None:
        subtotal = sum(item.line_total for item in request.items)

    discount = request.discount.discount_amount if request.discount else 0.0
    taxable = max(subtotal - discount, 0.0)

    shipping = request.shipping if request.shipping is not None else 0.0
    if not math.isfinite(taxable * tax_rate + shipping):
        raise ValidationError("Order totals are out of range")

    tax = request.tax if request.tax is not None else _round_currency(taxable * tax_rate)
    total = request.total if request.total is not None else taxable + shipping + tax
    if not math.isfinite(total):
        raise ValidationError("Order totals are out of range")

    return {"subtotal": subtotal, "shipping": shipping, "tax": tax, "total": total}


class OrderService:
    """Validates and mutates orders held by an OrderRepository."""

    def __init__(
        self,
        repository: OrderRepository,
        tax_rate: float = DEFAULT_TAX_RATE,
        delivery_days: int = DEFAULT_DELIVERY_DAYS,
    ):
        self.repository = repository
        self.tax_rate = tax_rate
        self.delivery_days = delivery_days

    async def create_order(self, request: CreateOrderRequest) -> OrderDocument:
        if request.shipping_address is None:
            logger.warning("Order creation failed - missing shipping address")
            raise ValidationError("Items and shipping address are required")
        if not request.items:
            logger.warning("Order creation failed - no items in order")
            raise ValidationError("Order must contain at least one item")

        now = datetime.now(timezone.utc)
        order = OrderDocument(
            **generate_order_identifiers(),
            **compute_totals(request, self.tax_rate),
            items=request.items,
            status="pending",
            created_at=now,
            estimated_delivery=now + timedelta(days=self.delivery_days),
            shipping_address=request.shipping_address,
            shipping_method=request.shipping_method,
            discount=request.discount,
        )
        order.record_status("pending", "Order created and awaiting payment", now)

        await self.repository.add(order)
        logger.info(
            f"Order created: {order.order_number} (ID: {order.id}, items: {len(order.items)}, "
            f"total: {order.total}, email: {order.shipping_address.email})"
        )
        return order

    async def get_order(self, order_id: str) -> OrderDocument:
        order = await self.repository.get(order_id)
        if order is None:
            logger.warning(f"Order not found: {order_id}")
            raise NotFoundError("Order not found")
        return order

    async def list_orders(self, status: Optional[str] = None) -> List[OrderDocument]:
        # TODO: scope to the authenticated customer once storefront accounts exist
        orders = await self.repository.list()
        if status:
            orders = [o for o in orders if o.status == status.lower()]
        return sorted(orders, key=lambda o: o.created_at, reverse=True)

    async def update_status(self, order_id: str, status: str, message: Optional[str] = None) -> OrderDocument:
        """Overwrite the status and append to history. Any transition is accepted."""
        order = await self.get_order(order_id)
        order.record_status(
            status,
            message or f"Order status updated to {status}",
            datetime.now(timezone.utc),
        )
        await self.repository.save(order)
        logger.info(f"Order status updated: {order.order_number} -> {order.status}")
        return order

    async def cancel_order(self, order_id: str) -> OrderDocument:
        order = await self.get_order(order_id)
        if not order.is_cancellable:
            logger.warning(f"Cannot cancel order {order_id} with status {order.status}")
            raise ValidationError(
                f"Cannot cancel order with status: {order.status}",
                details={"orderId": order_id, "currentStatus": order.status},
            )

        order.record_status("cancelled", "Order cancelled by user", datetime.now(timezone.utc))
        await self.repository.save(order)
        logger.info(f"Order cancelled: {order.order_number}")
        return order
