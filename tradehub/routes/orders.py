"""
Storefront order routes.
"""
import logging
from typing import Literal

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, PlainTextResponse

from ..schemas.order import CreateOrderRequest, OrderCreatedResponse, UpdateOrderStatusRequest
from ..services.invoice import InvoiceGenerator
from ..services.orders import OrderService
from ..utils.dependencies import get_invoice_generator, get_order_service
from ..utils.errors import AppError, InternalError
from ..utils.serializers import serialize_docs, success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.post("", status_code=201)
async def create_order(order: CreateOrderRequest, service: OrderService = Depends(get_order_service)):
    """Create a new order from a checkout submission"""
    try:
        created = await service.create_order(order)
        identifiers = OrderCreatedResponse(
            id=created.id,
            order_number=created.order_number,
            reference_id=created.reference_id,
            tracking_number=created.tracking_number,
        )
        return success_response(identifiers, message="Order created successfully")
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to create order: {str(e)}")
        raise InternalError("Failed to create order")


@router.get("")
async def list_orders(service: OrderService = Depends(get_order_service)):
    """Get all orders"""
    try:
        orders = await service.list_orders()
        return success_response(serialize_docs(orders), count=len(orders))
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch orders: {str(e)}")
        raise InternalError("Failed to retrieve orders")


@router.get("/{order_id}")
async def get_order(order_id: str, service: OrderService = Depends(get_order_service)):
    """Get a specific order by ID"""
    try:
        order = await service.get_order(order_id)
        return success_response(order)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch order {order_id}: {str(e)}")
        raise InternalError("Failed to retrieve order")


@router.get("/{order_id}/invoice")
async def get_order_invoice(
    order_id: str,
    format: Literal["html", "text"] = Query("html", description="Invoice format"),
    service: OrderService = Depends(get_order_service),
    invoices: InvoiceGenerator = Depends(get_invoice_generator),
):
    """Render the invoice for an order"""
    try:
        order = await service.get_order(order_id)
        if format == "text":
            return PlainTextResponse(invoices.generate_plain_text(order))
        return HTMLResponse(invoices.generate_html(order))
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to render invoice for {order_id}: {str(e)}")
        raise InternalError("Failed to render invoice")


@router.patch("/{order_id}/status")
async def update_order_status(
    order_id: str,
    status_update: UpdateOrderStatusRequest,
    service: OrderService = Depends(get_order_service),
):
    """Update order status"""
    try:
        order = await service.update_status(order_id, status_update.status, status_update.message)
        return success_response(order, message="Order status updated")
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to update order status {order_id}: {str(e)}")
        raise InternalError("Failed to update order status")


@router.delete("/{order_id}")
async def cancel_order(order_id: str, service: OrderService = Depends(get_order_service)):
    """Cancel an order. Orders are never physically deleted."""
    try:
        order = await service.cancel_order(order_id)
        return success_response(order, message="Order cancelled successfully")
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Failed to cancel order {order_id}: {str(e)}")
        raise InternalError("Failed to cancel order")
