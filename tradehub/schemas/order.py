"""
Order API schemas for request/response validation.
These models define the structure of data sent to and from the API.
"""
from typing import List, Optional

from pydantic import Field, field_validator

from ..models.base import CamelModel
from ..models.order import (
    Discount,
    OrderItemDocument,
    ShippingAddress,
    SHIPPING_METHODS,
    normalize_status,
)


# Request Schemas

class CreateOrderRequest(CamelModel):
    """Checkout submission. Totals left out are derived from the items."""
    items: List[OrderItemDocument] = Field(default_factory=list, max_length=50, description="Items in the order")
    subtotal: Optional[float] = Field(None, allow_inf_nan=False, ge=0)
    shipping: Optional[float] = Field(None, allow_inf_nan=False, ge=0)
    tax: Optional[float] = Field(None, allow_inf_nan=False, ge=0)
    total: Optional[float] = Field(None, allow_inf_nan=False, ge=0)
    shipping_address: Optional[ShippingAddress] = Field(None, description="Shipping address details")
    shipping_method: str = Field("standard", description="Shipping method")
    discount: Optional[Discount] = Field(None, description="Applied promo code")

    @field_validator("shipping_method")
    @classmethod
    def validate_shipping_method(cls, v):
        if v.lower() not in SHIPPING_METHODS:
            raise ValueError(f"Invalid shipping method. Must be one of: {list(SHIPPING_METHODS)}")
        return v.lower()


class UpdateOrderStatusRequest(CamelModel):
    """Request schema for updating order status."""
    status: str = Field(..., description="New order status")
    message: Optional[str] = Field(None, description="Reason for status change")

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        return normalize_status(v)


# Response Schemas

class OrderCreatedResponse(CamelModel):
    """Identifiers handed back after checkout."""
    id: str = Field(..., description="Created order ID")
    order_number: str = Field(..., description="Customer-facing order number")
    reference_id: str = Field(..., description="Payment reference")
    tracking_number: str = Field(..., description="Shipment tracking number")


class OrderSummaryResponse(CamelModel):
    """Simplified order row for the admin console."""
    id: str
    order_number: str
    customer_email: Optional[str] = None
    total: float
    status: str
    payment_status: Optional[str] = None
    created_at: str
