"""
Order data models for stored documents.
These represent the structure of orders held by the order repository.
"""
from datetime import datetime
from typing import List, Literal, Optional, Union

from pydantic import Field, field_validator

from .base import CamelModel

ORDER_STATUSES = ("pending", "processing", "shipped", "delivered", "cancelled")
CANCELLABLE_STATUSES = ("pending", "processing")
SHIPPING_METHODS = ("standard", "express", "overnight")


def normalize_status(value: str) -> str:
    if value.lower() not in ORDER_STATUSES:
        raise ValueError(f"Invalid status. Must be one of: {list(ORDER_STATUSES)}")
    return value.lower()


class OrderItemDocument(CamelModel):
    """Line item captured at the time of order."""
    id: Union[int, str] = Field(..., description="Product ID reference")
    name: str = Field(..., min_length=1, description="Product name at time of order")
    price: float = Field(..., allow_inf_nan=False, ge=0, description="Unit price at time of order")
    quantity: int = Field(..., gt=0, le=100, description="Quantity ordered")
    category: Optional[str] = Field(None, description="Product category")

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class ShippingAddress(CamelModel):
    """Shipping address and contact information."""
    first_name: Optional[str] = Field(None, description="Recipient first name")
    last_name: Optional[str] = Field(None, description="Recipient last name")
    email: Optional[str] = Field(None, description="Contact email")
    phone: Optional[str] = Field(None, description="Contact phone number")
    address: Optional[str] = Field(None, description="Street address")
    city: Optional[str] = Field(None, description="City")
    state: Optional[str] = Field(None, description="State/Province")
    zip_code: Optional[str] = Field(None, description="Postal/ZIP code")

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class Discount(CamelModel):
    """Promotional discount applied at checkout."""
    code: str = Field(..., min_length=1, description="Promo code")
    discount_type: Literal["percentage", "fixed"] = Field("fixed", description="How the code was applied")
    discount_amount: float = Field(..., allow_inf_nan=False, ge=0, description="Amount taken off the subtotal")


class OrderStatusHistory(CamelModel):
    """Order status change history."""
    status: str = Field(..., description="Status value")
    timestamp: datetime = Field(..., description="When status changed")
    message: str = Field(..., description="Reason for status change")


class OrderDocument(CamelModel):
    """
    Order document model representing a stored order.
    Status history is append-only; the current status mirrors its last entry.
    """
    id: str = Field(..., description="Order ID")
    order_number: str = Field(..., description="Customer-facing order number")
    reference_id: str = Field(..., description="Payment reference")
    tracking_number: str = Field(..., description="Shipment tracking number")
    items: List[OrderItemDocument] = Field(..., min_length=1, description="Order items")

    subtotal: float = Field(..., allow_inf_nan=False, ge=0)
    shipping: float = Field(..., allow_inf_nan=False, ge=0)
    tax: float = Field(..., allow_inf_nan=False, ge=0)
    total: float = Field(..., allow_inf_nan=False, ge=0)

    status: str = Field(default="pending", description="Order status")
    created_at: datetime = Field(..., description="Order creation timestamp")
    estimated_delivery: datetime = Field(..., description="Estimated delivery date")

    shipping_address: ShippingAddress = Field(..., description="Shipping address")
    shipping_method: str = Field(default="standard", description="Shipping method")
    discount: Optional[Discount] = Field(None, description="Applied discount")
    status_history: List[OrderStatusHistory] = Field(default_factory=list)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        return normalize_status(v)

    @property
    def is_cancellable(self) -> bool:
        return self.status in CANCELLABLE_STATUSES

    def record_status(self, status: str, message: str, timestamp: datetime) -> OrderStatusHistory:
        """Set the current status and append it to the history."""
        self.status = normalize_status(status)
        entry = OrderStatusHistory(status=self.status, timestamp=timestamp, message=message)
        self.status_history.append(entry)
        return entry
