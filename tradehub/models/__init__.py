"""
Models package for stored document structures.
These models represent how data is held by the in-memory repositories.
"""
from .base import CamelModel
from .order import (
    OrderDocument,
    OrderItemDocument,
    ShippingAddress,
    Discount,
    OrderStatusHistory,
    ORDER_STATUSES,
    CANCELLABLE_STATUSES,
    SHIPPING_METHODS,
)
from .payment import PaymentRecord, PaymentUserInfo, PaymentStatus, WebhookLogEntry
from .admin import AdminUser, AdminRole, AuthPayload, ProductDocument, CarouselItem

__all__ = [
    "CamelModel",

    # Order models
    "OrderDocument",
    "OrderItemDocument",
    "ShippingAddress",
    "Discount",
    "OrderStatusHistory",
    "ORDER_STATUSES",
    "CANCELLABLE_STATUSES",
    "SHIPPING_METHODS",

    # Payment models
    "PaymentRecord",
    "PaymentUserInfo",
    "PaymentStatus",
    "WebhookLogEntry",

    # Admin models
    "AdminUser",
    "AdminRole",
    "AuthPayload",
    "ProductDocument",
    "CarouselItem",
]
