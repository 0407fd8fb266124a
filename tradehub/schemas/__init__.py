"""
Schemas package for API request/response validation.
"""
from .common import HealthCheckResponse, RootResponse, ErrorResponse
from .order import CreateOrderRequest, UpdateOrderStatusRequest, OrderCreatedResponse, OrderSummaryResponse
from .payment import PaymentInitRequest, PaymentInitData, PaymentCallbackPayload, PaymentStatusData
from .admin import (
    AdminLoginRequest,
    AdminLoginData,
    RefundRequest,
    RetryPaymentRequest,
    AdminUpdateOrderStatusRequest,
    UpdateProductRequest,
    UpdateCarouselRequest,
    UpdateAdminUserRequest,
    DashboardStats,
    AnalyticsData,
)

__all__ = [
    # Common schemas
    "HealthCheckResponse",
    "RootResponse",
    "ErrorResponse",

    # Order schemas
    "CreateOrderRequest",
    "UpdateOrderStatusRequest",
    "OrderCreatedResponse",
    "OrderSummaryResponse",

    # Payment schemas
    "PaymentInitRequest",
    "PaymentInitData",
    "PaymentCallbackPayload",
    "PaymentStatusData",

    # Admin schemas
    "AdminLoginRequest",
    "AdminLoginData",
    "RefundRequest",
    "RetryPaymentRequest",
    "AdminUpdateOrderStatusRequest",
    "UpdateProductRequest",
    "UpdateCarouselRequest",
    "UpdateAdminUserRequest",
    "DashboardStats",
    "AnalyticsData",
]
