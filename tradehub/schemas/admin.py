"""
Admin console API schemas.
"""
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from ..models.admin import AdminRole, AdminUser, CarouselItem
from ..models.base import CamelModel
from ..models.order import normalize_status


class AdminLoginRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AdminLoginData(CamelModel):
    user: AdminUser
    token: str


class RefundRequest(CamelModel):
    payment_id: str = Field(..., min_length=1)
    order_id: Optional[str] = None
    amount: float = Field(..., allow_inf_nan=False, gt=0)
    reason: str = Field(..., min_length=1)


class RetryPaymentRequest(CamelModel):
    transaction_id: str = Field(..., min_length=1)


class AdminUpdateOrderStatusRequest(CamelModel):
    status: str
    note: Optional[str] = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v):
        return normalize_status(v)


class UpdateProductRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    price: Optional[float] = Field(None, allow_inf_nan=False, gt=0)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    in_stock: Optional[bool] = None
    featured: Optional[bool] = None


class UpdateCarouselRequest(CamelModel):
    items: List[CarouselItem] = Field(..., max_length=20)


class UpdateAdminUserRequest(CamelModel):
    role: Optional[AdminRole] = None
    status: Optional[Literal["active", "inactive"]] = None


class DashboardStats(CamelModel):
    total_orders: int
    total_revenue: float
    total_users: int
    pending_orders: int
    failed_payments: int
    inventory_alerts: int


class AnalyticsData(CamelModel):
    metric: str
    value: float
    category: Optional[str] = None
    period: Literal["daily", "weekly", "monthly"]
    date: str
