"""
Payment API schemas for request/response validation.
"""
from typing import Literal, Optional

from pydantic import Field

from ..models.base import CamelModel
from ..models.payment import PaymentUserInfo


class PaymentInitRequest(CamelModel):
    """Checkout request forwarded to OPay. Required fields are checked by the service."""
    reference: Optional[str] = Field(None, description="Payment reference")
    amount: Optional[float] = Field(None, allow_inf_nan=False, description="Amount in major currency units")
    currency: Optional[str] = Field(None, description="Currency code, fixed by configuration")
    country: Optional[str] = Field(None, description="Country code, fixed by configuration")
    callback_url: Optional[str] = Field(None, description="Webhook URL for the gateway")
    return_url: Optional[str] = Field(None, description="Where the customer lands after paying")
    user_info: Optional[PaymentUserInfo] = Field(None, description="Customer details")


class PaymentInitData(CamelModel):
    cashier_url: str
    checkout_url: str
    reference: str


class PaymentCallbackPayload(CamelModel):
    """Webhook body posted by the gateway."""
    reference: str = Field(..., min_length=1)
    status: Literal["SUCCESS", "FAILED", "PENDING"]
    amount: Optional[float] = Field(None, allow_inf_nan=False)
    timestamp: Optional[str] = None
    transaction_id: Optional[str] = None
    message: Optional[str] = None


class PaymentStatusData(CamelModel):
    reference: str
    payment_status: str
    amount: float
    timestamp: str
