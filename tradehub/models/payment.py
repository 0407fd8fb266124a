"""
Payment data models for stored records.
"""
from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from .base import CamelModel

PaymentStatus = Literal["PENDING", "SUCCESS", "FAILED"]


class PaymentUserInfo(CamelModel):
    """Customer details sent to the gateway."""
    user_email: str = Field(..., min_length=1, description="Customer email")
    user_name: Optional[str] = Field(None, description="Customer display name")


class PaymentRecord(CamelModel):
    """Status of one payment, keyed by its reference."""
    reference: str = Field(..., description="Payment reference")
    amount: float = Field(..., allow_inf_nan=False, gt=0, description="Amount in major currency units")
    status: PaymentStatus = Field(default="PENDING")
    timestamp: datetime = Field(..., description="Initiation timestamp")
    user_info: PaymentUserInfo = Field(..., description="Customer snapshot at initiation")
    transaction_id: Optional[str] = Field(None, description="Gateway transaction ID")
    updated_at: Optional[datetime] = Field(None, description="Last callback timestamp")


class WebhookLogEntry(CamelModel):
    """One gateway callback as it reached the server."""
    id: str
    reference: Optional[str] = None
    payment_status: Optional[str] = None
    amount: Optional[float] = Field(None, allow_inf_nan=False)
    signature_valid: Optional[bool] = Field(None, description="None when no signature was checked")
    processed: bool = False
    processed_at: Optional[datetime] = None
    error_message: Optional[str] = None
    created_at: datetime
