"""
OPay payment integration.

Initiation either synthesizes a sandbox cashier URL (demo mode) or calls the
gateway's initialize endpoint (production mode). Gateway callbacks update the
payment record that shares their reference; the order with the same
reference is left alone.
"""
import hashlib
import hmac
import json
import logging
import math
import uuid
from datetime import datetime, timezone
from typing import List, Optional
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError as PydanticValidationError

from ..config.payment import PaymentConfig
from ..models.payment import PaymentRecord, WebhookLogEntry
from ..repositories.payments import PaymentRepository
from ..schemas.payment import (
    PaymentCallbackPayload,
    PaymentInitData,
    PaymentInitRequest,
    PaymentStatusData,
)
from ..utils.errors import (
    AuthenticationError,
    NotFoundError,
    PaymentInitializationError,
    ValidationError,
)
from ..utils.serializers import serialize_doc

logger = logging.getLogger(__name__)

INITIALIZE_PATH = "/api/v1/international/transaction/initialize"


def to_minor_units(amount: float) -> int:
    """Convert major currency units to the gateway's minor units (kobo)."""
    return int(round(amount * 100))


def format_amount(amount: float) -> str:
    """Render 5000.0 as "5000" and 99.5 as "99.5"."""
    return str(int(amount)) if float(amount).is_integer() else str(amount)


def sign_payload(secret: str, body: bytes) -> str:
    """Hex HMAC-SHA256 of a raw request body."""
    return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


def verify_signature(secret: str, body: bytes, signature: str) -> bool:
    """Compare a webhook signature against the HMAC of the raw body."""
    try:
        expected = sign_payload(secret, body)
        return hmac.compare_digest(expected, signature.strip().lower())
    except (TypeError, ValueError) as e:
        logger.error(f"Signature verification error: {e}")
        return False


class PaymentService:
    """Payment initiation, webhook handling and status lookup."""

    def __init__(
        self,
        repository: PaymentRepository,
        config: PaymentConfig,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.repository = repository
        self.config = config
        self.http_client = http_client

    async def initiate_payment(self, request: PaymentInitRequest) -> PaymentInitData:
        """
        Record a PENDING payment and return the checkout URL for it.

        Args:
            request: Reference, amount and customer details

        Returns:
            Cashier/checkout URL and the reference

        Raises:
            ValidationError: If reference, amount or user info is missing, or amount is not
                a positive, representable number
            PaymentInitializationError: If the gateway rejects the request or is unreachable
        """
        if not request.reference or request.amount is None or request.user_info is None:
            logger.warning(
                f"Missing required payment fields (reference: {bool(request.reference)}, "
                f"amount: {request.amount is not None}, userInfo: {request.user_info is not None})"
            )
            raise ValidationError("Missing required fields")

        if request.amount <= 0:
            logger.warning(f"Invalid payment amount: {request.amount}")
            raise ValidationError("Amount must be greater than 0")

        if not math.isfinite(request.amount * 100):
            logger.warning(f"Payment amount out of range: {request.amount}")
            raise ValidationError("Amount is out of range")

        # A repeated reference replaces the earlier record
        record = PaymentRecord(
            reference=request.reference,
            amount=request.amount,
            status="PENDING",
            timestamp=datetime.now(timezone.utc),
            user_info=request.user_info,
        )
        await self.repository.save(record)
        logger.info(
            f"Payment initialization started: {request.reference} "
            f"(amount: {request.amount}, email: {request.user_info.user_email})"
        )

        if not self.config.is_production:
            checkout_url = self.build_demo_checkout_url(request)
            logger.info(f"Demo payment URL generated: {request.reference}")
            return PaymentInitData(cashier_url=checkout_url, checkout_url=checkout_url, reference=request.reference)

        return await self._initialize_with_gateway(request)

    def build_demo_checkout_url(self, request: PaymentInitRequest) -> str:
        query = urlencode({
            "reference": request.reference,
            "amount": format_amount(request.amount),
            "email": request.user_info.user_email,
        })
        return f"{self.config.demo_cashier_url}?{query}"

    async def _initialize_with_gateway(self, request: PaymentInitRequest) -> PaymentInitData:
        body = {
            "reference": request.reference,
            "amount": to_minor_units(request.amount),
            "currency": self.config.currency,
            "country": self.config.country,
            "callbackUrl": request.callback_url,
            "returnUrl": request.return_url,
            "userInfo": serialize_doc(request.user_info),
        }
        headers = {
            "Authorization": f"Bearer {self.config.opay_secret_key}",
            "Content-Type": "application/json",
        }
        url = f"{self.config.opay_api_url.rstrip('/')}{INITIALIZE_PATH}"

        try:
            if self.http_client is not None:
                response = await self.http_client.post(url, json=body, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.config.timeout_seconds) as client:
                    response = await client.post(url, json=body, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"OPay API error for {request.reference}: {e}")
            raise PaymentInitializationError(
                "Failed to initialize payment with OPay",
                details={"reference": request.reference},
            ) from e

        if not response.is_success:
            logger.error(
                f"OPay API error for {request.reference}: {response.status_code} {response.text[:500]}"
            )
            raise PaymentInitializationError(
                "Failed to initialize payment with OPay",
                details={"reference": request.reference, "gatewayStatus": response.status_code},
            )

        try:
            data = response.json().get("data") or {}
        except (ValueError, AttributeError) as e:
            logger.error(f"OPay returned an unreadable body for {request.reference}: {e}")
            raise PaymentInitializationError(
                "Failed to initialize payment with OPay",
                details={"reference": request.reference},
            ) from e

        cashier_url = data.get("cashierUrl") or data.get("checkoutUrl")
        if not cashier_url:
            logger.error(f"OPay response for {request.reference} has no cashier URL")
            raise PaymentInitializationError(
                "Failed to initialize payment with OPay",
                details={"reference": request.reference},
            )

        logger.info(f"OPay payment URL generated: {request.reference}")
        return PaymentInitData(
            cashier_url=cashier_url,
            checkout_url=data.get("checkoutUrl") or cashier_url,
            reference=data.get("reference") or request.reference,
        )

    async def handle_callback(self, raw_body: bytes, signature: Optional[str]) -> PaymentCallbackPayload:
        """
        Apply a gateway webhook to the matching payment record.

        In production a present signature must match the HMAC of the raw
        body; an absent one is accepted unverified. Demo mode never checks.
        An unknown reference is logged and acknowledged. Replays simply
        overwrite the status again.
        """
        now = datetime.now(timezone.utc)
        entry = WebhookLogEntry(id=f"webhook-{uuid.uuid4().hex[:12]}", created_at=now)

        try:
            payload = PaymentCallbackPayload.model_validate_json(raw_body)
        except PydanticValidationError as e:
            entry.error_message = "Malformed callback payload"
            await self.repository.log_webhook(entry)
            logger.warning(f"Malformed payment callback: {e.error_count()} error(s)")
            raise ValidationError(
                "Invalid callback payload",
                details={"errors": json.loads(e.json(include_url=False))},
            ) from e

        entry.reference = payload.reference
        entry.payment_status = payload.status
        entry.amount = payload.amount
        logger.info(f"Payment callback received: {payload.reference} ({payload.status})")

        if self.config.is_production and signature:
            entry.signature_valid = verify_signature(self.config.opay_secret_key, raw_body, signature)
            if not entry.signature_valid:
                entry.error_message = "Invalid webhook signature"
                await self.repository.log_webhook(entry)
                logger.warning(f"Invalid OPay signature for {payload.reference}")
                raise AuthenticationError("Invalid webhook signature")
        elif self.config.is_production:
            logger.warning(f"Unsigned payment callback accepted: {payload.reference}")

        record = await self.repository.get(payload.reference)
        if record is None:
            logger.warning(f"Payment record not found for callback: {payload.reference}")
            entry.error_message = "Payment record not found"
        else:
            record.status = payload.status
            record.updated_at = now
            if payload.transaction_id:
                record.transaction_id = payload.transaction_id
            await self.repository.save(record)
            logger.info(f"Payment record updated: {payload.reference} -> {payload.status}")

        entry.processed = True
        entry.processed_at = now
        await self.repository.log_webhook(entry)
        return payload

    async def get_record(self, reference: str) -> Optional[PaymentRecord]:
        return await self.repository.get(reference)

    async def get_payment_status(self, reference: str) -> PaymentStatusData:
        if not reference:
            raise ValidationError("Reference is required")

        record = await self.repository.get(reference)
        if record is None:
            logger.warning(f"Payment record not found: {reference}")
            raise NotFoundError("Payment record not found")

        logger.info(f"Payment status retrieved: {reference} ({record.status})")
        return PaymentStatusData(
            reference=record.reference,
            payment_status=record.status,
            amount=record.amount,
            timestamp=record.timestamp.isoformat(),
        )

    async def list_transactions(self, status: Optional[str] = None) -> List[PaymentRecord]:
        records = await self.repository.list()
        if status:
            records = [r for r in records if r.status == status.upper()]
        return sorted(records, key=lambda r: r.timestamp, reverse=True)

    async def list_webhooks(self, status: Optional[str] = None) -> List[WebhookLogEntry]:
        entries = await self.repository.list_webhooks()
        if status:
            entries = [e for e in entries if e.payment_status == status.upper()]
        return entries
