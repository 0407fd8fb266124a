"""
Payment routes: checkout initiation, gateway webhook and status polling.
"""
import logging

from fastapi import APIRouter, Depends, Request

from ..schemas.payment import PaymentInitRequest
from ..services.payments import PaymentService
from ..utils.dependencies import get_payment_service
from ..utils.errors import AppError, InternalError
from ..utils.serializers import success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/payment", tags=["Payment"])


@router.post("/initialize")
async def initialize_payment(
    payment: PaymentInitRequest,
    service: PaymentService = Depends(get_payment_service),
):
    """Start an OPay checkout and return the cashier URL"""
    try:
        data = await service.initiate_payment(payment)
        demo = "" if service.config.is_production else " (Demo Mode)"
        return success_response(data, message=f"Payment initialization successful{demo}")
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Payment initialization error: {str(e)}")
        raise InternalError("Internal server error")


@router.post("/callback")
async def payment_callback(
    request: Request,
    service: PaymentService = Depends(get_payment_service),
):
    """Webhook called by OPay when a payment completes"""
    try:
        raw_body = await request.body()
        signature = request.headers.get(service.config.webhook_signature_header)
        payload = await service.handle_callback(raw_body, signature)
        return success_response(message="Webhook received and processed", reference=payload.reference)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Payment callback error: {str(e)}")
        raise InternalError("Webhook processing failed")


@router.get("/status/{reference}")
async def get_payment_status(
    reference: str,
    service: PaymentService = Depends(get_payment_service),
):
    """Poll the status of a payment by reference"""
    try:
        data = await service.get_payment_status(reference)
        return success_response(data)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Get payment status error: {str(e)}")
        raise InternalError("Internal server error")
