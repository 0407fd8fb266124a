"""
FastAPI dependencies for store access, services and admin authorization
"""
import logging
from typing import Callable

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..config.stores import StoreManager
from ..models.admin import AuthPayload
from ..services.auth import AdminAuthService, has_permission
from ..services.invoice import InvoiceGenerator
from ..services.orders import OrderService
from ..services.payments import PaymentService
from .errors import AuthenticationError, AuthorizationError

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_store_manager(request: Request) -> StoreManager:
    """
    Dependency to get the store manager

    Raises:
        HTTPException: If the stores have not been initialized
    """
    store_manager = getattr(request.app.state, "store_manager", None)
    if store_manager is None or not store_manager.is_connected():
        raise HTTPException(
            status_code=503,
            detail="Stores not available. The application has not finished starting up.",
        )
    return store_manager


def get_order_service(
    request: Request,
    stores: StoreManager = Depends(get_store_manager),
) -> OrderService:
    settings = request.app.state.settings
    return OrderService(stores.orders, tax_rate=settings.tax_rate, delivery_days=settings.delivery_days)


def get_payment_service(
    request: Request,
    stores: StoreManager = Depends(get_store_manager),
) -> PaymentService:
    return PaymentService(
        stores.payments,
        request.app.state.payment_config,
        http_client=getattr(request.app.state, "http_client", None),
    )


def get_auth_service(request: Request) -> AdminAuthService:
    return request.app.state.auth_service


def get_invoice_generator(request: Request) -> InvoiceGenerator:
    settings = request.app.state.settings
    return InvoiceGenerator(tax_rate=settings.tax_rate, due_days=settings.invoice_due_days)


async def require_admin(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    auth: AdminAuthService = Depends(get_auth_service),
) -> AuthPayload:
    """
    Gate a route behind a valid admin bearer token

    Returns:
        Decoded token payload, also attached to request.state.admin

    Raises:
        AuthenticationError: If the token is missing, malformed or expired
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No authorization token provided")

    payload = auth.verify_token(credentials.credentials)
    if payload is None:
        raise AuthenticationError("Invalid or expired token")

    request.state.admin = payload
    return payload


def require_permission(permission: str) -> Callable:
    """
    Build a dependency that also checks the admin's role grants a permission

    Args:
        permission: Permission string such as "orders.refund"
    """
    async def checker(admin: AuthPayload = Depends(require_admin)) -> AuthPayload:
        if not has_permission(admin.role, permission):
            logger.warning(f"Admin {admin.user_id} ({admin.role}) lacks permission {permission}")
            raise AuthorizationError(
                "Insufficient permissions",
                details={"required": permission, "role": admin.role},
            )
        return admin

    return checker
