"""
Admin console routes. Everything except login requires a bearer token;
management routes additionally require a role permission.
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query

from ..config.stores import StoreManager
from ..models.admin import AuthPayload
from ..schemas.admin import (
    AdminLoginData,
    AdminLoginRequest,
    AdminUpdateOrderStatusRequest,
    AnalyticsData,
    DashboardStats,
    RefundRequest,
    RetryPaymentRequest,
    UpdateAdminUserRequest,
    UpdateCarouselRequest,
    UpdateProductRequest,
)
from ..schemas.order import OrderSummaryResponse
from ..services.auth import AdminAuthService
from ..services.orders import OrderService
from ..services.payments import PaymentService
from ..utils.dependencies import (
    get_auth_service,
    get_order_service,
    get_payment_service,
    get_store_manager,
    require_admin,
    require_permission,
)
from ..utils.errors import AppError, AuthenticationError, InternalError, NotFoundError
from ..utils.serializers import paginate, serialize_docs, success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])


# ==================== Authentication ====================

@router.post("/login")
async def admin_login(credentials: AdminLoginRequest, auth: AdminAuthService = Depends(get_auth_service)):
    """Exchange email and password for a bearer token"""
    try:
        result = auth.authenticate(credentials.email, credentials.password)
        if result is None:
            logger.warning(f"Failed admin login attempt: {credentials.email}")
            raise AuthenticationError("Invalid credentials")

        logger.info(f"Admin logged in: {credentials.email} ({result['user'].role})")
        return success_response(AdminLoginData(**result), message="Login successful")
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Admin login error: {str(e)}")
        raise InternalError("Login failed")


@router.get("/me")
async def get_current_admin(
    admin: AuthPayload = Depends(require_admin),
    auth: AdminAuthService = Depends(get_auth_service),
):
    user = auth.get_user(admin.user_id)
    if user is None:
        raise NotFoundError("Admin not found")
    return success_response(user)


# ==================== Dashboard ====================

@router.get("/dashboard/stats")
async def get_dashboard_stats(admin: AuthPayload = Depends(require_admin)):
    """Representative dashboard figures"""
    try:
        stats = DashboardStats(
            total_orders=1254,
            total_revenue=25680000,
            total_users=3421,
            pending_orders=34,
            failed_payments=8,
            inventory_alerts=12,
        )
        logger.info("Dashboard stats retrieved")
        return success_response(stats)
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Dashboard stats error: {str(e)}")
        raise InternalError("Failed to fetch stats")


# ==================== Payment Management ====================

@router.get("/payments/webhooks")
async def get_payment_webhooks(
    status: Optional[str] = Query(None, description="Filter by reported payment status"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    admin: AuthPayload = Depends(require_permission("payments.view")),
    service: PaymentService = Depends(get_payment_service),
):
    """Gateway callbacks received by this process, newest first"""
    try:
        webhooks = await service.list_webhooks(status)
        logger.info(f"Payment webhooks retrieved: {len(webhooks)}")
        return success_response(serialize_docs(paginate(webhooks, limit, offset)), total=len(webhooks))
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Get webhooks error: {str(e)}")
        raise InternalError("Failed to fetch webhooks")


@router.get("/payments/transactions")
async def get_payment_transactions(
    status: Optional[str] = Query(None, description="Filter by payment status"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    admin: AuthPayload = Depends(require_permission("payments.view")),
    service: PaymentService = Depends(get_payment_service),
):
    try:
        records = await service.list_transactions(status)
        transactions = [
            {
                "id": f"txn-{record.reference}",
                "reference": record.reference,
                "transactionId": record.transaction_id,
                "amount": record.amount,
                "status": record.status,
                "paymentMethod": "opay",
                "customerEmail": record.user_info.user_email,
                "retryCount": 0,
                "createdAt": record.timestamp.isoformat(),
            }
            for record in records
        ]
        logger.info(f"Payment transactions retrieved: {len(transactions)}")
        return success_response(paginate(transactions, limit, offset), total=len(transactions))
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Get transactions error: {str(e)}")
        raise InternalError("Failed to fetch transactions")


@router.post("/payments/refund")
async def process_refund(
    refund: RefundRequest,
    admin: AuthPayload = Depends(require_permission("orders.refund")),
):
    """Acknowledge a refund; the gateway refund API is not called"""
    logger.info(
        f"Refund processed: payment {refund.payment_id}, order {refund.order_id}, "
        f"amount {refund.amount}, by {admin.user_id}"
    )
    return success_response(
        {"id": f"refund-{uuid.uuid4().hex[:12]}", "status": "processed"},
        message="Refund processed successfully",
    )


@router.post("/payments/retry")
async def retry_payment(
    retry: RetryPaymentRequest,
    admin: AuthPayload = Depends(require_permission("orders.refund")),
):
    logger.info(f"Payment retry initiated: {retry.transaction_id} by {admin.user_id}")
    return success_response(message="Payment retry initiated")


# ==================== Orders Management ====================

@router.get("/orders")
async def admin_get_orders(
    status: Optional[str] = Query(None, description="Filter by order status"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    admin: AuthPayload = Depends(require_permission("orders.view")),
    orders: OrderService = Depends(get_order_service),
    payments: PaymentService = Depends(get_payment_service),
):
    try:
        found = await orders.list_orders(status)
        rows = []
        for order in paginate(found, limit, offset):
            record = await payments.get_record(order.reference_id)
            rows.append(OrderSummaryResponse(
                id=order.id,
                order_number=order.order_number,
                customer_email=order.shipping_address.email,
                total=order.total,
                status=order.status,
                payment_status=record.status if record else None,
                created_at=order.created_at.isoformat(),
            ))
        logger.info(f"Admin orders retrieved: {len(rows)}")
        return success_response(serialize_docs(rows), total=len(found))
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Get orders error: {str(e)}")
        raise InternalError("Failed to fetch orders")


@router.patch("/orders/{order_id}/status")
async def admin_update_order_status(
    order_id: str,
    update: AdminUpdateOrderStatusRequest,
    admin: AuthPayload = Depends(require_permission("orders.edit")),
    orders: OrderService = Depends(get_order_service),
):
    try:
        message = update.note or f"Order status updated to {update.status} by {admin.email}"
        order = await orders.update_status(order_id, update.status, message)
        logger.info(f"Order status updated: {order_id} -> {update.status} by {admin.user_id}")
        return success_response(order, message="Order updated successfully")
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Update order error: {str(e)}")
        raise InternalError("Failed to update order")


# ==================== Products Management ====================

@router.get("/products")
async def admin_get_products(
    category: Optional[str] = Query(None),
    in_stock: Optional[bool] = Query(None, alias="inStock"),
    limit: int = Query(50, ge=1, le=200),
    admin: AuthPayload = Depends(require_permission("products.view")),
    stores: StoreManager = Depends(get_store_manager),
):
    try:
        products = await stores.catalog.list_products()
        if category:
            products = [p for p in products if p.category.lower() == category.lower()]
        if in_stock is not None:
            products = [p for p in products if p.in_stock == in_stock]
        logger.info(f"Admin products retrieved: {len(products)}")
        return success_response(serialize_docs(products[:limit]), total=len(products))
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Get products error: {str(e)}")
        raise InternalError("Failed to fetch products")


@router.patch("/products/{product_id}")
async def admin_update_product(
    product_id: int,
    update: UpdateProductRequest,
    admin: AuthPayload = Depends(require_permission("products.edit")),
    stores: StoreManager = Depends(get_store_manager),
):
    try:
        product = await stores.catalog.get_product(product_id)
        if product is None:
            raise NotFoundError("Product not found")

        updated = product.model_copy(update=update.model_dump(exclude_none=True))
        await stores.catalog.save_product(updated)
        logger.info(f"Product updated: {product_id} by {admin.user_id}")
        return success_response(updated, message="Product updated successfully")
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Update product error: {str(e)}")
        raise InternalError("Failed to update product")


# ==================== Carousel Management ====================

@router.get("/carousel")
async def get_carousel(
    admin: AuthPayload = Depends(require_admin),
    stores: StoreManager = Depends(get_store_manager),
):
    items = await stores.catalog.get_carousel()
    logger.info("Carousel items retrieved")
    return success_response(serialize_docs(items))


@router.put("/carousel")
async def update_carousel(
    carousel: UpdateCarouselRequest,
    admin: AuthPayload = Depends(require_permission("carousel.edit")),
    stores: StoreManager = Depends(get_store_manager),
):
    try:
        items = await stores.catalog.replace_carousel(carousel.items)
        logger.info(f"Carousel updated: {len(items)} items by {admin.user_id}")
        return success_response(serialize_docs(items), message="Carousel updated successfully")
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Update carousel error: {str(e)}")
        raise InternalError("Failed to update carousel")


# ==================== Analytics ====================

@router.get("/analytics")
async def get_analytics(
    metric: Optional[str] = Query(None),
    period: Literal["daily", "weekly", "monthly"] = Query("daily"),
    admin: AuthPayload = Depends(require_permission("analytics.view")),
):
    """Representative analytics series"""
    today = datetime.now(timezone.utc).date().isoformat()
    data = [
        AnalyticsData(metric="sales", value=250000, category="Electronics", period=period, date=today),
        AnalyticsData(metric="orders", value=45, period=period, date=today),
        AnalyticsData(metric="users", value=156, period=period, date=today),
    ]
    if metric:
        data = [d for d in data if d.metric == metric]
    logger.info(f"Analytics data retrieved (metric: {metric}, period: {period})")
    return success_response(serialize_docs(data))


# ==================== Users Management ====================

@router.get("/users")
async def admin_get_users(
    role: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    admin: AuthPayload = Depends(require_permission("users.view")),
    auth: AdminAuthService = Depends(get_auth_service),
):
    users = auth.list_users(role=role, status=status)
    logger.info(f"Admin users retrieved: {len(users)}")
    return success_response(serialize_docs(users[:limit]), total=len(users))


@router.patch("/users/{user_id}")
async def admin_update_user(
    user_id: str,
    update: UpdateAdminUserRequest,
    admin: AuthPayload = Depends(require_permission("users.edit")),
    auth: AdminAuthService = Depends(get_auth_service),
):
    user = auth.update_user(user_id, role=update.role, status=update.status)
    if user is None:
        raise NotFoundError("User not found")
    logger.info(f"User updated: {user_id} (role: {user.role}, status: {user.status}) by {admin.user_id}")
    return success_response(user, message="User updated successfully")
