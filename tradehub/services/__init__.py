from .orders import OrderService, compute_totals, generate_order_identifiers
from .payments import PaymentService, sign_payload, verify_signature
from .auth import AdminAuthService, has_permission, ROLE_PERMISSIONS
from .invoice import InvoiceGenerator

__all__ = [
    "OrderService",
    "compute_totals",
    "generate_order_identifiers",
    "PaymentService",
    "sign_payload",
    "verify_signature",
    "AdminAuthService",
    "has_permission",
    "ROLE_PERMISSIONS",
    "InvoiceGenerator",
]
