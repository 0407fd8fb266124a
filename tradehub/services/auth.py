"""
Admin authentication and role-based permissions.

Accounts live in a fixed in-memory directory and share a placeholder
password; tokens are self-contained HS256 JWTs, so verification needs no
session store.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, FrozenSet, List, Optional

import jwt

from ..models.admin import AdminUser, AuthPayload

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
DEMO_PASSWORD = "password123"
WILDCARD = "*"

ROLE_PERMISSIONS: Dict[str, FrozenSet[str]] = {
    "super_admin": frozenset({WILDCARD}),
    "product_manager": frozenset({
        "products.view",
        "products.create",
        "products.edit",
        "products.delete",
        "carousel.edit",
    }),
    "order_manager": frozenset({
        "orders.view",
        "orders.edit",
        "orders.refund",
        "payments.view",
    }),
    "marketing": frozenset({
        "carousel.edit",
        "analytics.view",
        "products.view",
    }),
    "support": frozenset({
        "orders.view",
        "payments.view",
        "users.view",
    }),
}


def has_permission(role: str, permission: str) -> bool:
    """True if the role grants the permission, directly or by wildcard."""
    granted = ROLE_PERMISSIONS.get(role)
    if not granted:
        return False
    return WILDCARD in granted or permission in granted


def _build_directory() -> Dict[str, AdminUser]:
    created_at = datetime.now(timezone.utc)
    accounts = [
        ("admin-001", "admin@tradehub.com", "Super Admin", "super_admin"),
        ("admin-002", "product@tradehub.com", "Product Manager", "product_manager"),
        ("admin-003", "orders@tradehub.com", "Order Manager", "order_manager"),
        ("admin-004", "marketing@tradehub.com", "Marketing Lead", "marketing"),
        ("admin-005", "support@tradehub.com", "Support Agent", "support"),
    ]
    return {
        email: AdminUser(
            id=user_id,
            email=email,
            full_name=full_name,
            role=role,
            permissions=sorted(ROLE_PERMISSIONS[role]),
            status="active",
            created_at=created_at,
        )
        for user_id, email, full_name, role in accounts
    }


class AdminAuthService:
    """Issues and verifies admin bearer tokens against the staff directory."""

    def __init__(self, secret: str, expiry: timedelta = timedelta(hours=24)):
        self.secret = secret
        self.expiry = expiry
        self._directory = _build_directory()

    def generate_token(self, payload: AuthPayload) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            **payload.model_dump(by_alias=True),
            "iat": now,
            "exp": now + self.expiry,
        }
        return jwt.encode(claims, self.secret, algorithm=JWT_ALGORITHM)

    def verify_token(self, token: str) -> Optional[AuthPayload]:
        """Decoded payload, or None for a bad signature, expiry or shape."""
        try:
            claims = jwt.decode(token, self.secret, algorithms=[JWT_ALGORITHM])
            return AuthPayload.model_validate(claims)
        except jwt.PyJWTError as e:
            logger.debug(f"Rejected admin token: {e}")
            return None
        except ValueError as e:
            logger.debug(f"Admin token has unexpected claims: {e}")
            return None

    def authenticate(self, email: str, password: str) -> Optional[dict]:
        """
        Check credentials and issue a token.

        Returns:
            {"user": AdminUser, "token": str}, or None for an unknown email,
            a wrong password or an inactive account
        """
        user = self._directory.get(email.strip().lower())
        if user is None:
            return None

        # Placeholder equality check; accounts have no stored hashes
        if password != DEMO_PASSWORD:
            return None

        if user.status != "active":
            logger.warning(f"Inactive admin attempted login: {email}")
            return None

        user.last_login = datetime.now(timezone.utc)
        token = self.generate_token(AuthPayload(user_id=user.id, email=user.email, role=user.role))
        return {"user": user, "token": token}

    def get_user(self, user_id: str) -> Optional[AdminUser]:
        for user in self._directory.values():
            if user.id == user_id:
                return user
        return None

    def update_user(self, user_id: str, role: Optional[str] = None, status: Optional[str] = None) -> Optional[AdminUser]:
        """Change a staff member's role or status. Tokens already issued keep their role."""
        user = self.get_user(user_id)
        if user is None:
            return None
        if role is not None:
            user.role = role
            user.permissions = sorted(ROLE_PERMISSIONS[role])
        if status is not None:
            user.status = status
        return user

    def list_users(self, role: Optional[str] = None, status: Optional[str] = None) -> List[AdminUser]:
        users = list(self._directory.values())
        if role:
            users = [u for u in users if u.role == role]
        if status:
            users = [u for u in users if u.status == status]
        return users
