"""
Store configuration and lifecycle management.
Creates the in-memory repositories and the outbound gateway client for the
lifetime of the application.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI

from ..repositories import (
    CatalogRepository,
    InMemoryCatalogRepository,
    InMemoryOrderRepository,
    InMemoryPaymentRepository,
    OrderRepository,
    PaymentRepository,
)
from .payment import get_payment_config, validate_payment_config
from .settings import get_settings

logger = logging.getLogger(__name__)


class StoreManager:
    """Owns the repositories backing orders, payments and the catalog."""

    def __init__(self):
        self.orders: Optional[OrderRepository] = None
        self.payments: Optional[PaymentRepository] = None
        self.catalog: Optional[CatalogRepository] = None

    async def connect(self) -> None:
        """Create fresh, empty stores."""
        logger.info("🚀 Initializing in-memory stores...")
        self.orders = InMemoryOrderRepository()
        self.payments = InMemoryPaymentRepository()
        self.catalog = InMemoryCatalogRepository()
        logger.info("✅ Stores ready (data is lost on restart)")

    async def disconnect(self) -> None:
        """Drop the stores."""
        self.orders = None
        self.payments = None
        self.catalog = None
        logger.info("🔌 Stores released")

    def is_connected(self) -> bool:
        """Check if stores are initialized."""
        return self.orders is not None and self.payments is not None and self.catalog is not None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan context manager for stores and the gateway client."""
    # Startup
    settings = getattr(app.state, "settings", None) or get_settings()
    payment_config = get_payment_config(settings)

    logger.info(f"🚀 Starting up application in {payment_config.mode} payment mode...")
    validation = validate_payment_config(payment_config)
    for error in validation.errors:
        # Keep serving: demo endpoints and admin work without the gateway
        logger.error(f"❌ Payment configuration error: {error}")

    store_manager = getattr(app.state, "store_manager", None) or StoreManager()
    if not store_manager.is_connected():
        await store_manager.connect()

    app.state.store_manager = store_manager
    app.state.payment_config = payment_config
    owns_client = getattr(app.state, "http_client", None) is None
    if owns_client:
        app.state.http_client = httpx.AsyncClient(timeout=payment_config.timeout_seconds)

    yield

    # Shutdown
    if owns_client:
        await app.state.http_client.aclose()
        app.state.http_client = None
    await store_manager.disconnect()
