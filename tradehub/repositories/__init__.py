"""
Repositories package. Every store sits behind an abstract interface with an
in-memory implementation.
"""
from .orders import OrderRepository, InMemoryOrderRepository
from .payments import PaymentRepository, InMemoryPaymentRepository
from .catalog import CatalogRepository, InMemoryCatalogRepository

__all__ = [
    "OrderRepository",
    "InMemoryOrderRepository",
    "PaymentRepository",
    "InMemoryPaymentRepository",
    "CatalogRepository",
    "InMemoryCatalogRepository",
]
