"""
Order repository.
Handlers and services only talk to OrderRepository, so a database-backed
implementation can replace the in-memory one without touching them.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from ..models.order import OrderDocument


class OrderRepository(ABC):
    """Storage interface for orders keyed by order ID."""

    @abstractmethod
    async def add(self, order: OrderDocument) -> OrderDocument:
        ...

    @abstractmethod
    async def get(self, order_id: str) -> Optional[OrderDocument]:
        ...

    @abstractmethod
    async def list(self) -> List[OrderDocument]:
        ...

    @abstractmethod
    async def save(self, order: OrderDocument) -> OrderDocument:
        ...


class InMemoryOrderRepository(OrderRepository):
    """Dict-backed store; contents live as long as the process."""

    def __init__(self):
        self._orders: Dict[str, OrderDocument] = {}

    async def add(self, order: OrderDocument) -> OrderDocument:
        self._orders[order.id] = order
        return order

    async def get(self, order_id: str) -> Optional[OrderDocument]:
        return self._orders.get(order_id)

    async def list(self) -> List[OrderDocument]:
        return list(self._orders.values())

    async def save(self, order: OrderDocument) -> OrderDocument:
        self._orders[order.id] = order
        return order
