"""
Payment repository: payment status records keyed by reference, plus the
log of gateway callbacks.
"""
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Dict, List, Optional

from ..models.payment import PaymentRecord, WebhookLogEntry

MAX_WEBHOOK_LOG = 1000


class PaymentRepository(ABC):
    """Storage interface for payment records and webhook deliveries."""

    @abstractmethod
    async def save(self, record: PaymentRecord) -> PaymentRecord:
        ...

    @abstractmethod
    async def get(self, reference: str) -> Optional[PaymentRecord]:
        ...

    @abstractmethod
    async def list(self) -> List[PaymentRecord]:
        ...

    @abstractmethod
    async def log_webhook(self, entry: WebhookLogEntry) -> WebhookLogEntry:
        ...

    @abstractmethod
    async def list_webhooks(self) -> List[WebhookLogEntry]:
        ...


class InMemoryPaymentRepository(PaymentRepository):
    """Dict-backed store. Saving an existing reference replaces it."""

    def __init__(self, max_webhooks: int = MAX_WEBHOOK_LOG):
        self._records: Dict[str, PaymentRecord] = {}
        # oldest deliveries drop off once the log is full
        self._webhooks: Deque[WebhookLogEntry] = deque(maxlen=max_webhooks)

    async def save(self, record: PaymentRecord) -> PaymentRecord:
        self._records[record.reference] = record
        return record

    async def get(self, reference: str) -> Optional[PaymentRecord]:
        return self._records.get(reference)

    async def list(self) -> List[PaymentRecord]:
        return list(self._records.values())

    async def log_webhook(self, entry: WebhookLogEntry) -> WebhookLogEntry:
        self._webhooks.append(entry)
        return entry

    async def list_webhooks(self) -> List[WebhookLogEntry]:
        # newest first
        return list(reversed(self._webhooks))
