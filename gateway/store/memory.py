"""
In-memory payment store.

Holds every payment record for the lifetime of the process. One instance is
created at application startup and shared by all in-flight submissions, so
access to the underlying dict is serialized with an asyncio.Lock. The lock
is only ever held around the dict operation itself.
"""

import asyncio
import logging
from typing import Optional

from gateway.models.payment import PaymentRecord

logger = logging.getLogger("payment_gateway.store")


class PaymentStore:
    """Payment records keyed by id. Ids are generated by the service, never here."""

    def __init__(self):
        self._records: dict[str, PaymentRecord] = {}
        self._lock = asyncio.Lock()

    async def add(self, record: PaymentRecord) -> None:
        if record is None:
            raise ValueError("Cannot store an empty payment record")
        async with self._lock:
            self._records[record.id] = record
        logger.debug("Stored payment %s (%s)", record.id, record.status.value)

    async def get(self, payment_id: str) -> Optional[PaymentRecord]:
        """Exact id lookup. Returns None when no such payment exists."""
        async with self._lock:
            return self._records.get(payment_id)

    def __len__(self) -> int:
        return len(self._records)
