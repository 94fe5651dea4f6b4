"""
receipt_store.py - In-memory receipt storage.

Receipts live for the lifetime of the process and are keyed by a random
UUID4 string. There is no update, delete or eviction; state resets on
server restart.
"""

from __future__ import annotations

import threading
import uuid
from typing import Optional, Protocol

from logging_config import get_logger
from models import Receipt

logger = get_logger(__name__)


class ReceiptStorage(Protocol):
    """Storage capability used by the HTTP layer."""

    def put(self, receipt: Receipt) -> str:
        ...

    def get(self, receipt_id: str) -> Optional[Receipt]:
        ...


class InMemoryReceiptStore:
    """Thread-safe dict of receipt id -> Receipt (resets on server restart)."""

    def __init__(self) -> None:
        self._receipts: dict[str, Receipt] = {}
        self._lock = threading.Lock()

    def put(self, receipt: Receipt) -> str:
        """Store a receipt under a freshly generated id and return the id."""
        receipt_id = str(uuid.uuid4())
        with self._lock:
            self._receipts[receipt_id] = receipt
            size = len(self._receipts)
        logger.debug("receipt_store_put | receipt_id=%s | store_size=%d", receipt_id, size)
        return receipt_id

    def get(self, receipt_id: str) -> Optional[Receipt]:
        """Return the receipt stored under receipt_id, or None."""
        with self._lock:
            return self._receipts.get(receipt_id)

    def clear(self) -> None:
        with self._lock:
            self._receipts = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._receipts)
