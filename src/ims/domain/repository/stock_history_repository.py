"""Abstract repository for the append-only stock ledger."""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from datetime import datetime

from ims.domain.model.stock_history import StockHistory

DEFAULT_HISTORY_LIMIT = 50


class StockHistoryRepository(ABC):

    @abstractmethod
    def append(self, entry: StockHistory) -> None:
        """Add a ledger entry. Entries are never updated or deleted."""

    @abstractmethod
    def query(
        self,
        product_id: uuid.UUID | None = None,
        from_date: datetime | None = None,
        to_date: datetime | None = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> list[StockHistory]:
        """Return at most ``limit`` entries, newest first.

        Date bounds are inclusive.
        """

    @abstractmethod
    def list_by_product(self, product_id: uuid.UUID) -> list[StockHistory]:
        """Return the full ledger of one product, oldest first."""
