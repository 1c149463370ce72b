"""JSON-backed implementation of StockHistoryRepository."""

from __future__ import annotations

import uuid
from datetime import datetime

from ims.domain.model.enums import StockChangeType
from ims.domain.model.stock_history import StockHistory
from ims.domain.repository.stock_history_repository import (
    DEFAULT_HISTORY_LIMIT,
    StockHistoryRepository,
)


class JsonStockHistoryRepository(StockHistoryRepository):

    def __init__(self, records: list[dict]) -> None:
        self._records = records
        self._pending: list[StockHistory] = []

    # --- StockHistoryRepository interface -------------------------------------

    def append(self, entry: StockHistory) -> None:
        self._pending.append(entry)

    def query(
        self,
        product_id: uuid.UUID | None = None,
        from_date: datetime | None = None,
        to_date: datetime | None = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> list[StockHistory]:
        entries = [
            e for e in self._entries()
            if (product_id is None or e.product_id == product_id)
            and (from_date is None or e.changed_at >= from_date)
            and (to_date is None or e.changed_at <= to_date)
        ]
        # reversed first so entries sharing a timestamp also come newest first
        entries.reverse()
        entries.sort(key=lambda e: e.changed_at, reverse=True)
        return entries[:limit]

    def list_by_product(self, product_id: uuid.UUID) -> list[StockHistory]:
        return [e for e in self._entries() if e.product_id == product_id]

    # --- Change tracking ------------------------------------------------------

    def pending(self) -> list[StockHistory]:
        return list(self._pending)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def to_raw(entry: StockHistory) -> dict:
        return {
            "id": str(entry.id),
            "product_id": str(entry.product_id),
            "quantity_changed": entry.quantity_changed,
            "quantity_after": entry.quantity_after,
            "change_type": entry.change_type.value,
            "reason": entry.reason,
            "changed_by": str(entry.changed_by),
            "changed_at": entry.changed_at.isoformat(),
        }

    @staticmethod
    def to_domain(raw: dict) -> StockHistory:
        return StockHistory(
            id=uuid.UUID(raw["id"]),
            product_id=uuid.UUID(raw["product_id"]),
            quantity_changed=raw["quantity_changed"],
            quantity_after=raw["quantity_after"],
            change_type=StockChangeType(raw["change_type"]),
            reason=raw.get("reason"),
            changed_by=uuid.UUID(raw["changed_by"]),
            changed_at=datetime.fromisoformat(raw["changed_at"]),
        )

    # --- Internal helpers -----------------------------------------------------

    def _entries(self) -> list[StockHistory]:
        # stored order is append order, so this is oldest first
        return [self.to_domain(raw) for raw in self._records] + self._pending
