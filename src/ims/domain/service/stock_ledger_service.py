"""Domain service: Stock Ledger.

Pairs every change of a product's stock counter with the ledger entry
that describes it, so ``quantity_after`` always comes from the product
itself and the two can be committed in the same unit of work.

Inputs are validated before the product is touched; a rejected call
leaves the product exactly as it was.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from ims.domain.model.product import Product
from ims.domain.model.stock_history import StockHistory, require_identity


@dataclass(frozen=True)
class StockDiscrepancy:
    """A product whose counter disagrees with the sum of its ledger."""

    product_id: uuid.UUID
    product_name: str
    stock_quantity: int
    ledger_total: int

    @property
    def difference(self) -> int:
        return self.stock_quantity - self.ledger_total


class StockLedgerService:

    @staticmethod
    def add_stock(
        product: Product,
        quantity: int,
        reason: str | None,
        actor_id: uuid.UUID,
        *,
        now: datetime,
    ) -> StockHistory:
        """Add stock and return the matching "Added" ledger entry."""
        require_identity(actor_id, "Changed by user ID")
        new_quantity = product.add_stock(quantity, now=now)
        return StockHistory.create_addition(
            product_id=product.id,
            quantity_added=quantity,
            quantity_after=new_quantity,
            reason=reason,
            changed_by=actor_id,
            now=now,
        )

    @staticmethod
    def remove_stock(
        product: Product,
        quantity: int,
        reason: str | None,
        actor_id: uuid.UUID,
        *,
        now: datetime,
    ) -> StockHistory:
        """Remove stock and return the matching "Removed" ledger entry.

        Raises InsufficientStockError before anything changes if the
        product holds less than ``quantity``.
        """
        require_identity(actor_id, "Changed by user ID")
        new_quantity = product.remove_stock(quantity, now=now)
        return StockHistory.create_removal(
            product_id=product.id,
            quantity_removed=quantity,
            quantity_after=new_quantity,
            reason=reason,
            changed_by=actor_id,
            now=now,
        )

    @staticmethod
    def reconcile(
        product: Product, entries: Iterable[StockHistory]
    ) -> StockDiscrepancy | None:
        """Compare the stock counter with the ledger of one product.

        Entries belonging to other products are ignored. Returns None
        when the two agree.
        """
        total = sum(e.quantity_changed for e in entries if e.product_id == product.id)
        if total == product.stock_quantity:
            return None
        return StockDiscrepancy(
            product_id=product.id,
            product_name=product.name.value,
            stock_quantity=product.stock_quantity,
            ledger_total=total,
        )
