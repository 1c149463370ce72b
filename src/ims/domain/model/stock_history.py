"""StockHistory: one immutable ledger entry per stock change.

Entries reference their product by id only, so the ledger survives even
if the product record is purged later.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from ims.domain.exceptions import ValidationError
from ims.domain.model.enums import StockChangeType


@dataclass(frozen=True)
class StockHistory:
    id: uuid.UUID
    product_id: uuid.UUID
    quantity_changed: int  # signed: +n added, -n removed
    quantity_after: int
    change_type: StockChangeType
    reason: str | None
    changed_by: uuid.UUID
    changed_at: datetime

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def create_addition(
        product_id: uuid.UUID,
        quantity_added: int,
        quantity_after: int,
        reason: str | None,
        changed_by: uuid.UUID,
        *,
        now: datetime,
    ) -> StockHistory:
        return StockHistory._create(
            product_id, quantity_added, quantity_after, reason, changed_by,
            StockChangeType.ADDED, now,
        )

    @staticmethod
    def create_removal(
        product_id: uuid.UUID,
        quantity_removed: int,
        quantity_after: int,
        reason: str | None,
        changed_by: uuid.UUID,
        *,
        now: datetime,
    ) -> StockHistory:
        return StockHistory._create(
            product_id, quantity_removed, quantity_after, reason, changed_by,
            StockChangeType.REMOVED, now,
        )

    @staticmethod
    def _create(
        product_id: uuid.UUID,
        quantity: int,
        quantity_after: int,
        reason: str | None,
        changed_by: uuid.UUID,
        change_type: StockChangeType,
        now: datetime,
    ) -> StockHistory:
        verb = change_type.value.lower()
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError(f"Quantity {verb} must be positive.")
        if quantity_after < 0:
            raise ValidationError("Quantity after a stock change cannot be negative.")
        require_identity(product_id, "Product ID")
        require_identity(changed_by, "Changed by user ID")

        delta = quantity if change_type is StockChangeType.ADDED else -quantity
        return StockHistory(
            id=uuid.uuid4(),
            product_id=product_id,
            quantity_changed=delta,
            quantity_after=quantity_after,
            change_type=change_type,
            reason=reason,
            changed_by=changed_by,
            changed_at=now,
        )


def require_identity(value: uuid.UUID | None, label: str) -> None:
    if not isinstance(value, uuid.UUID) or value.int == 0:
        raise ValidationError(f"{label} cannot be empty.")
