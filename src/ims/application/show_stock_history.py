"""Application service: Show Stock History use case (query)."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from ims.application.dto import StockHistoryDTO, stock_history_to_dto
from ims.domain.exceptions import ValidationError
from ims.domain.repository.stock_history_repository import DEFAULT_HISTORY_LIMIT
from ims.domain.repository.unit_of_work import UnitOfWork


class ShowStockHistoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        product_id: uuid.UUID | None = None,
        from_date: datetime | None = None,
        to_date: datetime | None = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> list[StockHistoryDTO]:
        """Return ledger entries, newest first.

        Entries whose product no longer exists are still returned, with
        ``product_name`` set to None.
        """
        from_date, to_date = _as_utc(from_date), _as_utc(to_date)
        if limit <= 0:
            raise ValidationError("Limit must be greater than zero")
        if from_date and to_date and from_date > to_date:
            raise ValidationError("from_date must not be after to_date")

        with self._uow as uow:
            entries = uow.stock_history.query(product_id, from_date, to_date, limit)
            names: dict[uuid.UUID, str | None] = {}
            for entry in entries:
                if entry.product_id not in names:
                    product = uow.products.get_by_id(entry.product_id)
                    names[entry.product_id] = product.name.value if product else None
            return [stock_history_to_dto(e, names[e.product_id]) for e in entries]


def _as_utc(value: datetime | None) -> datetime | None:
    """Naive datetimes are taken to be UTC, like every stored timestamp."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)

