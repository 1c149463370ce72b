"""Application service: Remove Stock use case."""

from __future__ import annotations

import logging
import uuid

from ims.application.clock import Clock, utc_now
from ims.application.dto import validate_reason
from ims.application.retry import DEFAULT_ATTEMPTS, retry_on_conflict
from ims.domain.exceptions import ProductNotFoundError
from ims.domain.model.product import DEFAULT_LOW_STOCK_THRESHOLD
from ims.domain.repository.unit_of_work import UnitOfWork
from ims.domain.service.stock_ledger_service import StockLedgerService

logger = logging.getLogger(__name__)


class RemoveStockHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Clock = utc_now,
        attempts: int = DEFAULT_ATTEMPTS,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> None:
        self._uow = uow
        self._clock = clock
        self._attempts = attempts
        self._low_stock_threshold = low_stock_threshold

    def handle(
        self,
        product_id: uuid.UUID,
        quantity: int,
        actor_id: uuid.UUID,
        reason: str | None = None,
    ) -> int:
        """Remove ``quantity`` units and return the new stock level.

        Raises InsufficientStockError if the product holds fewer units;
        nothing is written in that case.
        """
        reason = validate_reason(reason)

        def _remove() -> tuple[int, bool, str]:
            with self._uow as uow:
                product = uow.products.get_by_id(product_id)
                if product is None:
                    raise ProductNotFoundError(product_id)

                entry = StockLedgerService.remove_stock(
                    product, quantity, reason, actor_id, now=self._clock()
                )
                uow.stock_history.append(entry)
                uow.commit()
                return (
                    product.stock_quantity,
                    product.is_low_stock(self._low_stock_threshold),
                    product.name.value,
                )

        new_quantity, is_low, name = retry_on_conflict(_remove, self._attempts)
        logger.info(
            "Removed %d from product %s (now %d) by %s",
            quantity, product_id, new_quantity, actor_id,
        )
        if is_low:
            logger.warning(
                "Low stock: '%s' has %d left (threshold %d)",
                name, new_quantity, self._low_stock_threshold,
            )
        return new_quantity
