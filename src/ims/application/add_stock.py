"""Application service: Add Stock use case.

Loads the product, lets the ledger service change the counter and build
the matching entry, and commits both in one unit of work.
"""

from __future__ import annotations

import logging
import uuid

from ims.application.clock import Clock, utc_now
from ims.application.dto import validate_reason
from ims.application.retry import DEFAULT_ATTEMPTS, retry_on_conflict
from ims.domain.exceptions import ProductNotFoundError
from ims.domain.repository.unit_of_work import UnitOfWork
from ims.domain.service.stock_ledger_service import StockLedgerService

logger = logging.getLogger(__name__)


class AddStockHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Clock = utc_now,
        attempts: int = DEFAULT_ATTEMPTS,
    ) -> None:
        self._uow = uow
        self._clock = clock
        self._attempts = attempts

    def handle(
        self,
        product_id: uuid.UUID,
        quantity: int,
        actor_id: uuid.UUID,
        reason: str | None = None,
    ) -> int:
        """Add ``quantity`` units and return the new stock level."""
        reason = validate_reason(reason)

        def _add() -> int:
            with self._uow as uow:
                product = uow.products.get_by_id(product_id)
                if product is None:
                    raise ProductNotFoundError(product_id)

                entry = StockLedgerService.add_stock(
                    product, quantity, reason, actor_id, now=self._clock()
                )
                uow.stock_history.append(entry)
                uow.commit()
                return product.stock_quantity

        new_quantity = retry_on_conflict(_add, self._attempts)
        logger.info(
            "Added %d to product %s (now %d) by %s", quantity, product_id, new_quantity, actor_id
        )
        return new_quantity
