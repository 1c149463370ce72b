"""Application service: Reconcile Stock use case (query).

Read-only audit: for every product, active or not, checks that the stock
counter equals the sum of its ledger deltas. Discrepancies are reported
and logged, never repaired automatically.
"""

from __future__ import annotations

import logging

from ims.domain.repository.unit_of_work import UnitOfWork
from ims.domain.service.stock_ledger_service import StockDiscrepancy, StockLedgerService

logger = logging.getLogger(__name__)


class ReconcileStockHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[StockDiscrepancy]:
        discrepancies: list[StockDiscrepancy] = []
        with self._uow as uow:
            for product in uow.products.list_all(include_inactive=True):
                entries = uow.stock_history.list_by_product(product.id)
                found = StockLedgerService.reconcile(product, entries)
                if found is not None:
                    logger.warning(
                        "Stock mismatch on '%s' (%s): counter %d, ledger %d",
                        found.product_name, found.product_id,
                        found.stock_quantity, found.ledger_total,
                    )
                    discrepancies.append(found)
        return discrepancies
