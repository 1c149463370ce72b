"""Abstract Unit of Work.

Groups the writes of one use case so the product row and its ledger
entries are committed together or not at all. Leaving the ``with`` block
without calling ``commit()`` discards every pending change.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.repository.product_repository import ProductRepository
from ims.domain.repository.stock_history_repository import StockHistoryRepository


class UnitOfWork(ABC):

    products: ProductRepository
    stock_history: StockHistoryRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Persist every change made through this unit of work atomically.

        Raises ConcurrencyConflictError if a loaded product was changed
        by someone else in the meantime.
        """

    @abstractmethod
    def rollback(self) -> None:
        """Discard pending changes. Safe to call after a commit."""
