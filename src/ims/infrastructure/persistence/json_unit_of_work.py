"""JSON-file-backed Unit of Work with optimistic concurrency.

``__enter__`` reads a fresh snapshot of the store. ``commit()`` takes the
store's write lock, re-reads the document, checks that every product it
is about to overwrite still has the version it was loaded with and that
no product name is taken twice within a variant, and then writes products
and new ledger entries in one atomic replace.
"""

from __future__ import annotations

import logging

from ims.domain.exceptions import ConcurrencyConflictError, DuplicateProductNameError
from ims.domain.repository.unit_of_work import UnitOfWork
from ims.infrastructure.persistence.json_product_repository import JsonProductRepository
from ims.infrastructure.persistence.json_stock_history_repository import (
    JsonStockHistoryRepository,
)
from ims.infrastructure.persistence.json_store import JsonStore

logger = logging.getLogger(__name__)


class JsonUnitOfWork(UnitOfWork):

    products: JsonProductRepository
    stock_history: JsonStockHistoryRepository

    def __init__(self, store: JsonStore) -> None:
        self._store = store
        self._active = False

    def __enter__(self) -> JsonUnitOfWork:
        snapshot = self._store.read()
        self.products = JsonProductRepository(snapshot["products"])
        self.stock_history = JsonStockHistoryRepository(snapshot["stock_history"])
        self._active = True
        return self

    def commit(self) -> None:
        if not self._active:
            raise RuntimeError("commit() called outside of a unit of work")

        changed = self.products.changed()
        new_entries = self.stock_history.pending()
        if not changed and not new_entries:
            self._active = False
            return

        with self._store.lock():
            current = self._store.read()
            stored = {raw["id"]: raw for raw in current["products"]}

            for product, is_new in changed:
                on_disk = stored.get(str(product.id))
                if is_new:
                    if on_disk is not None:
                        raise ConcurrencyConflictError(product.id)
                elif on_disk is None or on_disk.get("version", 0) != product.version:
                    logger.debug(
                        "Version mismatch on %s: loaded %s, stored %s",
                        product.id, product.version,
                        None if on_disk is None else on_disk.get("version", 0),
                    )
                    raise ConcurrencyConflictError(product.id)

            for product, _ in changed:
                stored[str(product.id)] = JsonProductRepository.to_raw(
                    product, version=product.version + 1
                )
            _check_unique_names(changed, stored)
            current["products"] = list(stored.values())
            current["stock_history"].extend(
                JsonStockHistoryRepository.to_raw(e) for e in new_entries
            )
            self._store.write(current)

        for product, _ in changed:
            product.version += 1
        self._active = False

    def rollback(self) -> None:
        # Nothing reaches the file before commit(); dropping the session is enough.
        self._active = False


def _check_unique_names(changed, stored: dict[str, dict]) -> None:
    """Names are unique per variant across the document about to be written.

    Checked against the freshly read file, so two sessions that each passed
    the snapshot check cannot both store the same name.
    """
    for product, _ in changed:
        for raw in stored.values():
            if (
                raw["id"] != str(product.id)
                and raw["product_type"] == int(product.product_type)
                and raw["name"] == product.name.value
            ):
                raise DuplicateProductNameError(product.name.value, product.product_type)
