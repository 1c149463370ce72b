"""Application service: Delete Product use case.

Deletion is a soft delete. The stock check runs on the product loaded
inside the same unit of work as the deactivation, so a concurrent stock
addition either lands first (and blocks the delete) or makes the commit
conflict and the whole use case is re-run.
"""

from __future__ import annotations

import logging
import uuid

from ims.application.clock import Clock, utc_now
from ims.application.retry import DEFAULT_ATTEMPTS, retry_on_conflict
from ims.domain.exceptions import ProductNotFoundError
from ims.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class DeleteProductHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Clock = utc_now,
        attempts: int = DEFAULT_ATTEMPTS,
    ) -> None:
        self._uow = uow
        self._clock = clock
        self._attempts = attempts

    def handle(self, product_id: uuid.UUID) -> None:
        def _delete() -> None:
            with self._uow as uow:
                product = uow.products.get_by_id(product_id)
                if product is None:
                    raise ProductNotFoundError(product_id)

                product.validate_can_be_deleted()
                product.deactivate(now=self._clock())
                uow.commit()

        retry_on_conflict(_delete, self._attempts)
        logger.info("Deactivated product %s", product_id)


class ActivateProductHandler:
    """Bring a soft-deleted product back into the active catalog."""

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Clock = utc_now,
        attempts: int = DEFAULT_ATTEMPTS,
    ) -> None:
        self._uow = uow
        self._clock = clock
        self._attempts = attempts

    def handle(self, product_id: uuid.UUID) -> None:
        def _activate() -> None:
            with self._uow as uow:
                product = uow.products.get_by_id(product_id)
                if product is None:
                    raise ProductNotFoundError(product_id)
                product.activate(now=self._clock())
                uow.commit()

        retry_on_conflict(_activate, self._attempts)
        logger.info("Activated product %s", product_id)
