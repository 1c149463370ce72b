"""Application service: Update Product use case."""

from __future__ import annotations

import logging
import uuid

from ims.application.clock import Clock, utc_now
from ims.application.dto import ProductDTO, ProductSpec, product_to_dto
from ims.application.retry import DEFAULT_ATTEMPTS, retry_on_conflict
from ims.domain.exceptions import DuplicateProductNameError, ProductNotFoundError
from ims.domain.model.product import ProductDetails
from ims.domain.model.value_objects import Money, ProductName
from ims.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class UpdateProductHandler:

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
        spec: ProductSpec,
        details: ProductDetails | None = None,
    ) -> ProductDTO:
        """Replace a product's shared fields and, optionally, its variant details.

        Stock is never touched here. The new name must not be used by
        another product of the same variant.
        """
        name = ProductName.create(spec.name)
        price = Money.create(spec.price, spec.currency)

        def _update() -> ProductDTO:
            with self._uow as uow:
                product = uow.products.get_by_id(product_id)
                if product is None:
                    raise ProductNotFoundError(product_id)

                if uow.products.exists_by_name_and_type(
                    name, product.product_type, exclude_id=product.id
                ):
                    raise DuplicateProductNameError(name.value, product.product_type)

                now = self._clock()
                # Variant check first so a mismatched payload changes nothing
                if details is not None:
                    product.update_specific_info(details, now=now)
                product.update_basic_info(
                    name, spec.description, price, spec.photo_url, now=now
                )
                uow.commit()
                return product_to_dto(product)

        dto = retry_on_conflict(_update, self._attempts)
        logger.info("Updated product %s '%s'", dto.id, dto.name)
        return dto
