"""Application service: Create Product use case.

Works for every variant: the variant is chosen by the details payload.
"""

from __future__ import annotations

import logging

from ims.application.clock import Clock, utc_now
from ims.application.dto import ProductDTO, ProductSpec, product_to_dto
from ims.domain.exceptions import DuplicateProductNameError
from ims.domain.model.product import Product, ProductDetails
from ims.domain.model.value_objects import Money, ProductName
from ims.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class CreateProductHandler:

    def __init__(self, uow: UnitOfWork, clock: Clock = utc_now) -> None:
        self._uow = uow
        self._clock = clock

    def handle(self, spec: ProductSpec, details: ProductDetails) -> ProductDTO:
        """Add a new product to the catalog.

        Names are unique within a variant, inactive products included.
        """
        name = ProductName.create(spec.name)
        price = Money.create(spec.price, spec.currency)

        with self._uow as uow:
            if uow.products.exists_by_name_and_type(name, details.product_type):
                raise DuplicateProductNameError(name.value, details.product_type)

            product = Product.create(
                name, spec.description, price, spec.photo_url, details, now=self._clock()
            )
            uow.products.add(product)
            uow.commit()

        logger.info(
            "Created %s product %s '%s'",
            product.product_type.label, product.id, product.name,
        )
        return product_to_dto(product)
