"""Application services: product queries."""

from __future__ import annotations

import uuid

from ims.application.dto import ProductDTO, product_to_dto
from ims.domain.exceptions import ProductNotFoundError, ValidationError
from ims.domain.model.enums import ProductType
from ims.domain.model.product import DEFAULT_LOW_STOCK_THRESHOLD
from ims.domain.repository.unit_of_work import UnitOfWork


class ShowProductHandler:

    def __init__(
        self, uow: UnitOfWork, low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    ) -> None:
        self._uow = uow
        self._threshold = low_stock_threshold

    def handle(self, product_id: uuid.UUID) -> ProductDTO:
        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)
            return product_to_dto(product, self._threshold)


class ListProductsHandler:

    def __init__(
        self, uow: UnitOfWork, low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    ) -> None:
        self._uow = uow
        self._threshold = low_stock_threshold

    def handle(
        self,
        product_type: ProductType | None = None,
        include_inactive: bool = False,
    ) -> list[ProductDTO]:
        """List the catalog, optionally narrowed to one variant, by name."""
        with self._uow as uow:
            if product_type is None:
                products = uow.products.list_all(include_inactive)
            else:
                products = uow.products.list_by_type(product_type, include_inactive)
            products.sort(key=lambda p: p.name.value)
            return [product_to_dto(p, self._threshold) for p in products]


class LowStockReportHandler:
    """Active products at or below the threshold, lowest stock first."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> list[ProductDTO]:
        if threshold < 0:
            raise ValidationError("Threshold cannot be negative")

        with self._uow as uow:
            products = [
                p for p in uow.products.list_all() if p.is_low_stock(threshold)
            ]
            products.sort(key=lambda p: (p.stock_quantity, p.name.value))
            return [product_to_dto(p, threshold) for p in products]
