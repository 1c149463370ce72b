"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory)
live in the infrastructure layer and in the tests.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod

from ims.domain.model.enums import ProductType
from ims.domain.model.product import Product
from ims.domain.model.value_objects import ProductName


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: uuid.UUID) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def exists_by_name_and_type(
        self,
        name: ProductName,
        product_type: ProductType,
        exclude_id: uuid.UUID | None = None,
    ) -> bool:
        """True if any product (active or not) of this type uses ``name``."""

    @abstractmethod
    def list_all(self, include_inactive: bool = False) -> list[Product]:
        """Return every product, active ones only unless asked otherwise."""

    @abstractmethod
    def list_by_type(
        self, product_type: ProductType, include_inactive: bool = False
    ) -> list[Product]:
        """Return the products of one variant."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Register a new product with the current unit of work."""
