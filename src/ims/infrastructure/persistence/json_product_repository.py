"""JSON-backed implementation of ProductRepository.

Works on the snapshot its unit of work read at the start. Every product
handed out is kept in an identity map, so repeated lookups return the
same object and the unit of work can find what changed at commit time.
"""

from __future__ import annotations

import uuid
from dataclasses import fields
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Iterator

from ims.domain.model.enums import ProductStatus, ProductType
from ims.domain.model.product import DETAILS_BY_TYPE, Product, ProductDetails
from ims.domain.model.value_objects import Money, ProductName
from ims.domain.repository.product_repository import ProductRepository


class JsonProductRepository(ProductRepository):

    def __init__(self, records: list[dict]) -> None:
        self._records = {raw["id"]: raw for raw in records}
        self._identity_map: dict[uuid.UUID, Product] = {}
        self._new_ids: set[uuid.UUID] = set()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: uuid.UUID) -> Product | None:
        if product_id in self._identity_map:
            return self._identity_map[product_id]
        raw = self._records.get(str(product_id))
        if raw is None:
            return None
        return self._track(raw)

    def exists_by_name_and_type(
        self,
        name: ProductName,
        product_type: ProductType,
        exclude_id: uuid.UUID | None = None,
    ) -> bool:
        return any(
            p.name == name and p.product_type == product_type and p.id != exclude_id
            for p in self._all()
        )

    def list_all(self, include_inactive: bool = False) -> list[Product]:
        return [p for p in self._all() if include_inactive or p.is_active]

    def list_by_type(
        self, product_type: ProductType, include_inactive: bool = False
    ) -> list[Product]:
        return [
            p for p in self.list_all(include_inactive) if p.product_type == product_type
        ]

    def add(self, product: Product) -> None:
        self._identity_map[product.id] = product
        self._new_ids.add(product.id)

    # --- Change tracking (used by the unit of work) ---------------------------

    def changed(self) -> list[tuple[Product, bool]]:
        """Products that differ from the snapshot, with an is-new flag."""
        result = []
        for product in self._identity_map.values():
            is_new = product.id in self._new_ids
            if is_new or self.to_raw(product) != self._records.get(str(product.id)):
                result.append((product, is_new))
        return result

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def to_raw(product: Product, version: int | None = None) -> dict:
        return {
            "id": str(product.id),
            "product_type": int(product.product_type),
            "name": product.name.value,
            "description": product.description,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "photo_url": product.photo_url,
            "stock_quantity": product.stock_quantity,
            "status": product.status.value,
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
            "version": product.version if version is None else version,
            "details": _details_to_raw(product.details),
        }

    @staticmethod
    def to_domain(raw: dict) -> Product:
        details_cls = DETAILS_BY_TYPE[ProductType(raw["product_type"])]
        return Product(
            id=uuid.UUID(raw["id"]),
            name=ProductName(raw["name"]),
            description=raw.get("description"),
            price=Money(Decimal(raw["price"]), raw.get("currency", "ALL")),
            photo_url=raw.get("photo_url"),
            details=details_cls(**raw.get("details", {})),
            stock_quantity=raw["stock_quantity"],
            status=ProductStatus(raw["status"]),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
            version=raw.get("version", 0),
        )

    # --- Internal helpers -----------------------------------------------------

    def _track(self, raw: dict) -> Product:
        product = self.to_domain(raw)
        self._identity_map[product.id] = product
        return product

    def _all(self) -> Iterator[Product]:
        for raw_id, raw in self._records.items():
            product_id = uuid.UUID(raw_id)
            yield self._identity_map.get(product_id) or self._track(raw)
        for product_id in self._new_ids:
            yield self._identity_map[product_id]


def _details_to_raw(details: ProductDetails) -> dict:
    raw = {}
    for f in fields(details):
        value = getattr(details, f.name)
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, Decimal):
            value = str(value)
        raw[f.name] = value
    return raw
