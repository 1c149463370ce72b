"""Product aggregate.

One entity type with a closed set of variants. The shared fields live on
``Product``; each variant contributes a small immutable details payload
(``AromaBottleDetails``, ``BatteryDetails``, ...) which also fixes the
product's ``product_type`` for its whole lifetime.

All state changes go through named methods. Every mutating method takes
the current time as ``now`` so callers (and tests) own the clock.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import ClassVar, Union

from ims.domain.exceptions import (
    CannotDeleteProductWithStockError,
    InsufficientStockError,
    ValidationError,
)
from ims.domain.model.enums import (
    BatterySize,
    ColorType,
    DevicePlugType,
    ProductStatus,
    ProductType,
    TasteType,
)
from ims.domain.model.value_objects import Money, ProductName

DEFAULT_LOW_STOCK_THRESHOLD = 10


def _coerce_enum(enum_cls, value, field_name: str, required: bool = False):
    if value is None:
        if required:
            raise ValidationError(f"{field_name} is required")
        return None
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise ValidationError(
            f"Invalid {field_name}: {value!r} is not a valid {enum_cls.__name__}"
        ) from exc


# ---------------------------------------------------------------------------
# Variant payloads
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AromaBombelDetails:
    taste: TasteType | None = None

    product_type: ClassVar[ProductType] = ProductType.AROMA_BOMBEL

    def __post_init__(self) -> None:
        object.__setattr__(self, "taste", _coerce_enum(TasteType, self.taste, "taste"))


@dataclass(frozen=True)
class AromaBottleDetails:
    taste: TasteType | None = None

    product_type: ClassVar[ProductType] = ProductType.AROMA_BOTTLE

    def __post_init__(self) -> None:
        object.__setattr__(self, "taste", _coerce_enum(TasteType, self.taste, "taste"))


@dataclass(frozen=True)
class AromaDeviceDetails:
    """Diffuser attributes. ``square_meter`` is the coverage area."""

    plug_type: DevicePlugType
    color: ColorType | None = None
    format: str | None = None
    programs: str | None = None
    square_meter: Decimal | None = None

    product_type: ClassVar[ProductType] = ProductType.AROMA_DEVICE

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "plug_type",
            _coerce_enum(DevicePlugType, self.plug_type, "plug type", required=True),
        )
        object.__setattr__(self, "color", _coerce_enum(ColorType, self.color, "color"))

        if self.square_meter is not None:
            try:
                area = Decimal(str(self.square_meter))
            except (InvalidOperation, ValueError) as exc:
                raise ValidationError(
                    f"Invalid square meter coverage: {self.square_meter!r}"
                ) from exc
            if not area.is_finite():
                raise ValidationError(
                    f"Invalid square meter coverage: {self.square_meter!r}"
                )
            if area < 0:
                raise ValidationError("Square meter coverage cannot be negative.")
            object.__setattr__(self, "square_meter", area)


@dataclass(frozen=True)
class SanitizingDeviceDetails:
    plug_type: DevicePlugType
    color: ColorType | None = None
    format: str | None = None
    programs: str | None = None

    product_type: ClassVar[ProductType] = ProductType.SANITIZING_DEVICE

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "plug_type",
            _coerce_enum(DevicePlugType, self.plug_type, "plug type", required=True),
        )
        object.__setattr__(self, "color", _coerce_enum(ColorType, self.color, "color"))


@dataclass(frozen=True)
class BatteryDetails:
    type: str | None = None
    size: BatterySize | None = None
    brand: str | None = None

    product_type: ClassVar[ProductType] = ProductType.BATTERY

    def __post_init__(self) -> None:
        object.__setattr__(self, "size", _coerce_enum(BatterySize, self.size, "battery size"))


ProductDetails = Union[
    AromaBombelDetails,
    AromaBottleDetails,
    AromaDeviceDetails,
    SanitizingDeviceDetails,
    BatteryDetails,
]

DETAILS_BY_TYPE: dict[ProductType, type] = {
    cls.product_type: cls
    for cls in (
        AromaBombelDetails,
        AromaBottleDetails,
        AromaDeviceDetails,
        SanitizingDeviceDetails,
        BatteryDetails,
    )
}


# ---------------------------------------------------------------------------
# Aggregate root
# ---------------------------------------------------------------------------


class Product:
    """Aggregate root for a catalog item and its stock counter.

    Use the ``Product.create*()`` factories for new products; they enforce
    every invariant. ``__init__`` only assigns, so repositories can
    reconstitute persisted products without re-validating.

    Invariants:
    - ``stock_quantity`` is never negative
    - ``id`` and ``product_type`` never change
    - a failed operation leaves the product untouched
    """

    def __init__(
        self,
        *,
        id: uuid.UUID,
        name: ProductName,
        description: str | None,
        price: Money,
        photo_url: str | None,
        details: ProductDetails,
        stock_quantity: int,
        status: ProductStatus,
        created_at: datetime,
        updated_at: datetime,
        version: int = 0,
    ) -> None:
        self._id = id
        self._name = name
        self._description = description
        self._price = price
        self._photo_url = photo_url
        self._details = details
        self._stock_quantity = stock_quantity
        self._status = status
        self._created_at = created_at
        self._updated_at = updated_at
        # optimistic-concurrency token, maintained by the unit of work
        self.version = version

    # --- Factories (used for NEW products only) -------------------------------

    @classmethod
    def create(
        cls,
        name: ProductName,
        description: str | None,
        price: Money,
        photo_url: str | None,
        details: ProductDetails,
        *,
        now: datetime,
    ) -> Product:
        """Create a new, active product with zero stock."""
        _require_name_and_price(name, price)
        if type(details) not in DETAILS_BY_TYPE.values():
            raise ValidationError("Product details are required")

        return cls(
            id=uuid.uuid4(),
            name=name,
            description=description,
            price=price,
            photo_url=photo_url,
            details=details,
            stock_quantity=0,
            status=ProductStatus.ACTIVE,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_aroma_bombel(cls, name, description, price, photo_url,
                            taste: TasteType | None = None, *, now: datetime) -> Product:
        return cls.create(name, description, price, photo_url,
                          AromaBombelDetails(taste=taste), now=now)

    @classmethod
    def create_aroma_bottle(cls, name, description, price, photo_url,
                            taste: TasteType | None = None, *, now: datetime) -> Product:
        return cls.create(name, description, price, photo_url,
                          AromaBottleDetails(taste=taste), now=now)

    @classmethod
    def create_aroma_device(
        cls,
        name,
        description,
        price,
        photo_url,
        color: ColorType | None,
        format: str | None,
        programs: str | None,
        plug_type: DevicePlugType,
        square_meter: Decimal | None,
        *,
        now: datetime,
    ) -> Product:
        # Details are built first: a negative coverage area fails before
        # any product exists.
        details = AromaDeviceDetails(
            plug_type=plug_type,
            color=color,
            format=format,
            programs=programs,
            square_meter=square_meter,
        )
        return cls.create(name, description, price, photo_url, details, now=now)

    @classmethod
    def create_sanitizing_device(
        cls,
        name,
        description,
        price,
        photo_url,
        color: ColorType | None,
        format: str | None,
        programs: str | None,
        plug_type: DevicePlugType,
        *,
        now: datetime,
    ) -> Product:
        details = SanitizingDeviceDetails(
            plug_type=plug_type, color=color, format=format, programs=programs,
        )
        return cls.create(name, description, price, photo_url, details, now=now)

    @classmethod
    def create_battery(
        cls,
        name,
        description,
        price,
        photo_url,
        type: str | None = None,
        size: BatterySize | None = None,
        brand: str | None = None,
        *,
        now: datetime,
    ) -> Product:
        return cls.create(name, description, price, photo_url,
                          BatteryDetails(type=type, size=size, brand=brand), now=now)

    # --- Read-only state ------------------------------------------------------

    @property
    def id(self) -> uuid.UUID:
        return self._id

    @property
    def name(self) -> ProductName:
        return self._name

    @property
    def description(self) -> str | None:
        return self._description

    @property
    def price(self) -> Money:
        return self._price

    @property
    def photo_url(self) -> str | None:
        return self._photo_url

    @property
    def details(self) -> ProductDetails:
        return self._details

    @property
    def product_type(self) -> ProductType:
        return self._details.product_type

    @property
    def stock_quantity(self) -> int:
        return self._stock_quantity

    @property
    def status(self) -> ProductStatus:
        return self._status

    @property
    def is_active(self) -> bool:
        return self._status is ProductStatus.ACTIVE

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    # --- Shared mutations -----------------------------------------------------

    def update_basic_info(
        self,
        name: ProductName,
        description: str | None,
        price: Money,
        photo_url: str | None,
        *,
        now: datetime,
    ) -> None:
        """Replace the fields every variant shares.

        Stock and variant details are left alone.
        """
        _require_name_and_price(name, price)
        self._name = name
        self._description = description
        self._price = price
        self._photo_url = photo_url
        self._touch(now)

    def update_specific_info(self, details: ProductDetails, *, now: datetime) -> None:
        """Replace the variant payload. The variant itself cannot change."""
        if type(details) is not type(self._details):
            raise ValidationError(
                f"{type(details).__name__} cannot be applied to a "
                f"{self.product_type.label} product"
            )
        self._details = details
        self._touch(now)

    # --- Stock ----------------------------------------------------------------

    def add_stock(self, quantity: int, *, now: datetime) -> int:
        """Increase stock and return the new quantity.

        The caller must record a matching ``StockHistory.create_addition``
        entry in the same unit of work.
        """
        _require_positive(quantity)
        self._stock_quantity += quantity
        self._touch(now)
        return self._stock_quantity

    def remove_stock(self, quantity: int, *, now: datetime) -> int:
        """Decrease stock and return the new quantity.

        Raises InsufficientStockError if more than the current stock is
        requested. The caller records the matching removal entry.
        """
        _require_positive(quantity)
        if quantity > self._stock_quantity:
            raise InsufficientStockError(self._id, quantity, self._stock_quantity)
        self._stock_quantity -= quantity
        self._touch(now)
        return self._stock_quantity

    def is_low_stock(self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> bool:
        return self._stock_quantity <= threshold

    # --- Lifecycle ------------------------------------------------------------

    def validate_can_be_deleted(self) -> None:
        """Authoritative deletion gate.

        Must be evaluated on the freshly loaded product inside the same
        unit of work as the deactivation; upstream pre-checks are advisory.
        """
        if self._stock_quantity > 0:
            raise CannotDeleteProductWithStockError(self._name.value, self._stock_quantity)

    def deactivate(self, *, now: datetime) -> None:
        """Soft delete. The record and its ledger are kept."""
        self._status = ProductStatus.INACTIVE
        self._touch(now)

    def activate(self, *, now: datetime) -> None:
        self._status = ProductStatus.ACTIVE
        self._touch(now)

    # --- Identity -------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"Product(id={self._id!s}, name={self._name.value!r}, "
            f"type={self.product_type.label}, stock={self._stock_quantity}, "
            f"status={self._status.value})"
        )

    # --- Internal helpers -----------------------------------------------------

    def _touch(self, now: datetime) -> None:
        self._updated_at = now


def _require_name_and_price(name: ProductName, price: Money) -> None:
    if not isinstance(name, ProductName):
        raise ValidationError("Product name cannot be null.")
    if not isinstance(price, Money):
        raise ValidationError("Product price cannot be null.")


def _require_positive(quantity: int) -> None:
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError(
            f"Quantity must be an integer, got {type(quantity).__name__}"
        )
    if quantity <= 0:
        raise ValidationError("Quantity must be greater than zero.")
