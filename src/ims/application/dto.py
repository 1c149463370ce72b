"""Input specs and output DTOs of the product and stock use cases.

Use cases take plain values in and return plain values out; domain
objects never reach the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal
from enum import Enum
from urllib.parse import urlparse

from ims.domain.exceptions import ValidationError
from ims.domain.model.product import DEFAULT_LOW_STOCK_THRESHOLD, Product
from ims.domain.model.stock_history import StockHistory

MAX_DESCRIPTION_LENGTH = 1000
MAX_REASON_LENGTH = 500


# --- Input -------------------------------------------------------------------


@dataclass(frozen=True)
class ProductSpec:
    """Input: the shared fields of a product as submitted by the user.

    Enforces the request limits; name and price rules belong to the
    value objects and are checked when those are built.
    """

    name: str
    price: str | int | Decimal
    currency: str = "ALL"
    description: str | None = None
    photo_url: str | None = None

    def __post_init__(self) -> None:
        if self.description and len(self.description) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters."
            )
        if not self.currency or len(self.currency.strip()) != 3:
            raise ValidationError("Currency code must be exactly 3 characters.")
        if self.photo_url and not _is_http_url(self.photo_url):
            raise ValidationError("Photo URL must be a valid URL.")


def validate_reason(reason: str | None) -> str | None:
    """Normalize a stock-change reason: blank becomes None, max 500 chars."""
    if reason is None or not reason.strip():
        return None
    if len(reason) > MAX_REASON_LENGTH:
        raise ValidationError(f"Reason cannot exceed {MAX_REASON_LENGTH} characters.")
    return reason.strip()


def _is_http_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


# --- Output ------------------------------------------------------------------


@dataclass(frozen=True)
class ProductDTO:
    """Output: a product as displayed to the user."""

    id: str
    name: str
    product_type: str
    product_type_id: int
    price: str  # formatted, e.g. "1500.00 ALL"
    amount: Decimal
    currency: str
    description: str | None
    photo_url: str | None
    stock_quantity: int
    is_active: bool
    is_low_stock: bool
    created_at: str
    updated_at: str
    details: dict[str, str | None] = field(default_factory=dict)


@dataclass(frozen=True)
class StockHistoryDTO:
    """Output: one ledger entry, joined with its product's name if known."""

    id: str
    product_id: str
    product_name: str | None
    quantity_changed: int
    quantity_after: int
    change_type: str
    reason: str | None
    changed_by: str
    changed_at: str


# --- Mapping -----------------------------------------------------------------

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


def product_to_dto(
    product: Product, low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
) -> ProductDTO:
    return ProductDTO(
        id=str(product.id),
        name=product.name.value,
        product_type=product.product_type.label,
        product_type_id=int(product.product_type),
        price=str(product.price),
        amount=product.price.amount,
        currency=product.price.currency,
        description=product.description,
        photo_url=product.photo_url,
        stock_quantity=product.stock_quantity,
        is_active=product.is_active,
        is_low_stock=product.is_low_stock(low_stock_threshold),
        created_at=product.created_at.strftime(_TIMESTAMP_FORMAT),
        updated_at=product.updated_at.strftime(_TIMESTAMP_FORMAT),
        details=_details_to_dict(product),
    )


def stock_history_to_dto(entry: StockHistory, product_name: str | None) -> StockHistoryDTO:
    return StockHistoryDTO(
        id=str(entry.id),
        product_id=str(entry.product_id),
        product_name=product_name,
        quantity_changed=entry.quantity_changed,
        quantity_after=entry.quantity_after,
        change_type=entry.change_type.value,
        reason=entry.reason,
        changed_by=str(entry.changed_by),
        changed_at=entry.changed_at.strftime(_TIMESTAMP_FORMAT),
    )


def _details_to_dict(product: Product) -> dict[str, str | None]:
    result: dict[str, str | None] = {}
    for f in fields(product.details):
        value = getattr(product.details, f.name)
        if isinstance(value, Enum):
            value = value.label
        result[f.name] = None if value is None else str(value)
    return result
