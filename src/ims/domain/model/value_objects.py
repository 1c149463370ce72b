"""Immutable values of the product catalog: names and prices.

Both validate on construction, so a ProductName or Money instance is
always well-formed.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from ims.domain.exceptions import InvalidOperationError, ValidationError


@dataclass(frozen=True)
class ProductName:
    """A trimmed product name, 2 to 200 characters long.

    Equality is case-sensitive: "Lavender" and "lavender" are two names.
    """

    value: str

    MIN_LENGTH = 2
    MAX_LENGTH = 200

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError("Product name cannot be null, empty, or whitespace.")
        if self.value != self.value.strip():
            raise ValidationError("Product name must be trimmed; use ProductName.create()")
        if len(self.value) < self.MIN_LENGTH:
            raise ValidationError(
                f"Product name must be at least {self.MIN_LENGTH} characters long."
            )
        if len(self.value) > self.MAX_LENGTH:
            raise ValidationError(
                f"Product name cannot exceed {self.MAX_LENGTH} characters."
            )

    @staticmethod
    def create(raw: str | None) -> ProductName:
        if raw is None or not isinstance(raw, str):
            raise ValidationError("Product name cannot be null, empty, or whitespace.")
        return ProductName(raw.strip())

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Money:
    """A non-negative Decimal amount in a 3-letter currency (default ALL).

    Arithmetic only combines equal currencies and never goes below zero.
    """

    amount: Decimal
    currency: str = "ALL"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Invalid money amount: {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )
        if not isinstance(self.currency, str) or not self.currency.strip():
            raise ValidationError("Currency cannot be null or empty.")
        if self.currency != self.currency.strip().upper():
            # frozen: bypass __setattr__ to store the normalized code
            object.__setattr__(self, "currency", self.currency.strip().upper())

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(amount: str | float | int | Decimal, currency: str = "ALL") -> Money:
        """Coerce ``amount`` to Decimal and build a validated Money."""
        if isinstance(amount, bool):
            raise ValidationError(f"Invalid money amount: {amount!r}")
        try:
            value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        return Money(value, currency)

    # --- Arithmetic -----------------------------------------------------------

    def add(self, other: Money) -> Money:
        self._assert_same_currency(other, "add")
        return Money(self.amount + other.amount, self.currency)

    def subtract(self, other: Money) -> Money:
        self._assert_same_currency(other, "subtract")
        result = self.amount - other.amount
        if result < Decimal("0"):
            raise InvalidOperationError("Subtraction would result in a negative amount.")
        return Money(result, self.currency)

    __add__ = add
    __sub__ = subtract

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money, verb: str) -> None:
        if not isinstance(other, Money):
            raise ValidationError(f"Cannot {verb} Money and {type(other).__name__}")
        if self.currency != other.currency:
            raise InvalidOperationError(
                f"Cannot {verb} money with different currencies: "
                f"{self.currency} and {other.currency}"
            )
