"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each class carries the HTTP status an API layer would translate it to.
"""

from __future__ import annotations

from typing import Any


class DomainException(Exception):
    """Base class for all domain errors."""

    http_status = 400


class ValidationError(DomainException):
    """Malformed input to a value object or domain method."""


class InvalidOperationError(DomainException):
    """A well-formed operation that is impossible in the current context."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    http_status = 404


class ProductNotFoundError(EntityNotFoundError):

    def __init__(self, product_id: Any) -> None:
        super().__init__(f"Product with ID '{product_id}' was not found.")
        self.product_id = product_id


class InsufficientStockError(DomainException):
    """Removal quantity exceeds the current stock."""

    http_status = 409

    def __init__(self, product_id: Any, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for product '{product_id}'. "
            f"Requested: {requested}, Available: {available}."
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class DuplicateProductNameError(DomainException):
    """Another product of the same variant already uses this name."""

    http_status = 409

    def __init__(self, product_name: str, product_type: Any) -> None:
        super().__init__(
            f"A product with name '{product_name}' already exists "
            f"in category '{getattr(product_type, 'label', product_type)}'."
        )
        self.product_name = product_name
        self.product_type = product_type


class CannotDeleteProductWithStockError(DomainException):

    http_status = 409

    def __init__(self, product_name: str, stock_quantity: int) -> None:
        super().__init__(
            f"Cannot delete product '{product_name}'. Current stock: {stock_quantity}. "
            "Remove all stock before deleting."
        )
        self.product_name = product_name
        self.stock_quantity = stock_quantity


class ConcurrencyConflictError(DomainException):
    """The product changed underneath us between load and commit.

    Transient: the application layer reloads and re-applies the unit of
    work a bounded number of times before surfacing this.
    """

    http_status = 409

    def __init__(self, product_id: Any) -> None:
        super().__init__(
            f"Product '{product_id}' was modified concurrently. Please retry."
        )
        self.product_id = product_id
