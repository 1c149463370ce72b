"""Integration tests for the DeleteProduct and ActivateProduct use cases."""

import uuid
from datetime import datetime, timezone

import pytest

from ims.application.delete_product import ActivateProductHandler, DeleteProductHandler
from ims.domain.exceptions import CannotDeleteProductWithStockError, ProductNotFoundError
from ims.domain.model.enums import ProductStatus
from ims.domain.model.product import Product
from ims.domain.model.value_objects import Money, ProductName
from tests.fakes import FakeClock, FakeUnitOfWork


def _setup(stock=0):
    product = Product.create_battery(
        ProductName.create("AA Alkaline"), None, Money.create("300"), None,
        now=datetime(2024, 12, 1, tzinfo=timezone.utc),
    )
    if stock:
        product.add_stock(stock, now=product.created_at)
    uow = FakeUnitOfWork([product])
    return uow, product.id


class TestDeleteProduct:

    def test_empty_product_is_deactivated(self):
        uow, product_id = _setup()

        DeleteProductHandler(uow, clock=FakeClock()).handle(product_id)

        stored = uow.product_store[product_id]
        assert stored.status is ProductStatus.INACTIVE
        assert stored.updated_at > stored.created_at

    def test_product_with_stock_is_kept(self):
        uow, product_id = _setup(stock=5)

        with pytest.raises(CannotDeleteProductWithStockError, match="Current stock: 5"):
            DeleteProductHandler(uow, clock=FakeClock()).handle(product_id)

        stored = uow.product_store[product_id]
        assert stored.is_active
        assert stored.updated_at == stored.created_at
        assert uow.commits == 0

    def test_unknown_product(self):
        uow, _ = _setup()
        with pytest.raises(ProductNotFoundError):
            DeleteProductHandler(uow).handle(uuid.uuid4())

    def test_stock_added_during_conflict_blocks_the_retry(self):
        uow, product_id = _setup()
        uow.conflicts_to_raise = 1
        uow.interleave = lambda u: u.product_store[product_id].add_stock(
            3, now=datetime(2025, 6, 1, tzinfo=timezone.utc)
        )

        with pytest.raises(CannotDeleteProductWithStockError):
            DeleteProductHandler(uow, clock=FakeClock()).handle(product_id)

        assert uow.product_store[product_id].is_active


class TestActivateProduct:

    def test_reactivates_deleted_product(self):
        uow, product_id = _setup()
        DeleteProductHandler(uow, clock=FakeClock()).handle(product_id)

        ActivateProductHandler(uow, clock=FakeClock()).handle(product_id)

        assert uow.product_store[product_id].is_active
        assert uow.commits == 2

    def test_unknown_product(self):
        uow, _ = _setup()
        with pytest.raises(ProductNotFoundError):
            ActivateProductHandler(uow).handle(uuid.uuid4())
