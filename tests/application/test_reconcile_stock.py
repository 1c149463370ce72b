"""Tests for the ReconcileStock audit."""

import uuid
from datetime import datetime, timezone

from ims.application.add_stock import AddStockHandler
from ims.application.reconcile_stock import ReconcileStockHandler
from ims.application.remove_stock import RemoveStockHandler
from ims.domain.model.product import Product
from ims.domain.model.value_objects import Money, ProductName
from tests.fakes import FakeClock, FakeUnitOfWork

ACTOR_ID = uuid.uuid4()
NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)


def _product(name):
    return Product.create_aroma_bombel(
        ProductName.create(name), None, Money.create("500"), None, now=NOW
    )


class TestReconcileStock:

    def test_movements_through_handlers_stay_consistent(self):
        first, second = _product("Citrus Cube"), _product("Mint Cube")
        uow = FakeUnitOfWork([first, second])
        clock = FakeClock()
        AddStockHandler(uow, clock=clock).handle(first.id, 40, ACTOR_ID)
        RemoveStockHandler(uow, clock=clock).handle(first.id, 15, ACTOR_ID)
        AddStockHandler(uow, clock=clock).handle(second.id, 8, ACTOR_ID)

        assert ReconcileStockHandler(uow).handle() == []

    def test_counter_changed_outside_ledger_is_reported(self):
        drifted = _product("Citrus Cube")
        drifted.add_stock(12, now=NOW)
        uow = FakeUnitOfWork([drifted, _product("Mint Cube")])

        [found] = ReconcileStockHandler(uow).handle()

        assert found.product_id == drifted.id
        assert found.stock_quantity == 12
        assert found.ledger_total == 0
        assert found.difference == 12
        assert uow.product_store[drifted.id].stock_quantity == 12

    def test_inactive_products_are_audited(self):
        drifted = _product("Citrus Cube")
        drifted.add_stock(1, now=NOW)
        drifted.deactivate(now=NOW)
        uow = FakeUnitOfWork([drifted])

        assert [d.product_name for d in ReconcileStockHandler(uow).handle()] == ["Citrus Cube"]
