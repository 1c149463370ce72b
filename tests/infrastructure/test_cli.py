"""End-to-end tests for the click CLI against a temporary data directory."""

import json
import logging
import re
import uuid

import pytest
from click.testing import CliRunner

from ims.infrastructure.cli.main import cli

ACTOR_ID = uuid.uuid4()


@pytest.fixture
def run(tmp_path, monkeypatch):
    monkeypatch.setenv("IMS_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("IMS_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("IMS_ACTOR_ID", str(ACTOR_ID))
    monkeypatch.delenv("IMS_LOW_STOCK_THRESHOLD", raising=False)
    monkeypatch.delenv("IMS_CONFLICT_RETRIES", raising=False)
    runner = CliRunner()

    def invoke(*args):
        return runner.invoke(cli, list(args))

    yield invoke

    # the console handler points at the runner's stream, which is closed now
    ims_logger = logging.getLogger("ims")
    ims_logger.handlers.clear()
    ims_logger.propagate = True


def _create(run, *args):
    result = run("product", "create", *args)
    assert result.exit_code == 0, result.output
    return re.search(r"Product ([0-9a-f-]{36})", result.output).group(1)


class TestProductCommands:

    def test_create_show_and_list(self, run):
        product_id = _create(
            run, "aroma-bottle", "--name", "Lavender", "--price", "1500", "--taste", "flower"
        )

        shown = run("product", "show", "--id", product_id)
        assert shown.exit_code == 0
        assert "Name:     Lavender" in shown.output
        assert "Type:     AromaBottle" in shown.output
        assert "Price:    1500.00 ALL" in shown.output
        assert "Taste:    Flower" in shown.output

        listed = run("product", "list")
        assert product_id in listed.output
        assert "active, low" in listed.output

    def test_duplicate_name_rejected(self, run):
        _create(run, "battery", "--name", "AA Pack", "--price", "300", "--size", "LR6")
        result = run("product", "create", "battery", "--name", "AA Pack", "--price", "250")
        assert result.exit_code == 1
        assert "already exists in category 'Battery'" in result.output

    def test_foreign_option_rejected(self, run):
        result = run("product", "create", "battery", "--name", "AA Pack", "--price", "1",
                     "--taste", "Sweet")
        assert result.exit_code == 2
        assert "--taste does not apply to battery products" in result.output

    def test_device_requires_plug_type(self, run):
        result = run("product", "create", "sanitizing-device", "--name", "Sprayer", "--price", "1")
        assert result.exit_code == 2
        assert "--plug-type is required" in result.output

    def test_negative_coverage_rejected(self, run):
        result = run("product", "create", "aroma-device", "--name", "Diffuser", "--price", "1",
                     "--plug-type", "WithPlug", "--square-meter=-1")
        assert result.exit_code == 1
        assert "cannot be negative" in result.output

    def test_non_finite_coverage_rejected(self, run):
        result = run("product", "create", "aroma-device", "--name", "Diffuser", "--price", "1",
                     "--plug-type", "WithPlug", "--square-meter", "nan")
        assert result.exit_code == 1
        assert "Invalid square meter coverage" in result.output

    def test_update(self, run):
        product_id = _create(run, "aroma-bombel", "--name", "Citrus", "--price", "500")
        result = run("product", "update", "aroma-bombel", "--id", product_id,
                     "--name", "Citrus Burst", "--price", "650", "--taste", "Fruit")
        assert result.exit_code == 0, result.output
        assert "'Citrus Burst' at 650.00 ALL" in result.output

    def test_update_with_wrong_variant_rejected(self, run):
        product_id = _create(run, "aroma-bombel", "--name", "Citrus", "--price", "500")
        result = run("product", "update", "battery", "--id", product_id,
                     "--name", "Citrus", "--price", "500")
        assert result.exit_code == 1
        assert "cannot be applied to a AromaBombel product" in result.output

    def test_delete_lifecycle(self, run):
        product_id = _create(run, "battery", "--name", "AA Pack", "--price", "300")
        run("stock", "add", "--id", product_id, "--quantity", "5")

        blocked = run("product", "delete", "--id", product_id)
        assert blocked.exit_code == 1
        assert "Current stock: 5" in blocked.output

        run("stock", "remove", "--id", product_id, "--quantity", "5")
        assert run("product", "delete", "--id", product_id).exit_code == 0
        assert "No products found." in run("product", "list").output
        assert "inactive" in run("product", "list", "--include-inactive").output

        assert run("product", "activate", "--id", product_id).exit_code == 0
        assert product_id in run("product", "list").output

    def test_unknown_product(self, run):
        result = run("product", "show", "--id", str(uuid.uuid4()))
        assert result.exit_code == 1
        assert "was not found" in result.output


class TestStockCommands:

    def test_lavender_scenario(self, run):
        product_id = _create(run, "aroma-bottle", "--name", "Lavender", "--price", "1500")

        added = run("stock", "add", "--id", product_id, "--quantity", "100",
                    "--reason", "Initial delivery")
        assert "Stock is now 100." in added.output

        removed = run("stock", "remove", "--id", product_id, "--quantity", "30")
        assert "Stock is now 70." in removed.output

        failed = run("stock", "remove", "--id", product_id, "--quantity", "100")
        assert failed.exit_code == 1
        assert "Requested: 100, Available: 70." in failed.output

        history = run("stock", "history", "--id", product_id)
        assert history.exit_code == 0
        lines = history.output.splitlines()
        assert "-30" in lines[2]
        assert "+100" in lines[3]
        assert "Initial delivery" in lines[3]

    def test_actor_is_required(self, run, monkeypatch):
        product_id = _create(run, "battery", "--name", "AA Pack", "--price", "300")
        monkeypatch.delenv("IMS_ACTOR_ID")

        result = run("stock", "add", "--id", product_id, "--quantity", "1")
        assert result.exit_code == 2
        assert "An actor is required" in result.output

        explicit = run("stock", "add", "--id", product_id, "--quantity", "1",
                       "--actor", str(uuid.uuid4()))
        assert explicit.exit_code == 0

    def test_low_stock_report(self, run):
        low_id = _create(run, "battery", "--name", "AA Pack", "--price", "300")
        full_id = _create(run, "battery", "--name", "AAA Pack", "--price", "300")
        run("stock", "add", "--id", low_id, "--quantity", "2")
        run("stock", "add", "--id", full_id, "--quantity", "50")

        result = run("stock", "low", "--threshold", "5")

        assert "AA Pack" in result.output
        assert "AAA Pack" not in result.output

    def test_empty_history(self, run):
        assert "No stock movements found." in run("stock", "history").output

    def test_reconcile(self, run, tmp_path):
        product_id = _create(run, "battery", "--name", "AA Pack", "--price", "300")
        run("stock", "add", "--id", product_id, "--quantity", "10")

        clean = run("stock", "reconcile")
        assert clean.exit_code == 0
        assert "All stock counters match the ledger." in clean.output

        store = tmp_path / "inventory.json"
        data = json.loads(store.read_text())
        data["products"][0]["stock_quantity"] = 13
        store.write_text(json.dumps(data))

        drifted = run("stock", "reconcile")
        assert drifted.exit_code == 1
        assert "AA Pack" in drifted.output
        assert "+3" in drifted.output


class TestConfiguration:

    def test_invalid_setting_reported(self, run, monkeypatch):
        monkeypatch.setenv("IMS_CONFLICT_RETRIES", "0")
        result = run("product", "list")
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
