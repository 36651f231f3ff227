"""End-to-end tests for the click CLI against a throwaway data directory."""

import json

import pytest
from click.testing import CliRunner

from batchstock.infrastructure import bootstrap, config
from batchstock.infrastructure.cli.main import cli


@pytest.fixture
def run(monkeypatch, tmp_path):
    monkeypatch.setenv("BATCHSTOCK_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("BATCHSTOCK_INVENTORY_URL", raising=False)
    monkeypatch.delenv("BATCHSTOCK_INVENTORY_STRATEGY", raising=False)
    monkeypatch.setattr(config, "load_dotenv", lambda: False)
    bootstrap.settings.cache_clear()
    bootstrap.inventory_service.cache_clear()

    runner = CliRunner()

    def invoke(*args):
        return runner.invoke(cli, list(args))

    yield invoke

    bootstrap.settings.cache_clear()
    bootstrap.inventory_service.cache_clear()


class TestInventoryCommands:

    def test_show_seeded_inventory(self, run):
        result = run("inventory", "show", "--product-id", "1002")

        assert result.exit_code == 0
        assert "Smartphone" in result.output
        assert "Strategy: fifo" in result.output
        lines = result.output.splitlines()
        row_9 = next(i for i, line in enumerate(lines) if "2026-05-31" in line)
        row_10 = next(i for i, line in enumerate(lines) if "2026-11-15" in line)
        assert row_9 < row_10
        assert "112" in lines[-1]

    def test_show_lifo(self, run, monkeypatch):
        monkeypatch.setenv("BATCHSTOCK_INVENTORY_STRATEGY", "lifo")
        result = run("inventory", "show", "--product-id", "1002", "--json")

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert [b["batchId"] for b in payload["batches"]] == [10, 9]

    def test_show_unknown_product(self, run):
        result = run("inventory", "show", "--product-id", "9999")
        assert result.exit_code == 4
        assert "Product not found with ID: 9999" in result.output

    def test_show_unknown_product_json(self, run):
        result = run("inventory", "show", "--product-id", "9999", "--json")
        assert result.exit_code == 4
        assert json.loads(result.output) == {"message": "Product not found with ID: 9999"}

    def test_reserve(self, run):
        result = run("inventory", "reserve", "--product-id", "1002", "--quantity", "40")

        assert result.exit_code == 0
        assert "Inventory updated successfully: 40 units reserved" in result.output
        assert "batch 9: 29" in result.output
        assert "batch 10: 11" in result.output

        after = json.loads(run("inventory", "show", "--product-id", "1002", "--json").output)
        assert [b["quantity"] for b in after["batches"]] == [0, 72]

    def test_reserve_too_much(self, run):
        result = run("inventory", "reserve", "--product-id", "1002", "--quantity", "500")
        assert result.exit_code == 1
        assert "Available: 112, Requested: 500" in result.output


class TestOrderCommands:

    def test_place_show_and_list(self, run):
        placed = run("order", "place", "--product-id", "1002", "--quantity", "3")

        assert placed.exit_code == 0
        assert "Order #1" in placed.output
        assert "Batches:  9" in placed.output
        assert "Order placed successfully. Inventory reserved." in placed.output

        shown = run("order", "show", "--id", "1")
        assert shown.exit_code == 0
        assert "Smartphone" in shown.output

        listed = run("order", "list")
        assert listed.exit_code == 0
        assert "Smartphone" in listed.output

    def test_place_json(self, run):
        result = run("order", "place", "--product-id", "1002", "--quantity", "30", "--json")

        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["orderId"] == 1
        assert payload["reservedFromBatchIds"] == [9, 10]
        assert payload["status"] == "PLACED"

    def test_place_insufficient(self, run):
        result = run("order", "place", "--product-id", "1002", "--quantity", "200")
        assert result.exit_code == 1
        assert "Insufficient inventory. Available: 112, Requested: 200" in result.output
        assert "No orders found." in run("order", "list").output

    def test_place_invalid_quantity_json(self, run):
        result = run("order", "place", "--product-id", "1002", "--quantity", "0", "--json")
        assert result.exit_code == 1
        assert "must be positive" in json.loads(result.output)["message"]

    def test_show_missing_order(self, run):
        result = run("order", "show", "--id", "42")
        assert result.exit_code == 4
        assert "Order #42 not found" in result.output

    def test_list_empty(self, run):
        result = run("order", "list")
        assert result.exit_code == 0
        assert "No orders found." in result.output


class TestBadConfiguration:

    def test_unknown_strategy_is_a_clean_error(self, run, monkeypatch):
        monkeypatch.setenv("BATCHSTOCK_INVENTORY_STRATEGY", "random")

        result = run("order", "list")

        assert result.exit_code == 1
        assert "Unknown reservation strategy" in result.output
        assert isinstance(result.exception, SystemExit)

    def test_bad_timeout_is_a_clean_error(self, run, monkeypatch):
        monkeypatch.setenv("BATCHSTOCK_INVENTORY_TIMEOUT", "soon")

        result = run("inventory", "show", "--product-id", "1002")

        assert result.exit_code == 1
        assert "BATCHSTOCK_INVENTORY_TIMEOUT" in result.output
        assert isinstance(result.exception, SystemExit)
