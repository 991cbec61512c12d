"""Distribution MCP server tool handler testleri."""

import asyncio
import json

import pytest

from distribution_engine.config import ConfigStore, EngineConfig
from distribution_engine.models import HubViabilityCriteria
from mcp_servers import distribution_server as server

RECORD = {
    "product_id": "P1",
    "location_id": "L1",
    "current_stock": 10,
    "minimum_stock": 30,
    "maximum_stock": 50,
    "last_restock_date": "2024-05-20",
    "average_daily_sales": 2.0,
}


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    monkeypatch.setattr(server, "config_store", ConfigStore(EngineConfig()))


class TestInventoryTools:

    def test_evaluate_inventory(self):
        result = server.evaluate_inventory_tool(RECORD, "2024-06-15")
        assert result["success"] is True
        assert result["data"]["stock_status"] == "critical"
        assert result["data"]["restock_trigger_reason"] == "emergency"
        assert result["data"]["days_until_stockout"] == 5

    def test_invalid_record(self):
        result = server.evaluate_inventory_tool({**RECORD, "maximum_stock": 10}, "2024-06-15")
        assert result["success"] is False
        assert "maximum_stock" in result["error"]

    def test_invalid_today(self):
        result = server.evaluate_inventory_tool(RECORD, "15/06/2024")
        assert result["success"] is False

    def test_suggest_restock(self):
        result = server.suggest_restock_tool(RECORD)
        assert result["success"] is True
        assert result["data"]["quantity"] == 42
        assert result["data"]["reason"] == "projected_sales"

    def test_suggest_missing_fields(self):
        result = server.suggest_restock_tool({"current_stock": 10})
        assert result["success"] is False


class TestHubTools:

    def test_evaluate_hub_defaults(self):
        result = server.evaluate_hub_tool({"store_count": 3})
        assert result["success"] is True
        assert result["data"]["result"]["current_monthly_cost"] == pytest.approx(90)
        assert result["data"]["rating"]["rating"] == "poor"
        assert result["data"]["payback_years"] is None

    def test_evaluate_hub_invalid(self):
        result = server.evaluate_hub_tool({"store_count": -2})
        assert result["success"] is False

    def test_evaluate_hub_infinite_setup_cost(self):
        result = server.evaluate_hub_tool({"store_count": 10, "one_time_setup_cost": float("inf")})
        assert result["success"] is False
        assert "one_time_setup_cost" in result["error"]

    def test_uses_current_config(self, monkeypatch):
        store = ConfigStore(EngineConfig(criteria=HubViabilityCriteria(minimum_stores=10)))
        monkeypatch.setattr(server, "config_store", store)
        result = server.get_hub_config()
        assert result["data"]["criteria"]["minimum_stores"] == 10


class TestToolRegistry:

    def test_list_tools(self):
        tools = asyncio.run(server.list_tools())
        assert {t.name for t in tools} == {
            "evaluate_inventory",
            "suggest_restock_quantity",
            "evaluate_hub_scenario",
            "get_hub_config",
        }

    def test_call_tool_returns_json(self):
        contents = asyncio.run(server.call_tool("get_hub_config", {}))
        payload = json.loads(contents[0].text)
        assert payload["success"] is True
        assert payload["data"]["assumptions"]["direct_shipping_cost_per_shipment"] == 15.0

    def test_unknown_tool(self):
        with pytest.raises(ValueError):
            asyncio.run(server.call_tool("transfer_stock", {}))
