"""
Distribution Decision MCP Server

Provides tools for stock status / restock evaluation and regional hub economics.
The engine is pure; this server only parses tool arguments and serializes results.
"""

import json
import os
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
import env_loader

from datetime import date
from typing import Dict, List, Optional
from mcp.server import Server
from mcp.types import Tool, TextContent

from distribution_engine.config import ConfigStore, load_config_from_env
from distribution_engine.engines.hub_economics import assess, calculate_payback_years
from distribution_engine.engines.stock_status import evaluate_inventory, suggest_restock_quantity
from distribution_engine.errors import DistributionEngineError
from distribution_engine.models import hub_scenario_from_dict, inventory_record_from_dict
from distribution_engine.models.inventory import to_plain

app = Server("distribution-decisions")

CONFIG_PATH = os.environ.get("HUB_CONFIG_FILE")
config_store = ConfigStore(load_config_from_env())
if CONFIG_PATH:
    config_store.reload_from_file(CONFIG_PATH)


def _result(data):
    return [TextContent(type="text", text=json.dumps(to_plain(data), indent=2, ensure_ascii=False))]


RECORD_SCHEMA = {
    "type": "object",
    "properties": {
        "product_id": {"type": "string"}, "location_id": {"type": "string"},
        "current_stock": {"type": "integer"}, "minimum_stock": {"type": "integer"},
        "maximum_stock": {"type": "integer"}, "ideal_stock_percentage": {"type": "number"},
        "last_restock_date": {"type": "string", "description": "ISO date, optional"},
        "restock_cycle_days": {"type": "integer"}, "average_daily_sales": {"type": "number"},
    },
    "required": ["current_stock", "minimum_stock", "maximum_stock"],
}


@app.list_tools()
async def list_tools() -> List[Tool]:
    return [
        Tool(name="evaluate_inventory", description="Derive stock status, restock need, stockout projection and suggested quantity for one inventory record",
             inputSchema={"type": "object", "properties": {
                 "record": RECORD_SCHEMA, "today": {"type": "string", "description": "ISO date, defaults to today"}
             }, "required": ["record"]}),
        Tool(name="suggest_restock_quantity", description="Suggested restock quantity for an inventory record",
             inputSchema={"type": "object", "properties": {"record": RECORD_SCHEMA}, "required": ["record"]}),
        Tool(name="evaluate_hub_scenario", description="Evaluate the economics, viability rating and recommendation of a regional hub",
             inputSchema={"type": "object", "properties": {
                 "store_count": {"type": "integer"}, "commission_rate": {"type": "number"},
                 "monthly_storage_fee": {"type": "number"}, "one_time_setup_cost": {"type": "number"}
             }, "required": ["store_count"]}),
        Tool(name="get_hub_config", description="Current hub cost assumptions and viability criteria",
             inputSchema={"type": "object", "properties": {}}),
    ]


@app.call_tool()
async def call_tool(name: str, arguments: dict) -> List[TextContent]:
    handlers = {
        "evaluate_inventory": lambda a: evaluate_inventory_tool(a["record"], a.get("today")),
        "suggest_restock_quantity": lambda a: suggest_restock_tool(a["record"]),
        "evaluate_hub_scenario": lambda a: evaluate_hub_tool(a),
        "get_hub_config": lambda a: get_hub_config(),
    }
    handler = handlers.get(name)
    if not handler:
        raise ValueError(f"Unknown tool: {name}")
    return _result(handler(arguments))


# --- Implementation ---

def evaluate_inventory_tool(record: dict, today: Optional[str] = None) -> Dict:
    try:
        as_of = date.fromisoformat(today) if today else date.today()
        evaluation = evaluate_inventory(inventory_record_from_dict(record), as_of)
        return {"success": True, "data": evaluation.to_dict()}
    except (DistributionEngineError, ValueError) as e:
        return {"success": False, "error": str(e)}


def suggest_restock_tool(record: dict) -> Dict:
    try:
        suggestion = suggest_restock_quantity(inventory_record_from_dict(record))
        return {"success": True, "data": {
            "quantity": suggestion.quantity,
            "reason": suggestion.reason.value,
            "deficit_from_ideal": suggestion.deficit_from_ideal,
            "projected_sales": suggestion.projected_sales,
        }}
    except DistributionEngineError as e:
        return {"success": False, "error": str(e)}


def evaluate_hub_tool(arguments: dict) -> Dict:
    config = config_store.snapshot()
    try:
        scenario = hub_scenario_from_dict(arguments, config.assumptions)
        assessment = assess(scenario, config.assumptions, config.criteria)
    except DistributionEngineError as e:
        return {"success": False, "error": str(e)}
    data = assessment.to_dict()
    data["payback_years"] = calculate_payback_years(
        scenario.one_time_setup_cost, assessment.result.monthly_savings
    )
    return {"success": True, "data": data}


def get_hub_config() -> Dict:
    config = config_store.snapshot()
    return {"success": True, "data": {
        "assumptions": vars(config.assumptions),
        "criteria": vars(config.criteria),
    }}


if __name__ == "__main__":
    import asyncio
    from mcp.server.stdio import stdio_server

    async def run():
        async with stdio_server() as (read, write):
            await app.run(read, write, app.create_initialization_options())

    asyncio.run(run())
