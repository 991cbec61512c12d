"""
Dagitim karar motoru demo script'i.

Ornek stok kayitlarini ve hub senaryolarini degerlendirip sonuclari yazdirir.
Karar logu AWS'ye yazilmaz; agentlar bellek ici sahte istemcilerle calisir.

Kullanım:
    python demo.py
    HUB_CONFIG_FILE=config/hub_economics.yaml python demo.py
"""

import logging
import os
from datetime import date, timedelta
from unittest.mock import MagicMock

import env_loader
from distribution_engine.agents import HubPlannerAgent, RestockMonitorAgent
from distribution_engine.config import ConfigStore, load_config_file, load_config_from_env
from distribution_engine.engines.formatting import format_currency, format_percentage
from distribution_engine.models import InventoryRecord, LocationCostProfile, ProductPricing
from distribution_engine.engines.stock_status import value_stock

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(name)s] %(levelname)s: %(message)s")

TODAY = date.today()

SAMPLE_RECORDS = [
    InventoryRecord(current_stock=10, minimum_stock=30, maximum_stock=50,
                    last_restock_date=TODAY - timedelta(days=25), average_daily_sales=2.0,
                    location_id="STORE001", product_id="CHILI-500"),
    InventoryRecord(current_stock=28, minimum_stock=30, maximum_stock=50,
                    last_restock_date=TODAY - timedelta(days=10), average_daily_sales=1.5,
                    location_id="STORE002", product_id="CHILI-500"),
    InventoryRecord(current_stock=40, minimum_stock=30, maximum_stock=50,
                    last_restock_date=TODAY - timedelta(days=19), average_daily_sales=1.0,
                    location_id="STORE003", product_id="CHILI-500"),
    InventoryRecord(current_stock=64, minimum_stock=30, maximum_stock=50,
                    last_restock_date=TODAY - timedelta(days=3), average_daily_sales=0.0,
                    location_id="STORE004", product_id="CHILI-500"),
]

SAMPLE_LOCATIONS = [
    LocationCostProfile(location_id=f"N{i}", region="North") for i in range(6)
] + [
    LocationCostProfile(location_id=f"E{i}", region="East") for i in range(3)
]


def _config_store() -> ConfigStore:
    path = os.environ.get("HUB_CONFIG_FILE")
    return ConfigStore(load_config_file(path) if path else load_config_from_env())


def demo_restock(store: ConfigStore):
    print("\n--- Stok Durumu ---")
    agent = RestockMonitorAgent(config_store=store, dynamodb_resource=MagicMock(), s3_client=MagicMock())
    for evaluation in agent.evaluate(SAMPLE_RECORDS, TODAY):
        print(
            f"  {evaluation.location_id}: {evaluation.stock_status.value:<11} "
            f"restock={evaluation.needs_restock!s:<5} "
            f"reason={evaluation.restock_trigger_reason.value if evaluation.restock_trigger_reason else '-':<14} "
            f"suggest={evaluation.suggestion.quantity} "
            f"stockout={evaluation.projected_stockout_date or '-'}"
        )

    summary = agent.process(SAMPLE_RECORDS, TODAY)
    print(f"\n  {summary['newly_triggered']} yeni tetikleyici, {summary['alerts']} uyarı")
    for notification in summary["notifications"]:
        print(f"   [{notification['priority']}] {notification['location_id']}: {notification['trigger_reason']}")

    valuation = value_stock(SAMPLE_RECORDS[2], ProductPricing(retail_price=12.0, unit_cost=4.5, consignment_commission_rate=20))
    print(f"\n  STORE003 stok değeri: {format_currency(valuation.stock_value, include_cents=True)}, "
          f"birim kâr: {format_currency(valuation.profit_per_unit, include_cents=True)}")


def demo_hubs(store: ConfigStore):
    print("\n--- Hub Ekonomisi ---")
    agent = HubPlannerAgent(config_store=store, dynamodb_resource=MagicMock(), s3_client=MagicMock())
    for row in agent.rank_regions(SAMPLE_LOCATIONS):
        print(
            f"  {row['region']:<6} stores={row['store_count']:<3} "
            f"savings={format_currency(row['monthly_savings'])}/mo rating={row['rating']}"
        )

    assessment = agent.assess_region(SAMPLE_LOCATIONS, "North")
    roi = assessment.result.roi_12_months
    print(f"\n  North: {assessment.rating.label} - {assessment.rating.message}")
    print(f"  ROI (12 ay): {format_percentage(roi) if roi is not None else 'N/A'}")
    for reason in assessment.recommendation.reasons:
        print(f"   ✅ {reason}")
    for concern in assessment.recommendation.concerns:
        print(f"   ⚠️  {concern}")


if __name__ == "__main__":
    config_store = _config_store()
    demo_restock(config_store)
    demo_hubs(config_store)
