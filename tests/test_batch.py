"""Toplu değerlendirme unit testleri."""

from datetime import date

import pytest

from distribution_engine.batch import evaluate_hub_scenarios, evaluate_inventory_batch
from distribution_engine.config import ConfigStore, EngineConfig
from distribution_engine.engines.hub_economics import assess
from distribution_engine.engines.stock_status import evaluate_inventory
from distribution_engine.errors import InvalidInventoryRecordError
from distribution_engine.models import (
    HubScenario,
    HubViabilityCriteria,
    InventoryRecord,
    StockStatus,
)

TODAY = date(2024, 6, 15)


def _records():
    return [
        InventoryRecord(current_stock=c, minimum_stock=30, maximum_stock=50,
                        average_daily_sales=1.5, location_id=f"L{c}", product_id="P1")
        for c in range(0, 70, 3)
    ]


class TestInventoryBatch:

    def test_matches_sequential(self):
        records = _records()
        assert evaluate_inventory_batch(records, TODAY, max_workers=4) == [
            evaluate_inventory(r, TODAY) for r in records
        ]

    def test_preserves_order(self):
        evaluations = evaluate_inventory_batch(_records(), TODAY)
        assert [e.location_id for e in evaluations] == [r.location_id for r in _records()]
        assert evaluations[0].stock_status == StockStatus.CRITICAL
        assert evaluations[-1].stock_status == StockStatus.OVERSTOCKED

    def test_empty(self):
        assert evaluate_inventory_batch([], TODAY) == []

    def test_invalid_record_fails_whole_batch(self):
        records = _records() + [InventoryRecord(current_stock=1, minimum_stock=10, maximum_stock=5)]
        with pytest.raises(InvalidInventoryRecordError):
            evaluate_inventory_batch(records, TODAY)


class TestHubBatch:

    def test_matches_sequential(self):
        scenarios = [HubScenario(n, 5, 200, 5000) for n in (0, 3, 12, 40)]
        config = EngineConfig()
        expected = [assess(s, config.assumptions, config.criteria) for s in scenarios]
        assert evaluate_hub_scenarios(scenarios, config) == expected

    def test_uses_store_snapshot(self):
        store = ConfigStore(EngineConfig(criteria=HubViabilityCriteria(ideal_roi_percentage=-500)))
        assessments = evaluate_hub_scenarios([HubScenario(3, 5, 200, 5000)], store)
        assert "Strong ROI (-96%)" in assessments[0].recommendation.reasons

    def test_defaults_without_config(self):
        assessments = evaluate_hub_scenarios([HubScenario(3, 5, 200, 5000)])
        assert assessments[0].result.current_monthly_cost == pytest.approx(90)

    def test_empty(self):
        assert evaluate_hub_scenarios([]) == []
