"""Stok Durumu ve Yeniden Stoklama Motoru unit testleri."""

from datetime import date, timedelta

import pytest

from distribution_engine.engines.stock_status import (
    classify,
    days_until_restock,
    evaluate_inventory,
    ideal_stock,
    next_restock_date,
    project_stockout,
    restock_urgency,
    stock_percentage,
    suggest_restock_quantity,
    value_stock,
)
from distribution_engine.errors import InvalidInventoryRecordError, ValidationError
from distribution_engine.models import (
    InventoryRecord,
    ProductPricing,
    RestockTriggerReason,
    RestockUrgency,
    StockStatus,
    SuggestionReason,
    inventory_record_from_dict,
)

TODAY = date(2024, 6, 15)
# 21 günlük döngüyle 2024-06-10'da vadesi gelmiş
OVERDUE_RESTOCK = date(2024, 5, 20)
# 21 günlük döngüyle 2024-06-25'te vadesi gelecek
RECENT_RESTOCK = date(2024, 6, 4)


def _record(**overrides) -> InventoryRecord:
    values = dict(current_stock=40, minimum_stock=30, maximum_stock=50)
    values.update(overrides)
    return InventoryRecord(**values)


class TestDocumentedScenarios:

    def test_critical_stock(self):
        result = classify(_record(current_stock=10), TODAY)
        assert result.stock_status == StockStatus.CRITICAL
        assert result.needs_restock is True

    def test_healthy_with_ideal(self):
        record = _record(current_stock=40, ideal_stock_percentage=80)
        assert ideal_stock(record) == 40
        assert classify(record, TODAY).stock_status == StockStatus.HEALTHY

    def test_stockout_uses_ceiling(self):
        projection = project_stockout(_record(current_stock=10, average_daily_sales=2.0), TODAY)
        assert projection.days_until_stockout == 5
        assert projection.projected_stockout_date == date(2024, 6, 20)

    def test_partial_day_counts_as_full_day(self):
        projection = project_stockout(_record(current_stock=10, average_daily_sales=3.0), TODAY)
        assert projection.days_until_stockout == 4


class TestClassification:
    """Sabit öncelik sırası: critical > low > overstocked > healthy."""

    def test_emergency_when_critical_and_due(self):
        result = classify(_record(current_stock=10, last_restock_date=OVERDUE_RESTOCK), TODAY)
        assert result.stock_status == StockStatus.CRITICAL
        assert result.restock_trigger_reason == RestockTriggerReason.EMERGENCY

    def test_stock_critical_when_not_due(self):
        result = classify(_record(current_stock=10, last_restock_date=RECENT_RESTOCK), TODAY)
        assert result.restock_trigger_reason == RestockTriggerReason.STOCK_CRITICAL

    def test_low_and_due_is_both(self):
        result = classify(_record(current_stock=25, last_restock_date=OVERDUE_RESTOCK), TODAY)
        assert result.stock_status == StockStatus.LOW
        assert result.needs_restock is True
        assert result.restock_trigger_reason == RestockTriggerReason.BOTH

    def test_low_without_date_is_stock_low(self):
        result = classify(_record(current_stock=25), TODAY)
        assert result.restock_trigger_reason == RestockTriggerReason.STOCK_LOW

    def test_overstocked_never_needs_restock(self):
        result = classify(_record(current_stock=64, last_restock_date=OVERDUE_RESTOCK), TODAY)
        assert result.stock_status == StockStatus.OVERSTOCKED
        assert result.needs_restock is False
        assert result.restock_trigger_reason is None

    def test_healthy_date_due(self):
        result = classify(_record(last_restock_date=OVERDUE_RESTOCK), TODAY)
        assert result.stock_status == StockStatus.HEALTHY
        assert result.needs_restock is True
        assert result.restock_trigger_reason == RestockTriggerReason.DATE_DUE

    def test_healthy_due_today_counts(self):
        result = classify(_record(last_restock_date=TODAY - timedelta(days=21)), TODAY)
        assert result.restock_trigger_reason == RestockTriggerReason.DATE_DUE

    def test_healthy_not_due(self):
        result = classify(_record(last_restock_date=RECENT_RESTOCK), TODAY)
        assert result.needs_restock is False
        assert result.restock_trigger_reason is None

    def test_needs_restock_matches_reason(self):
        for current in range(0, 60):
            result = classify(_record(current_stock=current, last_restock_date=OVERDUE_RESTOCK), TODAY)
            assert result.needs_restock == (result.restock_trigger_reason is not None)


class TestBoundaries:

    def test_at_minimum_is_low(self):
        assert classify(_record(current_stock=30), TODAY).stock_status == StockStatus.LOW

    def test_one_above_minimum_is_healthy(self):
        assert classify(_record(current_stock=31), TODAY).stock_status == StockStatus.HEALTHY

    def test_half_minimum_is_critical(self):
        assert classify(_record(current_stock=15), TODAY).stock_status == StockStatus.CRITICAL

    def test_odd_minimum_half_boundary(self):
        # 7 * 0.5 = 3.5 -> 3 kritik, 4 düşük
        assert classify(_record(current_stock=3, minimum_stock=7), TODAY).stock_status == StockStatus.CRITICAL
        assert classify(_record(current_stock=4, minimum_stock=7), TODAY).stock_status == StockStatus.LOW

    def test_at_maximum_is_healthy(self):
        assert classify(_record(current_stock=50), TODAY).stock_status == StockStatus.HEALTHY

    def test_zero_minimum_zero_stock_is_critical(self):
        record = _record(current_stock=0, minimum_stock=0, maximum_stock=0)
        assert classify(record, TODAY).stock_status == StockStatus.CRITICAL


class TestMonotonicity:
    """Stok azaldıkça durum asla yukarı çıkmamalı."""

    ORDER = {
        StockStatus.CRITICAL: 0,
        StockStatus.LOW: 1,
        StockStatus.HEALTHY: 2,
        StockStatus.OVERSTOCKED: 3,
    }

    def test_status_is_monotonic_in_stock(self):
        ranks = [
            self.ORDER[classify(_record(current_stock=c), TODAY).stock_status]
            for c in range(0, 80)
        ]
        assert ranks == sorted(ranks)


class TestIdempotence:

    def test_same_input_same_output(self):
        record = _record(current_stock=22, average_daily_sales=1.7, last_restock_date=OVERDUE_RESTOCK)
        assert evaluate_inventory(record, TODAY) == evaluate_inventory(record, TODAY)

    def test_record_not_mutated(self):
        record = _record(current_stock=22, average_daily_sales=1.7)
        before = InventoryRecord(**vars(record))
        evaluate_inventory(record, TODAY)
        assert record == before


class TestNextRestockDate:

    def test_none_without_last_restock(self):
        assert next_restock_date(None, 21) is None

    def test_calendar_days(self):
        assert next_restock_date(date(2024, 2, 20), 10) == date(2024, 3, 1)

    def test_round_trip(self):
        last = date(2023, 12, 28)
        for cycle in (1, 7, 21, 45, 365):
            assert next_restock_date(last, cycle) - timedelta(days=cycle) == last


class TestStockoutProjection:

    def test_zero_sales_gives_no_projection(self):
        projection = project_stockout(_record(average_daily_sales=0.0), TODAY)
        assert projection.days_until_stockout is None
        assert projection.projected_stockout_date is None

    def test_zero_stock_stocks_out_today(self):
        projection = project_stockout(_record(current_stock=0, average_daily_sales=2.0), TODAY)
        assert projection.days_until_stockout == 0
        assert projection.projected_stockout_date == TODAY


class TestSuggestedQuantity:

    def test_deficit_wins(self):
        suggestion = suggest_restock_quantity(_record(current_stock=10, average_daily_sales=1.0))
        # ideal 40 -> açık 30, 21 günlük satış 21
        assert suggestion.quantity == 30
        assert suggestion.reason == SuggestionReason.DEFICIT_FROM_IDEAL

    def test_projected_sales_wins_and_rounds_half_up(self):
        suggestion = suggest_restock_quantity(_record(current_stock=10, average_daily_sales=1.5))
        assert suggestion.projected_sales == pytest.approx(31.5)
        assert suggestion.quantity == 32
        assert suggestion.reason == SuggestionReason.PROJECTED_SALES

    def test_tie_goes_to_deficit(self):
        suggestion = suggest_restock_quantity(_record(current_stock=19, average_daily_sales=1.0))
        assert suggestion.quantity == 21
        assert suggestion.reason == SuggestionReason.DEFICIT_FROM_IDEAL

    def test_never_negative(self):
        suggestion = suggest_restock_quantity(_record(current_stock=64, average_daily_sales=0.0))
        assert suggestion.quantity == 0
        assert suggestion.deficit_from_ideal == -24


class TestRestockSchedule:

    def test_days_until_restock(self):
        assert days_until_restock(date(2024, 6, 20), TODAY) == 5
        assert days_until_restock(None, TODAY) is None

    def test_urgency(self):
        assert restock_urgency(None, TODAY) == RestockUrgency.NOT_DUE
        assert restock_urgency(TODAY - timedelta(days=1), TODAY) == RestockUrgency.OVERDUE
        assert restock_urgency(TODAY, TODAY) == RestockUrgency.UPCOMING
        assert restock_urgency(TODAY + timedelta(days=3), TODAY) == RestockUrgency.UPCOMING
        assert restock_urgency(TODAY + timedelta(days=4), TODAY) == RestockUrgency.SCHEDULED


class TestStockMetrics:

    def test_stock_percentage(self):
        assert stock_percentage(_record(current_stock=40)) == pytest.approx(80.0)

    def test_stock_percentage_zero_maximum(self):
        record = _record(current_stock=0, minimum_stock=0, maximum_stock=0)
        assert stock_percentage(record) == 0.0

    def test_valuation(self):
        pricing = ProductPricing(retail_price=12.0, unit_cost=4.5, consignment_commission_rate=20)
        valuation = value_stock(_record(current_stock=40), pricing)
        assert valuation.stock_value == pytest.approx(180.0)
        assert valuation.potential_revenue == pytest.approx(480.0)
        assert valuation.profit_per_unit == pytest.approx(5.1)


class TestEvaluateInventory:

    def test_full_evaluation(self):
        record = _record(
            current_stock=10,
            average_daily_sales=2.0,
            last_restock_date=OVERDUE_RESTOCK,
            product_id="P1",
            location_id="L1",
        )
        evaluation = evaluate_inventory(record, TODAY)
        assert evaluation.stock_status == StockStatus.CRITICAL
        assert evaluation.restock_trigger_reason == RestockTriggerReason.EMERGENCY
        assert evaluation.ideal_stock == 40
        assert evaluation.next_restock_date == date(2024, 6, 10)
        assert evaluation.days_until_restock == -5
        assert evaluation.restock_urgency == RestockUrgency.OVERDUE
        assert evaluation.days_until_stockout == 5
        assert evaluation.suggestion.quantity == 42

    def test_to_dict_is_plain(self):
        record = _record(current_stock=10, average_daily_sales=2.0, last_restock_date=OVERDUE_RESTOCK)
        data = evaluate_inventory(record, TODAY).to_dict()
        assert data["stock_status"] == "critical"
        assert data["restock_trigger_reason"] == "emergency"
        assert data["next_restock_date"] == "2024-06-10"
        assert data["suggestion"]["reason"] == "projected_sales"


class TestInvalidRecords:
    """Geçersiz kayıtlar sınırda reddedilmeli, düzeltilmemeli."""

    @pytest.mark.parametrize(
        "overrides",
        [
            {"maximum_stock": 20},
            {"current_stock": -1},
            {"minimum_stock": -5},
            {"restock_cycle_days": 0},
            {"restock_cycle_days": -3},
            {"ideal_stock_percentage": 120},
            {"average_daily_sales": -0.5},
        ],
    )
    def test_rejected(self, overrides):
        with pytest.raises(InvalidInventoryRecordError):
            classify(_record(**overrides), TODAY)

    def test_error_is_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            suggest_restock_quantity(_record(current_stock=-1, location_id="L1", product_id="P1"))
        assert exc_info.value.subject == "L1/P1"
        assert len(exc_info.value.errors) == 1


class TestNonFiniteInput:

    def test_nan_sales_rejected_before_projection(self):
        with pytest.raises(InvalidInventoryRecordError):
            evaluate_inventory(_record(current_stock=10, average_daily_sales=float("nan")), TODAY)

    def test_nan_stock_not_classified(self):
        with pytest.raises(InvalidInventoryRecordError):
            classify(_record(current_stock=float("nan")), TODAY)

    def test_infinite_sales_rejected(self):
        with pytest.raises(InvalidInventoryRecordError):
            suggest_restock_quantity(_record(average_daily_sales=float("inf")))


class TestRecordFromDict:

    def test_parses_iso_date_and_defaults(self):
        record = inventory_record_from_dict(
            {"current_stock": 5, "minimum_stock": 10, "maximum_stock": 20,
             "last_restock_date": "2024-06-01T08:30:00"}
        )
        assert record.last_restock_date == date(2024, 6, 1)
        assert record.restock_cycle_days == 21
        assert record.ideal_stock_percentage == 80.0

    def test_missing_fields(self):
        with pytest.raises(InvalidInventoryRecordError) as exc_info:
            inventory_record_from_dict({"current_stock": 5})
        assert len(exc_info.value.errors) == 2

    def test_bad_date(self):
        with pytest.raises(InvalidInventoryRecordError):
            inventory_record_from_dict(
                {"current_stock": 5, "minimum_stock": 10, "maximum_stock": 20,
                 "last_restock_date": "not-a-date"}
            )
