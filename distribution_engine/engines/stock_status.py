"""Stok Durumu ve Yeniden Stoklama Motoru.

Bir stok kaydı ve "bugün" tarihi verildiğinde:
- Stok sağlığını sınıflandırır (critical / low / overstocked / healthy)
- Yeniden stoklama gerekip gerekmediğini ve tetikleyici nedeni belirler
- Tahmini stok tükenme tarihini hesaplar
- Önerilen yeniden stoklama miktarını hesaplar

Tüm fonksiyonlar saftır: durum tutmaz, I/O yapmaz, sistem saatini okumaz.
"""

from __future__ import annotations

import logging
import math
from datetime import date, timedelta
from typing import Optional

from distribution_engine.engines.formatting import round_half_up
from distribution_engine.engines.validation import require_valid_record
from distribution_engine.models.inventory import (
    InventoryEvaluation,
    InventoryRecord,
    ProductPricing,
    RestockSuggestion,
    RestockTriggerReason,
    RestockUrgency,
    StockClassification,
    StockoutProjection,
    StockStatus,
    StockValuation,
    SuggestionReason,
)

logger = logging.getLogger(__name__)

# Stok, minimumun bu oranına veya altına inerse kritik sayılır
CRITICAL_STOCK_RATIO = 0.5
# Yaklaşan yeniden stoklama penceresi (gün)
UPCOMING_RESTOCK_DAYS = 3


# --- Türetilmiş alanlar ---

def ideal_stock(record: InventoryRecord) -> int:
    """ideal = floor(maksimum × yüzde / 100)."""
    return math.floor(record.maximum_stock * record.ideal_stock_percentage / 100)


def next_restock_date(
    last_restock_date: Optional[date], cycle_days: int
) -> Optional[date]:
    """Son stoklama + döngü günü (takvim günü, iş günü atlanmaz)."""
    if last_restock_date is None:
        return None
    return last_restock_date + timedelta(days=cycle_days)


def _is_date_due(next_date: Optional[date], today: date) -> bool:
    return next_date is not None and next_date <= today


# --- Sınıflandırma ---

def classify(record: InventoryRecord, today: date) -> StockClassification:
    """Stok durumunu, yeniden stoklama ihtiyacını ve nedenini belirler.

    Kurallar sabit öncelik sırasıyla uygulanır, ilk eşleşen kazanır:
    1. stok ≤ minimum × 0.5  -> critical (tarih de geldiyse emergency)
    2. stok ≤ minimum        -> low (tarih de geldiyse both)
    3. stok > maksimum       -> overstocked, stoklama gerekmez
    4. aksi halde            -> healthy (tarih geldiyse date_due)
    """
    require_valid_record(record)

    date_due = _is_date_due(
        next_restock_date(record.last_restock_date, record.restock_cycle_days), today
    )
    current = record.current_stock

    if current <= record.minimum_stock * CRITICAL_STOCK_RATIO:
        reason = RestockTriggerReason.EMERGENCY if date_due else RestockTriggerReason.STOCK_CRITICAL
        return StockClassification(StockStatus.CRITICAL, True, reason)

    if current <= record.minimum_stock:
        reason = RestockTriggerReason.BOTH if date_due else RestockTriggerReason.STOCK_LOW
        return StockClassification(StockStatus.LOW, True, reason)

    if current > record.maximum_stock:
        return StockClassification(StockStatus.OVERSTOCKED, False, None)

    if date_due:
        return StockClassification(StockStatus.HEALTHY, True, RestockTriggerReason.DATE_DUE)
    return StockClassification(StockStatus.HEALTHY, False, None)


# --- Stok tükenme projeksiyonu ---

def project_stockout(record: InventoryRecord, today: date) -> StockoutProjection:
    """Kalan gün = ceil(stok / günlük satış).

    Kısmi bir günlük stok da tam gün sayılır. Satış hızı yoksa
    (günlük satış ≤ 0) projeksiyon yapılmaz.
    """
    require_valid_record(record)

    if record.average_daily_sales <= 0:
        return StockoutProjection(days_until_stockout=None, projected_stockout_date=None)

    days = math.ceil(record.current_stock / record.average_daily_sales)
    return StockoutProjection(
        days_until_stockout=days,
        projected_stockout_date=today + timedelta(days=days),
    )


# --- Önerilen miktar ---

def suggest_restock_quantity(record: InventoryRecord) -> RestockSuggestion:
    """max(ideal açığı, döngü boyunca beklenen satış, 0), en yakın tam birime."""
    require_valid_record(record)

    deficit = ideal_stock(record) - record.current_stock
    projected = record.average_daily_sales * record.restock_cycle_days

    # Eşitlikte ideal açığı kazanır
    if deficit >= projected:
        reason = SuggestionReason.DEFICIT_FROM_IDEAL
    else:
        reason = SuggestionReason.PROJECTED_SALES

    quantity = int(round_half_up(max(deficit, projected, 0)))
    return RestockSuggestion(
        quantity=quantity,
        reason=reason,
        deficit_from_ideal=deficit,
        projected_sales=projected,
    )


# --- Yeniden stoklama takvimi ---

def days_until_restock(next_date: Optional[date], today: date) -> Optional[int]:
    if next_date is None:
        return None
    return (next_date - today).days


def restock_urgency(next_date: Optional[date], today: date) -> RestockUrgency:
    days = days_until_restock(next_date, today)
    if days is None:
        return RestockUrgency.NOT_DUE
    if days < 0:
        return RestockUrgency.OVERDUE
    if days <= UPCOMING_RESTOCK_DAYS:
        return RestockUrgency.UPCOMING
    return RestockUrgency.SCHEDULED


def stock_percentage(record: InventoryRecord) -> float:
    if record.maximum_stock <= 0:
        return 0.0
    return record.current_stock / record.maximum_stock * 100


def value_stock(record: InventoryRecord, pricing: ProductPricing) -> StockValuation:
    """Stok değeri, potansiyel gelir ve birim kâr: R × (1 - C/100) - U."""
    require_valid_record(record)
    return StockValuation(
        stock_value=record.current_stock * pricing.unit_cost,
        potential_revenue=record.current_stock * pricing.retail_price,
        profit_per_unit=(
            pricing.retail_price * (1 - pricing.consignment_commission_rate / 100)
            - pricing.unit_cost
        ),
    )


# --- Tam değerlendirme ---

def evaluate_inventory(record: InventoryRecord, today: date) -> InventoryEvaluation:
    """Bir kayıt için tüm türetilmiş alanları tek seferde hesaplar."""
    classification = classify(record, today)
    projection = project_stockout(record, today)
    suggestion = suggest_restock_quantity(record)
    next_date = next_restock_date(record.last_restock_date, record.restock_cycle_days)

    logger.debug(
        "Stok değerlendirildi: %s/%s status=%s needs_restock=%s",
        record.location_id,
        record.product_id,
        classification.stock_status.value,
        classification.needs_restock,
    )

    return InventoryEvaluation(
        product_id=record.product_id,
        location_id=record.location_id,
        current_stock=record.current_stock,
        minimum_stock=record.minimum_stock,
        ideal_stock=ideal_stock(record),
        next_restock_date=next_date,
        stock_status=classification.stock_status,
        needs_restock=classification.needs_restock,
        restock_trigger_reason=classification.restock_trigger_reason,
        days_until_stockout=projection.days_until_stockout,
        projected_stockout_date=projection.projected_stockout_date,
        suggestion=suggestion,
        days_until_restock=days_until_restock(next_date, today),
        restock_urgency=restock_urgency(next_date, today),
        stock_percentage=stock_percentage(record),
    )
