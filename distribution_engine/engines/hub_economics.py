"""Hub Ekonomisi Motoru - bölgesel hub için maliyet, tasarruf, ROI ve öneri.

Mevcut durum: merkezden her mağazaya doğrudan sevkiyat.
Hub ile: merkezden hub'a haftalık toplu sevkiyat + hub'dan mağazalara
yerel teslimat + hub komisyonu + sabit depolama ücreti.

Maliyet varsayımları ve uygunluk kriterleri her çağrıya açıkça verilir;
modül seviyesinde gizli varsayılan yoktur.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from typing import Iterable, Optional

from distribution_engine.engines.formatting import (
    format_currency,
    format_percentage,
    round_half_up,
)
from distribution_engine.engines.validation import (
    check_assumptions,
    check_criteria,
    require_valid_scenario,
)
from distribution_engine.models.hub import (
    HubAssessment,
    HubCostAssumptions,
    HubEconomicsResult,
    HubPriority,
    HubRecommendation,
    HubScenario,
    HubViabilityCriteria,
    LocationCostProfile,
    LocationTier,
    ProjectedCosts,
    ViabilityRating,
    ViabilityRatingLevel,
)

logger = logging.getLogger(__name__)

# Merkezden hub'a haftalık toplu sevkiyat = ayda 4
BULK_SHIPMENTS_PER_MONTH = 4

RATING_LABELS: dict[ViabilityRatingLevel, str] = {
    ViabilityRatingLevel.EXCELLENT: "Excellent Opportunity",
    ViabilityRatingLevel.GOOD: "Good Opportunity",
    ViabilityRatingLevel.MARGINAL: "Marginal Case",
    ViabilityRatingLevel.POOR: "Not Viable",
}

PRIORITY_BY_RATING: dict[ViabilityRatingLevel, HubPriority] = {
    ViabilityRatingLevel.EXCELLENT: HubPriority.HIGH,
    ViabilityRatingLevel.GOOD: HubPriority.MEDIUM,
    ViabilityRatingLevel.MARGINAL: HubPriority.LOW,
    ViabilityRatingLevel.POOR: HubPriority.LOW,
}


# --- Ekonomi hesaplama ---

def evaluate(
    scenario: HubScenario,
    assumptions: HubCostAssumptions,
    criteria: HubViabilityCriteria,
) -> HubEconomicsResult:
    """Bir hub senaryosu için aylık maliyet karşılaştırması ve uygunluk.

    İşlem sırası kaynak formüllerle birebir aynıdır; kayan nokta sonuçları
    bu sıraya bağlıdır.
    """
    check_assumptions(assumptions)
    check_criteria(criteria)
    require_valid_scenario(scenario)

    stores = scenario.store_count
    shipments = assumptions.shipments_per_store_per_month
    direct_cost = assumptions.direct_shipping_cost_per_shipment

    current_monthly = stores * shipments * direct_cost

    bulk_shipment_cost = BULK_SHIPMENTS_PER_MONTH * (
        stores * direct_cost * (1 - assumptions.bulk_shipping_discount_rate)
    )
    local_delivery_cost = stores * shipments * assumptions.local_delivery_cost_per_shipment
    hub_commission = (
        stores * shipments * assumptions.average_order_value * (scenario.commission_rate / 100)
    )
    storage_fee_cost = scenario.monthly_storage_fee

    projected_monthly = bulk_shipment_cost + local_delivery_cost + hub_commission + storage_fee_cost
    monthly_savings = current_monthly - projected_monthly

    setup_cost = scenario.one_time_setup_cost
    break_even_months = math.ceil(setup_cost / monthly_savings) if monthly_savings > 0 else None
    roi_12_months = ((monthly_savings * 12) / setup_cost) * 100 if setup_cost > 0 else None

    is_economical = (
        monthly_savings >= criteria.minimum_monthly_savings
        and stores >= criteria.minimum_stores
        and (
            break_even_months is not None
            and break_even_months <= criteria.maximum_break_even_months
        )
    )

    logger.debug(
        "Hub ekonomisi: stores=%d current=%.2f projected=%.2f savings=%.2f economical=%s",
        stores, current_monthly, projected_monthly, monthly_savings, is_economical,
    )

    return HubEconomicsResult(
        store_count=stores,
        current_monthly_cost=current_monthly,
        projected_costs=ProjectedCosts(
            bulk_shipments=bulk_shipment_cost,
            local_deliveries=local_delivery_cost,
            hub_commission=hub_commission,
            storage_fee=storage_fee_cost,
            total=projected_monthly,
        ),
        monthly_savings=monthly_savings,
        break_even_months=break_even_months,
        roi_12_months=roi_12_months,
        is_economical=is_economical,
        setup_cost=setup_cost,
    )


# --- Uygunluk puanı ---

def _ideal_checks(result: HubEconomicsResult, criteria: HubViabilityCriteria) -> tuple[bool, bool, bool]:
    return (
        result.store_count >= criteria.ideal_stores,
        result.monthly_savings >= criteria.ideal_monthly_savings,
        result.break_even_months is not None
        and result.break_even_months <= criteria.ideal_break_even_months,
    )


def rate(result: HubEconomicsResult, criteria: HubViabilityCriteria) -> ViabilityRating:
    """Zorunlu kapı + üç ideal kontrolün sayısına göre puan.

    Ekonomik değil -> poor; 3 ideal -> excellent; 2 -> good; aksi -> marginal.
    """
    check_criteria(criteria)
    met = sum(_ideal_checks(result, criteria))
    summary = (
        f"{result.store_count} stores, "
        f"${result.monthly_savings:.0f}/mo savings, "
        f"{result.break_even_months}mo break-even"
    )

    if not result.is_economical:
        level = ViabilityRatingLevel.POOR
        message = "Does not meet minimum viability criteria"
    elif met == 3:
        level = ViabilityRatingLevel.EXCELLENT
        message = f"Strong case: {summary}"
    elif met >= 2:
        level = ViabilityRatingLevel.GOOD
        message = f"Viable: {summary}"
    else:
        level = ViabilityRatingLevel.MARGINAL
        message = f"Review needed: {summary}"

    return ViabilityRating(
        rating=level,
        label=RATING_LABELS[level],
        message=message,
        ideal_criteria_met=met,
    )


# --- Öneri ---

def recommend(result: HubEconomicsResult, criteria: HubViabilityCriteria) -> HubRecommendation:
    """Onay kararı, öncelik ve boyut bazında gerekçe/endişe listesi.

    Mağaza sayısı, tasarruf, geri ödeme ve ROI boyutlarının her biri tam
    olarak bir ifade üretir: ya gerekçe ya endişe.
    """
    viability = rate(result, criteria)
    reasons: list[str] = []
    concerns: list[str] = []

    # Mağaza yoğunluğu
    if result.store_count >= criteria.ideal_stores:
        reasons.append(f"Strong store density ({result.store_count} stores)")
    elif result.store_count >= criteria.minimum_stores:
        concerns.append(
            f"Low store count ({result.store_count}, ideal: {criteria.ideal_stores}+)"
        )
    else:
        concerns.append(
            f"Insufficient stores ({result.store_count}, minimum: {criteria.minimum_stores})"
        )

    # Tasarruf
    savings = format_currency(result.monthly_savings)
    if result.monthly_savings >= criteria.ideal_monthly_savings:
        reasons.append(f"Excellent savings ({savings}/month)")
    elif result.monthly_savings >= criteria.minimum_monthly_savings:
        concerns.append(
            f"Moderate savings ({savings}/month, ideal: "
            f"{format_currency(criteria.ideal_monthly_savings)}+)"
        )
    else:
        concerns.append(
            f"Low savings ({savings}/month, minimum: "
            f"{format_currency(criteria.minimum_monthly_savings)})"
        )

    # Geri ödeme süresi
    months = result.break_even_months
    if months is not None and months <= criteria.ideal_break_even_months:
        reasons.append(f"Fast payback ({months} months)")
    elif months is not None and months <= criteria.maximum_break_even_months:
        concerns.append(
            f"Longer payback period ({months} months, ideal: "
            f"{criteria.ideal_break_even_months} months)"
        )
    else:
        concerns.append(
            f"Very long payback ({months if months is not None else 'never'}, "
            f"maximum: {criteria.maximum_break_even_months} months)"
        )

    # ROI
    roi = result.roi_12_months
    if roi is not None and roi >= criteria.ideal_roi_percentage:
        reasons.append(f"Strong ROI ({format_percentage(roi)})")
    elif roi is not None:
        concerns.append(
            f"Weak ROI ({format_percentage(roi)}, ideal: "
            f"{format_percentage(criteria.ideal_roi_percentage)}+)"
        )
    else:
        concerns.append("ROI not computable (no setup cost)")

    return HubRecommendation(
        should_approve=viability.rating in (ViabilityRatingLevel.EXCELLENT, ViabilityRatingLevel.GOOD),
        priority=PRIORITY_BY_RATING[viability.rating],
        rating=viability.rating,
        reasons=reasons,
        concerns=concerns,
    )


def assess(
    scenario: HubScenario,
    assumptions: HubCostAssumptions,
    criteria: HubViabilityCriteria,
) -> HubAssessment:
    result = evaluate(scenario, assumptions, criteria)
    return HubAssessment(
        result=result,
        rating=rate(result, criteria),
        recommendation=recommend(result, criteria),
    )


# --- Senaryo oluşturma ---

def build_scenario(
    store_count: int,
    assumptions: HubCostAssumptions,
    commission_rate: Optional[float] = None,
    storage_fee: Optional[float] = None,
    setup_cost: Optional[float] = None,
) -> HubScenario:
    """Verilmeyen ticari şartları varsayımlardaki varsayılanlarla doldurur."""
    return HubScenario(
        store_count=store_count,
        commission_rate=(
            assumptions.default_commission_rate if commission_rate is None else commission_rate
        ),
        monthly_storage_fee=assumptions.default_storage_fee if storage_fee is None else storage_fee,
        one_time_setup_cost=assumptions.default_setup_cost if setup_cost is None else setup_cost,
    )


def count_stores_by_region(profiles: Iterable[LocationCostProfile]) -> dict[str, int]:
    """Aktif perakende mağazalarını bölgeye göre sayar (bölgesiz olanlar atlanır)."""
    counts: Counter[str] = Counter()
    for profile in profiles:
        if (
            profile.location_tier == LocationTier.RETAIL_STORE
            and profile.status == "active"
            and profile.region
        ):
            counts[profile.region] += 1
    return dict(counts)


def scenario_for_region(
    profiles: Iterable[LocationCostProfile],
    region: str,
    assumptions: HubCostAssumptions,
    commission_rate: Optional[float] = None,
    storage_fee: Optional[float] = None,
    setup_cost: Optional[float] = None,
) -> HubScenario:
    store_count = count_stores_by_region(profiles).get(region, 0)
    return build_scenario(store_count, assumptions, commission_rate, storage_fee, setup_cost)


# --- Yardımcı hesaplamalar ---

def calculate_total_savings(monthly_savings: float, months: int) -> float:
    return monthly_savings * months


def calculate_payback_years(setup_cost: float, monthly_savings: float) -> Optional[float]:
    """Geri ödeme süresi (yıl), bir ondalığa yuvarlanmış."""
    if monthly_savings <= 0:
        return None
    return round_half_up(setup_cost / monthly_savings / 12, 1)


def estimate_monthly_commission(
    store_count: int,
    assumptions: HubCostAssumptions,
    commission_rate: Optional[float] = None,
) -> float:
    rate_pct = assumptions.default_commission_rate if commission_rate is None else commission_rate
    return (
        store_count
        * assumptions.shipments_per_store_per_month
        * assumptions.average_order_value
        * (rate_pct / 100)
    )
