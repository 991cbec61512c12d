"""Bölgesel hub ekonomisi veri modelleri."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Optional

from distribution_engine.errors import ConfigurationError, InvalidHubScenarioError
from distribution_engine.models.inventory import to_plain


class LocationTier(str, Enum):
    HEAD_OFFICE = "head_office"
    REGIONAL_HUB = "regional_hub"
    RETAIL_STORE = "retail_store"


class ViabilityRatingLevel(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    MARGINAL = "marginal"
    POOR = "poor"


class HubPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class HubCostAssumptions:
    """Global maliyet varsayımları (para birimi: AUD)."""

    direct_shipping_cost_per_shipment: float = 15.00
    shipments_per_store_per_month: float = 2
    bulk_shipping_discount_rate: float = 0.40
    local_delivery_cost_per_shipment: float = 5.00
    average_order_value: float = 500.00
    default_setup_cost: float = 5000.00
    default_storage_fee: float = 200.00
    default_commission_rate: float = 5.00


@dataclass(frozen=True)
class HubViabilityCriteria:
    # Zorunlu eşikler
    minimum_stores: int = 3
    minimum_monthly_savings: float = 100
    maximum_break_even_months: int = 24
    # İdeal eşikler
    ideal_stores: int = 5
    ideal_monthly_savings: float = 500
    ideal_break_even_months: int = 12
    ideal_roi_percentage: float = 100


@dataclass(frozen=True)
class HubScenario:
    store_count: int
    commission_rate: float
    monthly_storage_fee: float
    one_time_setup_cost: float


@dataclass(frozen=True)
class LocationCostProfile:
    """Hub bölge analizinde mağaza sayısına katkı veren lokasyon."""

    location_id: str
    region: Optional[str]
    name: str = ""
    location_tier: LocationTier = LocationTier.RETAIL_STORE
    status: str = "active"


@dataclass(frozen=True)
class ProjectedCosts:
    bulk_shipments: float
    local_deliveries: float
    hub_commission: float
    storage_fee: float
    total: float


@dataclass(frozen=True)
class HubEconomicsResult:
    store_count: int
    current_monthly_cost: float
    projected_costs: ProjectedCosts
    monthly_savings: float
    break_even_months: Optional[int]
    roi_12_months: Optional[float]
    is_economical: bool
    setup_cost: float

    def to_dict(self) -> dict:
        return to_plain(asdict(self))


@dataclass(frozen=True)
class ViabilityRating:
    rating: ViabilityRatingLevel
    label: str
    message: str
    ideal_criteria_met: int


@dataclass(frozen=True)
class HubRecommendation:
    should_approve: bool
    priority: HubPriority
    rating: ViabilityRatingLevel
    reasons: list[str] = field(default_factory=list)
    concerns: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class HubAssessment:
    """Tek bir senaryo için ekonomi + puan + öneri."""

    result: HubEconomicsResult
    rating: ViabilityRating
    recommendation: HubRecommendation

    def to_dict(self) -> dict:
        return to_plain(asdict(self))


def hub_scenario_from_dict(
    data: dict, assumptions: HubCostAssumptions
) -> HubScenario:
    """Sözlükten senaryo oluşturur; eksik ticari şartlar verilen varsayımlardan gelir."""
    if not isinstance(assumptions, HubCostAssumptions):
        raise ConfigurationError("hub_scenario_from_dict için HubCostAssumptions gerekli")
    if "store_count" not in data:
        raise InvalidHubScenarioError(["Eksik alan: store_count"], subject="hub_scenario")
    return HubScenario(
        store_count=data["store_count"],
        commission_rate=data.get("commission_rate", assumptions.default_commission_rate),
        monthly_storage_fee=data.get("monthly_storage_fee", assumptions.default_storage_fee),
        one_time_setup_cost=data.get("one_time_setup_cost", assumptions.default_setup_cost),
    )
