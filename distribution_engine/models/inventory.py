"""Stok kayıtları ve stok durumu türetilmiş veri modelleri."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from distribution_engine.errors import InvalidInventoryRecordError


class StockStatus(str, Enum):
    HEALTHY = "healthy"
    LOW = "low"
    CRITICAL = "critical"
    OVERSTOCKED = "overstocked"


class RestockTriggerReason(str, Enum):
    STOCK_LOW = "stock_low"
    STOCK_CRITICAL = "stock_critical"
    DATE_DUE = "date_due"
    BOTH = "both"
    EMERGENCY = "emergency"


class SuggestionReason(str, Enum):
    DEFICIT_FROM_IDEAL = "deficit_from_ideal"
    PROJECTED_SALES = "projected_sales"


class RestockUrgency(str, Enum):
    OVERDUE = "overdue"
    UPCOMING = "upcoming"
    SCHEDULED = "scheduled"
    NOT_DUE = "not_due"


class AlertType(str, Enum):
    CRITICAL = "critical"
    LOW_STOCK = "low_stock"
    OVERDUE = "overdue"
    UPCOMING_RESTOCK = "upcoming_restock"


class AlertPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


@dataclass(frozen=True)
class InventoryRecord:
    """Bir (ürün, lokasyon) çifti için stok anlık görüntüsü."""

    current_stock: int
    minimum_stock: int
    maximum_stock: int
    ideal_stock_percentage: float = 80.0
    last_restock_date: Optional[date] = None
    restock_cycle_days: int = 21
    average_daily_sales: float = 0.0
    product_id: str = ""
    location_id: str = ""


@dataclass(frozen=True)
class StockClassification:
    stock_status: StockStatus
    needs_restock: bool
    restock_trigger_reason: Optional[RestockTriggerReason]


@dataclass(frozen=True)
class StockoutProjection:
    days_until_stockout: Optional[int]
    projected_stockout_date: Optional[date]


@dataclass(frozen=True)
class RestockSuggestion:
    quantity: int
    reason: SuggestionReason
    deficit_from_ideal: float
    projected_sales: float


@dataclass(frozen=True)
class InventoryEvaluation:
    """Bir stok kaydı için tüm türetilmiş alanlar."""

    product_id: str
    location_id: str
    current_stock: int
    minimum_stock: int
    ideal_stock: int
    next_restock_date: Optional[date]
    stock_status: StockStatus
    needs_restock: bool
    restock_trigger_reason: Optional[RestockTriggerReason]
    days_until_stockout: Optional[int]
    projected_stockout_date: Optional[date]
    suggestion: RestockSuggestion
    days_until_restock: Optional[int]
    restock_urgency: RestockUrgency
    stock_percentage: float

    def to_dict(self) -> dict:
        return to_plain(asdict(self))


@dataclass(frozen=True)
class ProductPricing:
    retail_price: float
    unit_cost: float
    consignment_commission_rate: float = 0.0


@dataclass(frozen=True)
class StockValuation:
    stock_value: float
    potential_revenue: float
    profit_per_unit: float


@dataclass
class RestockAlert:
    """Harici bildirim/onay akışına verilecek stok tetikleyici kaydı."""

    alert_id: str
    location_id: str
    product_id: str
    alert_type: AlertType
    priority: AlertPriority
    trigger_reason: str
    suggested_quantity: int
    context_data: dict = field(default_factory=dict)
    created_at: str = field(default_factory=lambda: datetime.utcnow().isoformat())


def _parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


REQUIRED_RECORD_FIELDS = ("current_stock", "minimum_stock", "maximum_stock")


def inventory_record_from_dict(data: dict) -> InventoryRecord:
    """JSON benzeri bir sözlükten InventoryRecord oluşturur (ISO tarih)."""
    missing = [name for name in REQUIRED_RECORD_FIELDS if name not in data]
    if missing:
        raise InvalidInventoryRecordError(
            [f"Eksik alan: {name}" for name in missing], subject="inventory_record"
        )
    try:
        last_restock = _parse_date(data.get("last_restock_date"))
    except ValueError as e:
        raise InvalidInventoryRecordError(
            [f"Geçersiz last_restock_date: {e}"], subject="inventory_record"
        ) from e

    return InventoryRecord(
        current_stock=data["current_stock"],
        minimum_stock=data["minimum_stock"],
        maximum_stock=data["maximum_stock"],
        ideal_stock_percentage=data.get("ideal_stock_percentage", 80.0),
        last_restock_date=last_restock,
        restock_cycle_days=data.get("restock_cycle_days", 21),
        average_daily_sales=data.get("average_daily_sales", 0.0),
        product_id=str(data.get("product_id", "")),
        location_id=str(data.get("location_id", "")),
    )


def to_plain(obj: Any) -> Any:
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, dict):
        return {k: to_plain(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_plain(i) for i in obj]
    return obj
