"""Girdi doğrulama - hesaplamadan önce veri bütünlüğü kontrolleri.

Hatalı veya çelişkili kayıtlar sessizce düzeltilmez; sınırda reddedilir.
Her kontrol tüm hataları toplayıp tek bir ValidationResult döndürür,
``require_*`` yardımcıları ise geçersiz sonucu istisnaya çevirir.
"""

from __future__ import annotations

import math
import numbers

from distribution_engine.errors import (
    ConfigurationError,
    InvalidHubScenarioError,
    InvalidInventoryRecordError,
)
from distribution_engine.models.decisions import ValidationResult
from distribution_engine.models.hub import (
    HubCostAssumptions,
    HubScenario,
    HubViabilityCriteria,
)
from distribution_engine.models.inventory import InventoryRecord


def _is_number(value: object) -> bool:
    """Sonlu gerçek sayı (NaN, sonsuz ve bool hariç)."""
    return (
        isinstance(value, numbers.Real)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _is_integer(value: object) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


# --- Stok kaydı ---

def validate_inventory_record(record: InventoryRecord) -> ValidationResult:
    errors: list[str] = []

    for name in ("current_stock", "minimum_stock", "maximum_stock"):
        if not _is_number(getattr(record, name)):
            errors.append(f"{name} sonlu bir sayı olmalı: {getattr(record, name)!r}")
    if errors:
        return ValidationResult(is_valid=False, errors=errors)

    if record.current_stock < 0:
        errors.append(f"Negatif stok: current_stock={record.current_stock}")
    if record.minimum_stock < 0:
        errors.append(f"Negatif minimum stok: minimum_stock={record.minimum_stock}")
    if record.maximum_stock < record.minimum_stock:
        errors.append(
            f"maximum_stock ({record.maximum_stock}) minimum_stock "
            f"({record.minimum_stock}) değerinden küçük olamaz"
        )

    if not _is_integer(record.restock_cycle_days) or record.restock_cycle_days <= 0:
        errors.append(
            f"restock_cycle_days pozitif tam sayı olmalı: {record.restock_cycle_days!r}"
        )

    pct = record.ideal_stock_percentage
    if not _is_number(pct) or not 0 <= pct <= 100:
        errors.append(f"ideal_stock_percentage 0-100 arasında olmalı: {pct!r}")

    sales = record.average_daily_sales
    if not _is_number(sales) or sales < 0:
        errors.append(f"average_daily_sales negatif olamaz: {sales!r}")

    return ValidationResult(is_valid=len(errors) == 0, errors=errors)


def require_valid_record(record: InventoryRecord) -> None:
    result = validate_inventory_record(record)
    if not result.is_valid:
        subject = "/".join(p for p in (record.location_id, record.product_id) if p) or None
        raise InvalidInventoryRecordError(result.errors, subject=subject)


# --- Hub senaryosu ---

def validate_hub_scenario(scenario: HubScenario) -> ValidationResult:
    errors: list[str] = []

    if not _is_integer(scenario.store_count) or scenario.store_count < 0:
        errors.append(f"store_count negatif olmayan tam sayı olmalı: {scenario.store_count!r}")

    for name in ("commission_rate", "monthly_storage_fee", "one_time_setup_cost"):
        value = getattr(scenario, name)
        if not _is_number(value):
            errors.append(f"{name} sayısal olmalı: {value!r}")
        elif value < 0:
            errors.append(f"{name} negatif olamaz: {value}")

    return ValidationResult(is_valid=len(errors) == 0, errors=errors)


def require_valid_scenario(scenario: HubScenario) -> None:
    result = validate_hub_scenario(scenario)
    if not result.is_valid:
        raise InvalidHubScenarioError(result.errors, subject="hub_scenario")


# --- Konfigürasyon ---

def check_assumptions(assumptions: HubCostAssumptions) -> None:
    """Maliyet varsayımlarını kontrol eder; hatada ConfigurationError fırlatır."""
    if not isinstance(assumptions, HubCostAssumptions):
        raise ConfigurationError(
            f"HubCostAssumptions bekleniyordu, gelen: {type(assumptions).__name__}"
        )
    problems = []
    for name, value in vars(assumptions).items():
        if not _is_number(value):
            problems.append(f"{name} sayısal olmalı: {value!r}")
        elif value < 0:
            problems.append(f"{name} negatif olamaz: {value}")
    rate = assumptions.bulk_shipping_discount_rate
    if _is_number(rate) and rate > 1:
        problems.append(f"bulk_shipping_discount_rate 0-1 arasında olmalı: {rate}")
    if problems:
        raise ConfigurationError("; ".join(problems))


def check_criteria(criteria: HubViabilityCriteria) -> None:
    if not isinstance(criteria, HubViabilityCriteria):
        raise ConfigurationError(
            f"HubViabilityCriteria bekleniyordu, gelen: {type(criteria).__name__}"
        )
    problems = [
        f"{name} sayısal olmalı: {value!r}"
        for name, value in vars(criteria).items()
        if not _is_number(value)
    ]
    if problems:
        raise ConfigurationError("; ".join(problems))
