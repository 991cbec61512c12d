"""Maliyet varsayımları ve hub uygunluk kriterleri konfigürasyonu.

Kaynaklar:
- Ortam değişkenleri (``env_loader`` ile .env dosyasından yüklenir)
- YAML dosyası (``assumptions:`` ve ``criteria:`` bölümleri, tüm alanlar zorunlu)

ConfigStore, konfigürasyonu tek bir değişmez nesne olarak tutar; yeniden
yükleme nesnenin tamamını kilit altında değiştirir.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from distribution_engine.engines.validation import check_assumptions, check_criteria
from distribution_engine.errors import ConfigurationError
from distribution_engine.models.hub import HubCostAssumptions, HubViabilityCriteria

logger = logging.getLogger(__name__)

DEFAULT_HUB_COST_ASSUMPTIONS = HubCostAssumptions()
DEFAULT_HUB_VIABILITY_CRITERIA = HubViabilityCriteria()

# Ortam değişkeni -> HubCostAssumptions alanı
ASSUMPTION_ENV_VARS: dict[str, str] = {
    "DIRECT_SHIPPING_COST_PER_SHIPMENT": "direct_shipping_cost_per_shipment",
    "SHIPMENTS_PER_STORE_PER_MONTH": "shipments_per_store_per_month",
    "BULK_SHIPPING_DISCOUNT_RATE": "bulk_shipping_discount_rate",
    "LOCAL_DELIVERY_COST_PER_SHIPMENT": "local_delivery_cost_per_shipment",
    "AVERAGE_ORDER_VALUE": "average_order_value",
    "DEFAULT_SETUP_COST": "default_setup_cost",
    "DEFAULT_STORAGE_FEE": "default_storage_fee",
    "DEFAULT_COMMISSION_RATE": "default_commission_rate",
}

CRITERIA_ENV_VARS: dict[str, str] = {
    "HUB_MINIMUM_STORES": "minimum_stores",
    "HUB_MINIMUM_MONTHLY_SAVINGS": "minimum_monthly_savings",
    "HUB_MAXIMUM_BREAK_EVEN_MONTHS": "maximum_break_even_months",
    "HUB_IDEAL_STORES": "ideal_stores",
    "HUB_IDEAL_MONTHLY_SAVINGS": "ideal_monthly_savings",
    "HUB_IDEAL_BREAK_EVEN_MONTHS": "ideal_break_even_months",
    "HUB_IDEAL_ROI_PERCENTAGE": "ideal_roi_percentage",
}

_INTEGER_CRITERIA = {
    "minimum_stores",
    "maximum_break_even_months",
    "ideal_stores",
    "ideal_break_even_months",
}


@dataclass(frozen=True)
class EngineConfig:
    assumptions: HubCostAssumptions = DEFAULT_HUB_COST_ASSUMPTIONS
    criteria: HubViabilityCriteria = DEFAULT_HUB_VIABILITY_CRITERIA


def _parse_number(name: str, raw: Any, integer: bool = False) -> Union[int, float]:
    if isinstance(raw, bool):
        raise ConfigurationError(f"{name} sayısal olmalı: {raw!r}")
    try:
        value = float(raw)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{name} sayısal olmalı: {raw!r}") from e
    if integer:
        if not value.is_integer():
            raise ConfigurationError(f"{name} tam sayı olmalı: {raw!r}")
        return int(value)
    return value


# --- Sözlükten yükleme (tüm alanlar zorunlu) ---

def assumptions_from_mapping(data: Mapping[str, Any]) -> HubCostAssumptions:
    """Eksik alan varsa ConfigurationError fırlatır."""
    names = [f.name for f in fields(HubCostAssumptions)]
    missing = [n for n in names if n not in data]
    if missing:
        raise ConfigurationError(f"Eksik maliyet varsayımları: {', '.join(missing)}")
    assumptions = HubCostAssumptions(**{n: _parse_number(n, data[n]) for n in names})
    check_assumptions(assumptions)
    return assumptions


def criteria_from_mapping(data: Mapping[str, Any]) -> HubViabilityCriteria:
    names = [f.name for f in fields(HubViabilityCriteria)]
    # ROI eşiği sonradan eklendi, verilmezse varsayılan kullanılır
    required = [n for n in names if n != "ideal_roi_percentage"]
    missing = [n for n in required if n not in data]
    if missing:
        raise ConfigurationError(f"Eksik uygunluk kriterleri: {', '.join(missing)}")
    values = {
        n: _parse_number(n, data[n], integer=n in _INTEGER_CRITERIA)
        for n in names
        if n in data
    }
    criteria = HubViabilityCriteria(**values)
    check_criteria(criteria)
    return criteria


# --- Ortam değişkenlerinden yükleme ---

def _overrides_from_env(
    mapping: dict[str, str], environ: Mapping[str, str], integer_fields: set[str]
) -> dict[str, Union[int, float]]:
    overrides = {}
    for env_name, field_name in mapping.items():
        raw = environ.get(env_name)
        if raw is None or raw.strip() == "":
            continue
        overrides[field_name] = _parse_number(env_name, raw, integer=field_name in integer_fields)
    return overrides


def load_config_from_env(environ: Optional[Mapping[str, str]] = None) -> EngineConfig:
    """Tanımlı ortam değişkenleri varsayılanların üzerine yazılır."""
    environ = os.environ if environ is None else environ
    assumption_values = _overrides_from_env(ASSUMPTION_ENV_VARS, environ, set())
    criteria_values = _overrides_from_env(CRITERIA_ENV_VARS, environ, _INTEGER_CRITERIA)

    assumptions = HubCostAssumptions(**assumption_values)
    criteria = HubViabilityCriteria(**criteria_values)
    check_assumptions(assumptions)
    check_criteria(criteria)

    if assumption_values or criteria_values:
        logger.info(
            "Ortamdan konfigürasyon yüklendi: %d varsayım, %d kriter override",
            len(assumption_values),
            len(criteria_values),
        )
    return EngineConfig(assumptions=assumptions, criteria=criteria)


# --- YAML dosyasından yükleme ---

def load_config_file(path: Union[str, Path]) -> EngineConfig:
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Konfigürasyon dosyası okunamadı: {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Geçersiz YAML: {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Konfigürasyon kökü sözlük olmalı: {path}")
    for section in ("assumptions", "criteria"):
        if not isinstance(raw.get(section), dict):
            raise ConfigurationError(f"'{section}' bölümü eksik: {path}")

    config = EngineConfig(
        assumptions=assumptions_from_mapping(raw["assumptions"]),
        criteria=criteria_from_mapping(raw["criteria"]),
    )
    logger.info("Konfigürasyon dosyası yüklendi: %s", path)
    return config


# --- Atomik konfigürasyon deposu ---

class ConfigStore:
    """Çalışma anında değiştirilebilen, tek parça konfigürasyon tutucu."""

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self._config = config or EngineConfig()
        self._lock = threading.Lock()

    def snapshot(self) -> EngineConfig:
        with self._lock:
            return self._config

    def reload(self, config: EngineConfig) -> EngineConfig:
        """Konfigürasyonun tamamını değiştirir, öncekini döndürür."""
        check_assumptions(config.assumptions)
        check_criteria(config.criteria)
        with self._lock:
            previous = self._config
            self._config = config
        logger.info("Konfigürasyon yenilendi")
        return previous

    def reload_from_file(self, path: Union[str, Path]) -> EngineConfig:
        return self.reload(load_config_file(path))

    def reload_from_env(self, environ: Optional[Mapping[str, str]] = None) -> EngineConfig:
        return self.reload(load_config_from_env(environ))
