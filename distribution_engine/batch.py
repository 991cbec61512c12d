"""Toplu değerlendirme - çok sayıda kayıt/senaryoyu paralel işler.

Motor fonksiyonları saf olduğu için değerlendirmeler arasında senkronizasyon
gerekmez. Her toplu işlem başında konfigürasyonun tek bir anlık görüntüsü
alınır; işlem sürerken yapılan yeniden yüklemeler o işlemi etkilemez.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date
from typing import Iterable, Union

from distribution_engine.config import ConfigStore, EngineConfig
from distribution_engine.engines.hub_economics import assess
from distribution_engine.engines.stock_status import evaluate_inventory
from distribution_engine.models.hub import HubAssessment, HubScenario
from distribution_engine.models.inventory import InventoryEvaluation, InventoryRecord

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


def evaluate_inventory_batch(
    records: Iterable[InventoryRecord],
    today: date,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[InventoryEvaluation]:
    """Kayıtları paralel değerlendirir, sonuçlar girdi sırasıyla döner.

    Geçersiz bir kayıt tüm batch'i InvalidInventoryRecordError ile durdurur;
    kısmi sonuç döndürülmez.
    """
    records = list(records)
    if not records:
        return []

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        evaluations = list(executor.map(lambda r: evaluate_inventory(r, today), records))

    logger.info(
        "%d stok kaydı değerlendirildi, %d yeniden stoklama gerektiriyor",
        len(evaluations),
        sum(1 for e in evaluations if e.needs_restock),
    )
    return evaluations


def evaluate_hub_scenarios(
    scenarios: Iterable[HubScenario],
    config: Union[EngineConfig, ConfigStore, None] = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[HubAssessment]:
    """Senaryoları aynı konfigürasyon görüntüsüyle paralel değerlendirir."""
    if isinstance(config, ConfigStore):
        snapshot = config.snapshot()
    else:
        snapshot = config or EngineConfig()

    scenarios = list(scenarios)
    if not scenarios:
        return []

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        assessments = list(
            executor.map(
                lambda s: assess(s, snapshot.assumptions, snapshot.criteria),
                scenarios,
            )
        )

    logger.info(
        "%d hub senaryosu değerlendirildi, %d onaylanabilir",
        len(assessments),
        sum(1 for a in assessments if a.recommendation.should_approve),
    )
    return assessments
