"""Restock Monitor Agent - stok kayıtlarını değerlendirir, tetikleyici üretir.

- Her (lokasyon, ürün) kaydı için stok durumu motorunu çalıştırır
- needs_restock false -> true geçişlerini tespit eder
- Harici bildirim/onay akışının tüketeceği uyarı kayıtlarını hazırlar
- Yaklaşan yeniden stoklama tarihleri için hatırlatma üretir

Bildirim gönderimi bu agentın işi değildir.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Any, Iterable, Optional

from distribution_engine.agents.base_agent import BaseAgent
from distribution_engine.batch import evaluate_inventory_batch
from distribution_engine.errors import InvalidInventoryRecordError
from distribution_engine.models.inventory import (
    AlertPriority,
    AlertType,
    InventoryEvaluation,
    InventoryRecord,
    RestockAlert,
    RestockTriggerReason,
    RestockUrgency,
)

logger = logging.getLogger(__name__)

# Tetikleyici neden -> (uyarı tipi, öncelik)
ALERT_RULES: dict[RestockTriggerReason, tuple[AlertType, AlertPriority]] = {
    RestockTriggerReason.EMERGENCY: (AlertType.CRITICAL, AlertPriority.URGENT),
    RestockTriggerReason.STOCK_CRITICAL: (AlertType.CRITICAL, AlertPriority.URGENT),
    RestockTriggerReason.BOTH: (AlertType.LOW_STOCK, AlertPriority.HIGH),
    RestockTriggerReason.STOCK_LOW: (AlertType.LOW_STOCK, AlertPriority.HIGH),
    RestockTriggerReason.DATE_DUE: (AlertType.OVERDUE, AlertPriority.NORMAL),
}


def _record_key(evaluation: InventoryEvaluation) -> tuple[str, str]:
    return (evaluation.location_id, evaluation.product_id)


def describe_trigger(evaluation: InventoryEvaluation) -> str:
    """Uyarı için okunabilir tetikleyici açıklaması."""
    reason = evaluation.restock_trigger_reason
    current = evaluation.current_stock
    minimum = evaluation.minimum_stock
    if reason in (RestockTriggerReason.EMERGENCY, RestockTriggerReason.STOCK_CRITICAL):
        text = f"Stock level ({current}) is at or below 50% of minimum ({minimum})"
        if reason == RestockTriggerReason.EMERGENCY:
            text += f" and restock was due on {evaluation.next_restock_date}"
        return text
    if reason == RestockTriggerReason.BOTH:
        return (
            f"Stock level ({current}) is at or below minimum ({minimum}) "
            f"and restock was due on {evaluation.next_restock_date}"
        )
    if reason == RestockTriggerReason.STOCK_LOW:
        return f"Stock level ({current}) is at or below minimum ({minimum})"
    if reason == RestockTriggerReason.DATE_DUE:
        return f"Restock due since {evaluation.next_restock_date}"
    return (
        f"Restock scheduled in {evaluation.days_until_restock} days "
        f"({evaluation.next_restock_date})"
    )


class RestockMonitorAgent(BaseAgent):
    """Stok sağlığını izleyen ve yeniden stoklama tetikleyicilerini üreten agent."""

    def __init__(self, region_name: str = "us-east-1", **kwargs: Any):
        super().__init__(
            agent_name="RestockMonitorAgent",
            region_name=region_name,
            **kwargs,
        )
        # Son görülen needs_restock değeri: {(location_id, product_id): bool}
        self._last_needs_restock: dict[tuple[str, str], bool] = {}

    # --- Değerlendirme ---

    def evaluate(self, records: Iterable[InventoryRecord], today: date) -> list[InventoryEvaluation]:
        """Kayıtları değerlendirir; geçiş takibi için her kayıt kimlik taşımalı."""
        records = list(records)
        missing = [
            f"Kayıt #{i}: location_id ve product_id zorunlu"
            for i, r in enumerate(records)
            if not r.location_id or not r.product_id
        ]
        if missing:
            raise InvalidInventoryRecordError(missing, subject=self.agent_name)
        return evaluate_inventory_batch(records, today)

    # --- Geçiş tespiti ---

    def detect_new_restock_needs(
        self, evaluations: list[InventoryEvaluation]
    ) -> list[InventoryEvaluation]:
        """needs_restock değeri true'ya yeni dönen kayıtları döndürür.

        İlk kez görülen ve stoklama gerektiren kayıt da yeni sayılır.
        """
        newly_triggered = []
        for evaluation in evaluations:
            key = _record_key(evaluation)
            previous = self._last_needs_restock.get(key, False)
            if evaluation.needs_restock and not previous:
                newly_triggered.append(evaluation)
            self._last_needs_restock[key] = evaluation.needs_restock
        return newly_triggered

    # --- Uyarı kayıtları ---

    def build_alert(self, evaluation: InventoryEvaluation) -> Optional[RestockAlert]:
        """Değerlendirmeden uyarı kaydı oluşturur; gerek yoksa None."""
        if evaluation.needs_restock and evaluation.restock_trigger_reason is not None:
            alert_type, priority = ALERT_RULES[evaluation.restock_trigger_reason]
        elif evaluation.restock_urgency == RestockUrgency.UPCOMING:
            alert_type, priority = AlertType.UPCOMING_RESTOCK, AlertPriority.LOW
        else:
            return None

        return RestockAlert(
            alert_id=str(uuid.uuid4()),
            location_id=evaluation.location_id,
            product_id=evaluation.product_id,
            alert_type=alert_type,
            priority=priority,
            trigger_reason=describe_trigger(evaluation),
            suggested_quantity=evaluation.suggestion.quantity,
            context_data={
                "current_stock": evaluation.current_stock,
                "min_stock": evaluation.minimum_stock,
                "stock_status": evaluation.stock_status.value,
                "next_restock": (
                    evaluation.next_restock_date.isoformat()
                    if evaluation.next_restock_date
                    else None
                ),
                "days_until_stockout": evaluation.days_until_stockout,
            },
        )

    def build_alerts(self, evaluations: Iterable[InventoryEvaluation]) -> list[RestockAlert]:
        alerts = []
        for evaluation in evaluations:
            alert = self.build_alert(evaluation)
            if alert is not None:
                alerts.append(alert)
        return alerts

    def to_notifications(self, alerts: list[RestockAlert]) -> list[dict]:
        """Uyarıları harici bildirim katmanına verilecek sözlüklere çevirir."""
        return [
            {
                "type": "restock_alert",
                "alert_id": alert.alert_id,
                "location_id": alert.location_id,
                "product_id": alert.product_id,
                "alert_type": alert.alert_type.value,
                "priority": alert.priority.value,
                "trigger_reason": alert.trigger_reason,
                "suggested_quantity": alert.suggested_quantity,
                "requires_approval": True,
            }
            for alert in alerts
        ]

    # --- BaseAgent.process implementasyonu ---

    def process(self, records: Iterable[InventoryRecord], today: date) -> dict:
        """Ana işlem: değerlendir, yeni tetiklenenleri bul, uyarı hazırla."""
        evaluations = self.evaluate(records, today)
        newly_triggered = self.detect_new_restock_needs(evaluations)
        triggered_keys = {_record_key(e) for e in newly_triggered}

        # Yeni tetiklenenler + stoklama gerekmeyen ama tarihi yaklaşanlar
        candidates = newly_triggered + [
            e for e in evaluations
            if not e.needs_restock
            and e.restock_urgency == RestockUrgency.UPCOMING
            and _record_key(e) not in triggered_keys
        ]
        alerts = self.build_alerts(candidates)

        if newly_triggered:
            self.log_decision(
                decision_type="restock_trigger_detection",
                input_data={"record_count": len(evaluations), "today": today.isoformat()},
                output_data={
                    "triggered": [
                        {
                            "location_id": e.location_id,
                            "product_id": e.product_id,
                            "reason": e.restock_trigger_reason.value,
                            "suggested_quantity": e.suggestion.quantity,
                        }
                        for e in newly_triggered
                    ],
                },
                reasoning=f"{len(newly_triggered)} kayıt için yeniden stoklama tetiklendi.",
            )

        status_counts: dict[str, int] = {}
        for e in evaluations:
            status_counts[e.stock_status.value] = status_counts.get(e.stock_status.value, 0) + 1

        return {
            "agent": self.agent_name,
            "total_records": len(evaluations),
            "needs_restock": sum(1 for e in evaluations if e.needs_restock),
            "newly_triggered": len(newly_triggered),
            "status_counts": status_counts,
            "alerts": len(alerts),
            "notifications": self.to_notifications(alerts),
        }
