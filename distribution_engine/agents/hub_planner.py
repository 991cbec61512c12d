"""Hub Planner Agent - bölgesel hub senaryolarını değerlendirir.

- Lokasyon listesinden bölge bazında mağaza sayısını çıkarır
- Senaryoları güncel konfigürasyon görüntüsüyle değerlendirir
- should_approve değerinin değiştiği senaryoları onay akışı için işaretler
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from distribution_engine.agents.base_agent import BaseAgent
from distribution_engine.batch import evaluate_hub_scenarios
from distribution_engine.engines.hub_economics import (
    assess,
    count_stores_by_region,
    scenario_for_region,
)
from distribution_engine.models.hub import (
    HubAssessment,
    HubScenario,
    LocationCostProfile,
)

logger = logging.getLogger(__name__)


class HubPlannerAgent(BaseAgent):
    """Hub genişleme senaryolarını değerlendiren agent."""

    def __init__(self, region_name: str = "us-east-1", **kwargs: Any):
        super().__init__(
            agent_name="HubPlannerAgent",
            region_name=region_name,
            **kwargs,
        )
        # Son bilinen onay durumu: {scenario_id: should_approve}
        self._approval_state: dict[str, bool] = {}

    # --- Senaryo değerlendirme ---

    def assess_scenario(self, scenario_id: str, scenario: HubScenario) -> HubAssessment:
        config = self.config_store.snapshot()
        assessment = assess(scenario, config.assumptions, config.criteria)
        self._record(scenario_id, scenario, assessment)
        return assessment

    def assess_region(
        self,
        profiles: Iterable[LocationCostProfile],
        region: str,
        commission_rate: Optional[float] = None,
        storage_fee: Optional[float] = None,
        setup_cost: Optional[float] = None,
    ) -> HubAssessment:
        """Bölgedeki aktif mağaza sayısıyla varsayılan şartlı senaryo değerlendirir."""
        config = self.config_store.snapshot()
        scenario = scenario_for_region(
            profiles, region, config.assumptions, commission_rate, storage_fee, setup_cost
        )
        assessment = assess(scenario, config.assumptions, config.criteria)
        self._record(f"region:{region}", scenario, assessment)
        return assessment

    def rank_regions(self, profiles: Iterable[LocationCostProfile]) -> list[dict]:
        """Tüm bölgeleri aylık tasarrufa göre sıralar (yüksekten düşüğe)."""
        profiles = list(profiles)
        ranked = []
        for region in count_stores_by_region(profiles):
            assessment = self.assess_region(profiles, region)
            ranked.append(
                {
                    "region": region,
                    "store_count": assessment.result.store_count,
                    "monthly_savings": assessment.result.monthly_savings,
                    "rating": assessment.rating.rating.value,
                    "should_approve": assessment.recommendation.should_approve,
                }
            )
        ranked.sort(key=lambda r: r["monthly_savings"], reverse=True)
        return ranked

    # --- Onay değişikliği takibi ---

    def approval_changed(self, scenario_id: str, assessment: HubAssessment) -> bool:
        """Onay kararı önceki değerlendirmeden farklıysa True (ilk görüş hariç)."""
        previous = self._approval_state.get(scenario_id)
        return previous is not None and previous != assessment.recommendation.should_approve

    def _record(self, scenario_id: str, scenario: HubScenario, assessment: HubAssessment) -> bool:
        changed = self.approval_changed(scenario_id, assessment)
        self._approval_state[scenario_id] = assessment.recommendation.should_approve

        if changed:
            logger.info(
                "Hub onay durumu değişti: %s -> should_approve=%s",
                scenario_id,
                assessment.recommendation.should_approve,
            )

        self.log_decision(
            decision_type="hub_scenario_assessment",
            input_data={
                "scenario_id": scenario_id,
                "store_count": scenario.store_count,
                "commission_rate": scenario.commission_rate,
                "monthly_storage_fee": scenario.monthly_storage_fee,
                "one_time_setup_cost": scenario.one_time_setup_cost,
            },
            output_data={
                "monthly_savings": assessment.result.monthly_savings,
                "break_even_months": assessment.result.break_even_months,
                "is_economical": assessment.result.is_economical,
                "rating": assessment.rating.rating.value,
                "should_approve": assessment.recommendation.should_approve,
                "approval_changed": changed,
            },
            reasoning=assessment.rating.message,
        )
        return changed

    # --- BaseAgent.process implementasyonu ---

    def process(self, scenarios: dict[str, HubScenario]) -> dict:
        """Ana işlem: tüm senaryoları tek konfigürasyon görüntüsüyle değerlendir."""
        ids = list(scenarios)
        assessments = evaluate_hub_scenarios(
            (scenarios[i] for i in ids), self.config_store.snapshot()
        )

        changed = []
        for scenario_id, assessment in zip(ids, assessments):
            if self._record(scenario_id, scenarios[scenario_id], assessment):
                changed.append(scenario_id)

        return {
            "agent": self.agent_name,
            "total_scenarios": len(ids),
            "approvable": [
                i for i, a in zip(ids, assessments) if a.recommendation.should_approve
            ],
            "approval_changed": changed,
            "assessments": {i: a.to_dict() for i, a in zip(ids, assessments)},
        }
