from distribution_engine.models.decisions import AgentDecision, ValidationResult
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
    hub_scenario_from_dict,
)
from distribution_engine.models.inventory import (
    AlertPriority,
    AlertType,
    InventoryEvaluation,
    InventoryRecord,
    ProductPricing,
    RestockAlert,
    RestockSuggestion,
    RestockTriggerReason,
    RestockUrgency,
    StockClassification,
    StockoutProjection,
    StockStatus,
    StockValuation,
    SuggestionReason,
    inventory_record_from_dict,
)

__all__ = [
    "AgentDecision",
    "AlertPriority",
    "AlertType",
    "HubAssessment",
    "HubCostAssumptions",
    "HubEconomicsResult",
    "HubPriority",
    "HubRecommendation",
    "HubScenario",
    "HubViabilityCriteria",
    "InventoryEvaluation",
    "InventoryRecord",
    "LocationCostProfile",
    "LocationTier",
    "ProductPricing",
    "ProjectedCosts",
    "RestockAlert",
    "RestockSuggestion",
    "RestockTriggerReason",
    "RestockUrgency",
    "StockClassification",
    "StockoutProjection",
    "StockStatus",
    "StockValuation",
    "SuggestionReason",
    "ValidationResult",
    "ViabilityRating",
    "ViabilityRatingLevel",
    "hub_scenario_from_dict",
    "inventory_record_from_dict",
]
