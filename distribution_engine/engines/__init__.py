from distribution_engine.engines import hub_economics, stock_status
from distribution_engine.engines.hub_economics import assess, evaluate, rate, recommend
from distribution_engine.engines.stock_status import (
    classify,
    evaluate_inventory,
    next_restock_date,
    project_stockout,
    suggest_restock_quantity,
)

__all__ = [
    "assess",
    "classify",
    "evaluate",
    "evaluate_inventory",
    "hub_economics",
    "next_restock_date",
    "project_stockout",
    "rate",
    "recommend",
    "stock_status",
    "suggest_restock_quantity",
]
