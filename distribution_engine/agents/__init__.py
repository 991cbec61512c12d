from distribution_engine.agents.base_agent import BaseAgent
from distribution_engine.agents.hub_planner import HubPlannerAgent
from distribution_engine.agents.restock_monitor import RestockMonitorAgent

__all__ = [
    "BaseAgent",
    "HubPlannerAgent",
    "RestockMonitorAgent",
]
