"""Pellet grill cook planner - backward scheduling from serve time."""

from pellet_planner.engine import PlanningEngine, compute_plan
from pellet_planner.models import PlanInputs, PlanResult

__version__ = "0.1.0"

__all__ = ["PlanInputs", "PlanResult", "PlanningEngine", "compute_plan"]
