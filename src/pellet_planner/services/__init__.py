"""Application services."""

from pellet_planner.services.planner_service import PlannerService, apply_meat_defaults

__all__ = ["PlannerService", "apply_meat_defaults"]
