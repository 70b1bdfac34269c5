"""Planning engine."""

from pellet_planner.engine.planner import (
    DurationEstimate,
    PlanningEngine,
    compute_plan,
    estimate_duration,
    parse_serve_time,
)

__all__ = [
    "DurationEstimate",
    "PlanningEngine",
    "compute_plan",
    "estimate_duration",
    "parse_serve_time",
]
