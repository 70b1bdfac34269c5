"""Warning rules."""

from pellet_planner.rules.engine import RuleContext, RuleEngine

__all__ = ["RuleContext", "RuleEngine"]
