"""Data models."""

from pellet_planner.models.catalog import (
    POULTRY,
    AffiliateMode,
    AffiliateProduct,
    MeatProfile,
    MeatType,
    RestBounds,
    SpritzDefaults,
    TempProfile,
    WrapStrategy,
    WrapStrategyKey,
)
from pellet_planner.models.plan import (
    Plan,
    PlanInputs,
    PlanResult,
    PlanWarning,
    SpritzWindow,
    WarningType,
)

__all__ = [
    "POULTRY",
    "AffiliateMode",
    "AffiliateProduct",
    "MeatProfile",
    "MeatType",
    "Plan",
    "PlanInputs",
    "PlanResult",
    "PlanWarning",
    "RestBounds",
    "SpritzDefaults",
    "SpritzWindow",
    "TempProfile",
    "WarningType",
    "WrapStrategy",
    "WrapStrategyKey",
]
