"""Rule engine for food safety and cook quality warnings. Rules never block a plan."""

import logging
from dataclasses import dataclass

from pellet_planner.models import (
    MeatProfile,
    MeatType,
    PlanInputs,
    PlanWarning,
    WarningType,
    WrapStrategyKey,
)

logger = logging.getLogger(__name__)

# Whole birds above this weight dwell too long in the danger zone at low temps
LARGE_TURKEY_LB = 14
SAFE_WHOLE_BIRD_MIN_TEMP = 275
# Below this set temp poultry skin stays rubbery
CRISP_SKIN_MIN_TEMP = 275


@dataclass
class RuleContext:
    """Context passed to rules."""

    inputs: PlanInputs
    profile: MeatProfile
    used_fallback_rate: bool = False

    @property
    def meat(self) -> MeatType:
        return self.inputs.meat_type


class RuleEngine:
    """Independent advisory checks. All matching rules fire."""

    def evaluate(self, ctx: RuleContext) -> list[PlanWarning]:
        """Run every rule against the context, in a stable order."""
        warnings: list[PlanWarning] = []
        for rule in (
            self._long_rest,
            self._large_turkey_low_temp,
            self._poultry_skin,
            self._no_wrap_stall,
            self._fat_side_up_spritz,
            self._fallback_rate,
        ):
            warning = rule(ctx)
            if warning is not None:
                logger.debug("Rule %s fired: %s", rule.__name__, warning.message)
                warnings.append(warning)
        return warnings

    def _long_rest(self, ctx: RuleContext) -> PlanWarning | None:
        max_hold = ctx.profile.rest.max_hold
        if ctx.inputs.rest_time <= max_hold:
            return None
        return PlanWarning(
            type=WarningType.QUALITY,
            message=(
                f"Long rest: {ctx.profile.label} may dry out if held longer than "
                f"{max_hold / 60:.1f}h without active heat."
            ),
        )

    def _large_turkey_low_temp(self, ctx: RuleContext) -> PlanWarning | None:
        inputs = ctx.inputs
        if (
            ctx.meat is MeatType.TURKEY
            and (inputs.weight or 0) > LARGE_TURKEY_LB
            and inputs.temp < SAFE_WHOLE_BIRD_MIN_TEMP
            and not inputs.is_spatchcock
        ):
            return PlanWarning(
                type=WarningType.SAFETY,
                message=(
                    f"Food safety: a whole turkey over {LARGE_TURKEY_LB} lb at {inputs.temp}°F "
                    f"spends too long between 40°F and 140°F. Spatchcock it or cook at "
                    f"{SAFE_WHOLE_BIRD_MIN_TEMP}°F or higher."
                ),
            )
        return None

    def _poultry_skin(self, ctx: RuleContext) -> PlanWarning | None:
        inputs = ctx.inputs
        if (
            ctx.meat.is_poultry
            and inputs.wrap_strategy is WrapStrategyKey.NONE
            and inputs.temp < CRISP_SKIN_MIN_TEMP
        ):
            return PlanWarning(
                type=WarningType.QUALITY,
                message=(
                    f"Rubbery skin: poultry skin won't render or crisp below "
                    f"{CRISP_SKIN_MIN_TEMP}°F. Bump the grill up to finish."
                ),
            )
        return None

    def _no_wrap_stall(self, ctx: RuleContext) -> PlanWarning | None:
        if ctx.inputs.wrap_strategy is WrapStrategyKey.NONE and not ctx.meat.is_poultry:
            return PlanWarning(
                type=WarningType.TIMING,
                message=(
                    'No-wrap strategy: the "stall" is unpredictable. '
                    "Plan for extra time (20%+ added)."
                ),
            )
        return None

    def _fat_side_up_spritz(self, ctx: RuleContext) -> PlanWarning | None:
        inputs = ctx.inputs
        if ctx.meat is MeatType.BRISKET and inputs.fat_side_up and inputs.spritz_enabled:
            return PlanWarning(
                type=WarningType.INFO,
                message=(
                    "Tip: with the fat side up the rendering fat already bastes the flat. "
                    "Spritzing may be redundant."
                ),
            )
        return None

    def _fallback_rate(self, ctx: RuleContext) -> PlanWarning | None:
        if not ctx.used_fallback_rate:
            return None
        supported = ", ".join(f"{t}°F" for t in ctx.profile.supported_temps())
        return PlanWarning(
            type=WarningType.INFO,
            message=(
                f"No cook-rate data for {ctx.profile.label} at {ctx.inputs.temp}°F; "
                f"estimating 1 h/lb. Supported: {supported}."
            ),
        )
