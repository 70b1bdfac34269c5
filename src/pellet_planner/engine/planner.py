"""
Planning engine - duration model plus backward scheduling from the serve time.

Everything here is a pure function of the inputs, the catalog and ``now``.
``now`` only decides the affiliate mode, never the schedule itself.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from pellet_planner.catalog import ProfileCatalog, get_catalog
from pellet_planner.models import (
    AffiliateMode,
    MeatProfile,
    Plan,
    PlanInputs,
    PlanResult,
    SpritzWindow,
    WrapStrategy,
)
from pellet_planner.rules import RuleContext, RuleEngine

logger = logging.getLogger(__name__)

FALLBACK_RATE = 1.0
SPATCHCOCK_FACTOR = 0.75
# Heat lost each time the lid opens to spritz
SPRITZ_PENALTY_MINUTES = 15
# Pellet grill temperature swings
VARIABILITY_BUFFER = 0.15
# Stall factors in the catalog assume a wrap at ~160°F internal
WRAP_BASE_TEMP = 160
WRAP_SHIFT_PER_DEGREE = 0.005
# Unwrapped cooks stop spritzing an hour before the finish
SPRITZ_STOP_BEFORE_FINISH_MINUTES = 60
INSTANT_MODE_WINDOW = timedelta(hours=24)


@dataclass(frozen=True)
class DurationEstimate:
    """Intermediate results of the duration model."""

    rate: float
    used_fallback_rate: bool
    base_hours: float
    adjusted_hours: float
    spritz_count: int
    total_cook_minutes: float


def parse_serve_time(value: str | None) -> datetime | None:
    """ISO-8601 timestamp, or None when absent or unparsable."""
    if not value or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        logger.debug("Unparsable serve time: %r", value)
        return None


def estimate_duration(
    inputs: PlanInputs,
    profile: MeatProfile,
    wrap: WrapStrategy,
) -> DurationEstimate:
    """Total cook minutes for the inputs, buffer included."""
    temp_profile = profile.temp_profiles.get(inputs.temp)
    used_fallback = temp_profile is None
    rate = FALLBACK_RATE if temp_profile is None else temp_profile.rate
    if used_fallback:
        logger.info(
            "No rate for %s at %s°F, using fallback %.1f h/lb",
            inputs.meat_type.value,
            inputs.temp,
            FALLBACK_RATE,
        )

    base_hours = inputs.weight * rate
    if inputs.is_spatchcock and inputs.meat_type.is_poultry:
        base_hours *= SPATCHCOCK_FACTOR

    adjusted_hours = base_hours * wrap.multiplier

    spritz_count = 0
    if inputs.spritz_enabled:
        window = adjusted_hours * 60 - inputs.spritz_start
        if window > 0:
            spritz_count = math.floor(window / inputs.spritz_interval)
            adjusted_hours += spritz_count * SPRITZ_PENALTY_MINUTES / 60

    total_cook_minutes = adjusted_hours * (1 + VARIABILITY_BUFFER) * 60
    return DurationEstimate(
        rate=rate,
        used_fallback_rate=used_fallback,
        base_hours=base_hours,
        adjusted_hours=adjusted_hours,
        spritz_count=spritz_count,
        total_cook_minutes=total_cook_minutes,
    )


def wrap_timing_factor(inputs: PlanInputs, profile: MeatProfile) -> float:
    """Share of the cook elapsed at the wrap. Later for hotter wrap temps, capped at the finish."""
    factor = profile.stall_factor
    if inputs.wrapping and inputs.wrap_temp > WRAP_BASE_TEMP:
        factor += (inputs.wrap_temp - WRAP_BASE_TEMP) * WRAP_SHIFT_PER_DEGREE
    return min(factor, 1.0)


def classify_affiliate_mode(serve: datetime, now: datetime) -> AffiliateMode:
    """Instant when serving within a day."""
    if (serve.tzinfo is None) != (now.tzinfo is None):
        # Compare on the local wall clock
        now = now.astimezone().replace(tzinfo=None) if serve.tzinfo is None else now.astimezone()
    if serve - now < INSTANT_MODE_WINDOW:
        return AffiliateMode.INSTANT
    return AffiliateMode.PLANNING


class PlanningEngine:
    """Computes the cook plan and its warnings from one set of inputs."""

    def __init__(
        self,
        catalog: ProfileCatalog | None = None,
        rule_engine: RuleEngine | None = None,
    ) -> None:
        self._catalog = catalog or get_catalog()
        self._rules = rule_engine or RuleEngine()

    @property
    def catalog(self) -> ProfileCatalog:
        return self._catalog

    def compute(self, inputs: PlanInputs, now: datetime) -> PlanResult | None:
        """
        Build the plan. Returns None when serve time or weight is missing,
        which callers treat as insufficient input rather than an error. Values
        too large (or non-finite) to place on a calendar also give None.
        """
        serve = parse_serve_time(inputs.serve_time)
        if serve is None or not inputs.weight:
            return None

        profile = self._catalog.get_meat_profile(inputs.meat_type)
        wrap = self._catalog.get_wrap_strategy(inputs.wrap_strategy)
        try:
            estimate = estimate_duration(inputs, profile, wrap)
            total = estimate.total_cook_minutes

            finish_cook = serve - timedelta(minutes=inputs.rest_time)
            start_cook = finish_cook - timedelta(minutes=total)
            start_prep = start_cook - timedelta(minutes=inputs.prep_time)
            wrap_time = start_cook + timedelta(minutes=total * wrap_timing_factor(inputs, profile))

            spritz_window = None
            if inputs.spritz_enabled and estimate.spritz_count > 0:
                start = start_cook + timedelta(minutes=inputs.spritz_start)
                if inputs.wrapping:
                    end = wrap_time
                else:
                    end = finish_cook - timedelta(minutes=SPRITZ_STOP_BEFORE_FINISH_MINUTES)
                if end > start:
                    spritz_window = SpritzWindow(
                        start=start,
                        end=end,
                        count=estimate.spritz_count,
                        type=profile.spritz.type,
                    )
                else:
                    logger.debug(
                        "Spritz window closes before it opens, dropping it (%d applications still charged)",
                        estimate.spritz_count,
                    )
        except (OverflowError, ValueError) as e:
            logger.debug("Schedule out of calendar range, no plan: %s", e)
            return None

        plan = Plan(
            start_prep=start_prep,
            start_cook=start_cook,
            wrap_time=wrap_time,
            finish_cook=finish_cook,
            serve=serve,
            spritz_window=spritz_window,
            total_cook_minutes=total,
            total_cook_hours=round(total / 60, 1),
            affiliate_mode=classify_affiliate_mode(serve, now),
            used_fallback_rate=estimate.used_fallback_rate,
            meat_type=inputs.meat_type,
            meat_label=profile.label,
            wrap_strategy=inputs.wrap_strategy,
            wrap_label=wrap.label,
            wrap_temp=inputs.wrap_temp,
            target_temp=inputs.target_temp,
            rest_time=inputs.rest_time,
        )
        warnings = self._rules.evaluate(
            RuleContext(
                inputs=inputs,
                profile=profile,
                used_fallback_rate=estimate.used_fallback_rate,
            )
        )
        return PlanResult(plan=plan, warnings=warnings)


def compute_plan(
    inputs: PlanInputs,
    now: datetime,
    catalog: ProfileCatalog | None = None,
) -> PlanResult | None:
    """Convenience wrapper around PlanningEngine.compute."""
    return PlanningEngine(catalog=catalog).compute(inputs, now)
