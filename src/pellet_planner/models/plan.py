"""Plan inputs and the derived cook timeline."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field

from pellet_planner.models.catalog import (
    AffiliateMode,
    AffiliateProduct,
    MeatType,
    WrapStrategyKey,
)


class PlanInputs(BaseModel):
    """User-supplied cook settings. One active instance, persisted between runs."""

    model_config = ConfigDict(validate_assignment=True, allow_inf_nan=False)

    meat_type: MeatType = Field(default=MeatType.PORK_BUTT)
    weight: float | None = Field(default=8, description="Pounds")
    temp: int = Field(default=250, description="Grill set temperature (°F)")
    rest_time: float = Field(default=45, description="Minutes between finish and serve")
    serve_time: str | None = Field(default=None, description="ISO-8601 serve timestamp")
    prep_time: float = Field(default=45, description="Minutes of prep before meat goes on")
    wrap_strategy: WrapStrategyKey = Field(default=WrapStrategyKey.FOIL)
    wrap_temp: int = Field(default=165, description="Internal temp (°F) to wrap at")
    target_temp: int = Field(default=203, description="Internal finish temp (°F)")
    spritz_enabled: bool = Field(default=True)
    spritz_start: float = Field(default=120, description="Minutes after cook start")
    spritz_interval: float = Field(default=60, gt=0, description="Minutes between applications")
    is_spatchcock: bool = Field(default=False, description="Butterflied poultry")
    fat_side_up: bool = Field(default=False, description="Brisket fat cap orientation")

    @property
    def wrapping(self) -> bool:
        return self.wrap_strategy is not WrapStrategyKey.NONE


class WarningType(str, Enum):
    """Warning category."""

    SAFETY = "safety"
    QUALITY = "quality"
    INFO = "info"
    TIMING = "timing"


class PlanWarning(BaseModel):
    """Advisory message. Never blocks plan output."""

    model_config = ConfigDict(frozen=True)

    type: WarningType
    message: str


class SpritzWindow(BaseModel):
    """Period during which the meat gets spritzed."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime
    count: int = Field(..., description="Number of applications")
    type: str = Field(..., description="Spritz liquid")


class Plan(BaseModel):
    """Backward-scheduled cook timeline."""

    model_config = ConfigDict(frozen=True)

    start_prep: datetime
    start_cook: datetime
    wrap_time: datetime
    finish_cook: datetime
    serve: datetime
    spritz_window: SpritzWindow | None = None
    total_cook_minutes: float
    total_cook_hours: float = Field(..., description="Rounded to one decimal")
    affiliate_mode: AffiliateMode
    used_fallback_rate: bool = False

    # Display context
    meat_type: MeatType
    meat_label: str
    wrap_strategy: WrapStrategyKey
    wrap_label: str
    wrap_temp: int
    target_temp: int
    rest_time: float

    @computed_field
    @property
    def is_poultry(self) -> bool:
        return self.meat_type.is_poultry

    @computed_field
    @property
    def wrapping(self) -> bool:
        return self.wrap_strategy is not WrapStrategyKey.NONE


def format_clock(value: datetime) -> str:
    """12-hour clock, e.g. 7:38 AM."""
    return value.strftime("%I:%M %p").lstrip("0")


class PlanResult(BaseModel):
    """Plan plus the warnings raised for it."""

    model_config = ConfigDict(frozen=True)

    plan: Plan
    warnings: list[PlanWarning] = Field(default_factory=list)

    def to_text(self, products: list[AffiliateProduct] | None = None) -> str:
        """Plain-text timeline, warnings first."""
        p = self.plan
        lines = [f"Pellet Plan - {p.meat_label}", f"Total cook: ~{p.total_cook_hours:.1f}h", ""]
        for w in self.warnings:
            lines.append(f"[{w.type.value.upper()}] {w.message}")
        if self.warnings:
            lines.append("")

        lines.append(f"{format_clock(p.start_prep):>8}  Start Prep - trim, season, ignite grill.")
        lines.append(f"{format_clock(p.start_cook):>8}  Meat on Grate - close the lid. Don't look.")
        if p.wrapping:
            lines.append(
                f"{'~' + format_clock(p.wrap_time):>8}  Wrap Meat ({p.wrap_temp}°F) - "
                f"bark is set. Wrap in {p.wrap_label}."
            )
        else:
            lines.append(
                f"{'~' + format_clock(p.wrap_time):>8}  The Stall - temp will stick around 160°F. Be patient."
            )
        if p.spritz_window:
            sw = p.spritz_window
            lines.append(
                f"{format_clock(sw.start):>8}  Spritz with {sw.type} until "
                f"{format_clock(sw.end)} ({sw.count}x)."
            )
        finish_note = (
            f"internal temp {p.target_temp}°F"
            if p.is_poultry
            else f"probe tender, ~{p.target_temp}°F"
        )
        lines.append(f"{format_clock(p.finish_cook):>8}  Target Finish - {finish_note}.")
        lines.append(f"{format_clock(p.serve):>8}  Serve - after a {p.rest_time:g}m rest.")

        if products:
            heading = "Quick Fixes" if p.affiliate_mode is AffiliateMode.INSTANT else "Pro Gear for This Cook"
            lines.extend(["", f"{heading}:"])
            for item in products:
                lines.append(f"  - {item.title}: {item.why}")
        return "\n".join(lines).strip()
