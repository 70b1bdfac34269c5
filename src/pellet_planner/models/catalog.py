"""Reference data models - meat profiles, wrap strategies, affiliate products."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MeatType(str, Enum):
    """Supported cuts. Every member must have a catalog profile."""

    BRISKET = "brisket"
    PORK_BUTT = "porkButt"
    RIBS = "ribs"
    TURKEY = "turkey"
    CHICKEN = "chicken"

    @property
    def is_poultry(self) -> bool:
        return self in POULTRY


POULTRY = frozenset({MeatType.TURKEY, MeatType.CHICKEN})


class WrapStrategyKey(str, Enum):
    """How the meat is wrapped through the stall."""

    FOIL = "foil"
    FOIL_PAN = "foil_pan"
    PAPER = "paper"
    NONE = "none"


class AffiliateMode(str, Enum):
    """Which gear list to show: last-minute fixes or gear worth ordering ahead."""

    INSTANT = "instant"
    PLANNING = "planning"


class TempProfile(BaseModel):
    """Cook rate at one set temperature."""

    model_config = ConfigDict(frozen=True)

    rate: float = Field(..., description="Hours of cook time per pound")


class RestBounds(BaseModel):
    """Rest/hold durations in minutes."""

    model_config = ConfigDict(frozen=True)

    default: int = Field(..., description="Recommended rest")
    min: int = Field(..., description="Minimum rest")
    max_hold: int = Field(..., description="Longest safe hold without active heat")


class SpritzDefaults(BaseModel):
    """Default basting policy for a cut."""

    model_config = ConfigDict(frozen=True)

    recommended: bool = Field(default=False)
    start_after: int = Field(..., description="Minutes after cook start")
    interval: int = Field(..., gt=0, description="Minutes between applications")
    type: str = Field(..., description="Liquid used, e.g. apple juice")


class MeatProfile(BaseModel):
    """Cook characteristics for one meat type."""

    model_config = ConfigDict(frozen=True)

    label: str
    default_weight: float = Field(..., description="Pounds, seeds a new plan")
    temp_profiles: dict[int, TempProfile] = Field(..., description="Set temp (°F) -> rate")
    rest: RestBounds
    stall_factor: float = Field(..., gt=0, lt=1, description="Stall point as share of cook time")
    default_target_temp: int = Field(..., description="Internal finish temp (°F)")
    default_wrap_strategy: WrapStrategyKey = Field(default=WrapStrategyKey.FOIL)
    spritz: SpritzDefaults

    def supported_temps(self) -> list[int]:
        return sorted(self.temp_profiles)


class WrapStrategy(BaseModel):
    """Wrap technique and its effect on total cook duration."""

    model_config = ConfigDict(frozen=True)

    label: str
    multiplier: float = Field(..., gt=0)
    desc: str = ""


class AffiliateProduct(BaseModel):
    """Static gear recommendation."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    link: str = "#"
    why: str = ""
