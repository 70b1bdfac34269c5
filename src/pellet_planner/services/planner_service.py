"""Planner service - holds the active settings and wraps the engine at the app edge."""

import logging
from datetime import datetime
from typing import Any, Callable, Protocol

from pellet_planner.catalog import ProfileCatalog
from pellet_planner.engine import PlanningEngine
from pellet_planner.models import MeatProfile, MeatType, PlanInputs, PlanResult

logger = logging.getLogger(__name__)

DEFAULT_MEAT = MeatType.PORK_BUTT
DEFAULT_WRAP_TEMP = 165


class SettingsPersistence(Protocol):
    """Load/save collaborator for the last-used settings."""

    def load(self) -> PlanInputs | None: ...

    def save(self, inputs: PlanInputs) -> None: ...


def apply_meat_defaults(
    inputs: PlanInputs,
    meat_type: MeatType,
    profile: MeatProfile,
) -> PlanInputs:
    """Switch meat type, resetting every per-meat field to the profile defaults."""
    return inputs.model_copy(
        update={
            "meat_type": meat_type,
            "weight": profile.default_weight,
            "rest_time": profile.rest.default,
            "wrap_strategy": profile.default_wrap_strategy,
            "wrap_temp": DEFAULT_WRAP_TEMP,
            "target_temp": profile.default_target_temp,
            "spritz_enabled": profile.spritz.recommended,
            "spritz_start": profile.spritz.start_after,
            "spritz_interval": profile.spritz.interval,
            "is_spatchcock": False,
            "fat_side_up": False,
        }
    )


class PlannerService:
    """Owns the single active PlanInputs. Every change is saved, every read recomputes."""

    def __init__(
        self,
        store: SettingsPersistence | None,
        engine: PlanningEngine,
        *,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._engine = engine
        self._now = now
        self._inputs = self._load_or_default()

    @property
    def inputs(self) -> PlanInputs:
        return self._inputs

    @property
    def catalog(self) -> ProfileCatalog:
        return self._engine.catalog

    def default_inputs(self, meat_type: MeatType = DEFAULT_MEAT) -> PlanInputs:
        """Fresh inputs seeded from the catalog."""
        profile = self._engine.catalog.get_meat_profile(meat_type)
        return apply_meat_defaults(PlanInputs(), meat_type, profile)

    def select_meat(self, meat_type: MeatType | str) -> PlanInputs:
        """Change meat type. Resets weight, rest, wrap, target and spritz defaults."""
        meat_type = MeatType(meat_type)
        profile = self._engine.catalog.get_meat_profile(meat_type)
        self._set(apply_meat_defaults(self._inputs, meat_type, profile))
        return self._inputs

    def update(self, **fields: Any) -> PlanInputs:
        """
        Change individual fields. Validated through PlanInputs, so a bad value
        raises pydantic.ValidationError and leaves the active settings untouched.
        A meat_type change resets the per-meat fields first, then the other
        fields apply on top of those defaults.
        """
        candidate = self._inputs
        if "meat_type" in fields:
            meat_type = MeatType(fields.pop("meat_type"))
            profile = self._engine.catalog.get_meat_profile(meat_type)
            candidate = apply_meat_defaults(candidate, meat_type, profile)
        elif not fields:
            return self._inputs
        data = candidate.model_dump()
        data.update(fields)
        self._set(PlanInputs.model_validate(data))
        return self._inputs

    def reset(self, meat_type: MeatType | str | None = None) -> PlanInputs:
        """Catalog defaults for a meat type (the current one by default), keeping the serve time."""
        meat_type = MeatType(meat_type) if meat_type else self._inputs.meat_type
        fresh = self.default_inputs(meat_type)
        self._set(fresh.model_copy(update={"serve_time": self._inputs.serve_time}))
        return self._inputs

    def current_plan(self) -> PlanResult | None:
        """Recompute from scratch. None means not enough input yet."""
        return self._engine.compute(self._inputs, self._now())

    def _set(self, inputs: PlanInputs) -> None:
        self._inputs = inputs
        self._persist()

    def _persist(self) -> None:
        if self._store is None:
            return
        try:
            self._store.save(self._inputs)
        except Exception as e:
            logger.exception("Settings save failed: %s", e)

    def _load_or_default(self) -> PlanInputs:
        if self._store is not None:
            saved = self._store.load()
            if saved is not None:
                logger.info("Loaded saved settings for %s", saved.meat_type.value)
                return saved
        return self.default_inputs()
