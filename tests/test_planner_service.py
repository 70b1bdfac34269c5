"""Planner service: meat selection resets, validation, fire-and-forget persistence."""

from __future__ import annotations

from datetime import datetime
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from pellet_planner.models import MeatType, PlanInputs, WrapStrategyKey
from pellet_planner.services import PlannerService

SERVE = "2024-01-01T18:00"


@pytest.fixture
def store() -> MagicMock:
    s = MagicMock()
    s.load.return_value = None
    return s


@pytest.fixture
def service(store, engine, now) -> PlannerService:
    return PlannerService(store, engine, now=lambda: now)


def test_starts_from_catalog_defaults_when_nothing_saved(service, catalog) -> None:
    profile = catalog.get_meat_profile(MeatType.PORK_BUTT)

    assert service.inputs.meat_type is MeatType.PORK_BUTT
    assert service.inputs.weight == profile.default_weight
    assert service.inputs.serve_time is None
    assert service.current_plan() is None


def test_starts_from_saved_settings(store, engine, now) -> None:
    saved = PlanInputs(meat_type=MeatType.RIBS, weight=4.5, serve_time=SERVE)
    store.load.return_value = saved

    service = PlannerService(store, engine, now=lambda: now)

    assert service.inputs == saved
    assert service.current_plan() is not None


@pytest.mark.parametrize("meat", list(MeatType))
def test_select_meat_resets_to_profile_defaults(service, catalog, meat) -> None:
    service.update(
        weight=99,
        rest_time=999,
        target_temp=100,
        spritz_start=1,
        spritz_interval=2,
        wrap_temp=190,
        fat_side_up=True,
        is_spatchcock=True,
        serve_time=SERVE,
    )

    inputs = service.select_meat(meat)

    profile = catalog.get_meat_profile(meat)
    assert inputs.meat_type is meat
    assert inputs.weight == profile.default_weight
    assert inputs.rest_time == profile.rest.default
    assert inputs.target_temp == profile.default_target_temp
    assert inputs.spritz_start == profile.spritz.start_after
    assert inputs.spritz_interval == profile.spritz.interval
    assert inputs.spritz_enabled is profile.spritz.recommended
    assert inputs.wrap_strategy is profile.default_wrap_strategy
    assert inputs.wrap_temp == 165
    assert inputs.fat_side_up is False
    assert inputs.is_spatchcock is False
    # not a per-meat field
    assert inputs.serve_time == SERVE


def test_select_meat_accepts_string_key(service) -> None:
    assert service.select_meat("turkey").wrap_strategy is WrapStrategyKey.NONE


def test_update_with_meat_type_goes_through_reset(service, catalog) -> None:
    inputs = service.update(meat_type="brisket", temp=275)

    assert inputs.meat_type is MeatType.BRISKET
    assert inputs.weight == catalog.get_meat_profile(MeatType.BRISKET).default_weight
    assert inputs.temp == 275


@pytest.mark.parametrize("interval", [0, -15])
def test_non_positive_spritz_interval_is_rejected(service, interval) -> None:
    before = service.inputs

    with pytest.raises(ValidationError):
        service.update(spritz_interval=interval)

    assert service.inputs == before


def test_every_change_is_saved(service, store) -> None:
    service.update(serve_time=SERVE)
    service.select_meat(MeatType.CHICKEN)

    assert store.save.call_count == 2
    assert store.save.call_args.args[0].meat_type is MeatType.CHICKEN


def test_save_failure_does_not_affect_plan(service, store, caplog) -> None:
    store.save.side_effect = OSError("disk full")

    service.update(serve_time=SERVE)
    result = service.current_plan()

    assert result is not None
    assert "Settings save failed" in caplog.text


def test_works_without_a_store(engine, now) -> None:
    service = PlannerService(None, engine, now=lambda: now)

    service.update(serve_time=SERVE)

    assert service.current_plan() is not None


def test_reset_keeps_serve_time(service, catalog) -> None:
    service.update(serve_time=SERVE, weight=20, meat_type=MeatType.RIBS)
    service.update(weight=20)

    inputs = service.reset()

    assert inputs.meat_type is MeatType.RIBS
    assert inputs.weight == catalog.get_meat_profile(MeatType.RIBS).default_weight
    assert inputs.serve_time == SERVE


def test_now_source_drives_affiliate_mode(store, engine) -> None:
    clock = MagicMock(return_value=datetime(2024, 1, 1, 12, 0))
    service = PlannerService(store, engine, now=clock)
    service.update(serve_time=SERVE)

    result = service.current_plan()

    assert result is not None
    assert result.plan.affiliate_mode.value == "instant"
    clock.assert_called_once_with()


def test_rejected_update_with_meat_change_leaves_settings_untouched(service, store) -> None:
    before = service.inputs
    store.save.reset_mock()

    with pytest.raises(ValidationError):
        service.update(meat_type=MeatType.BRISKET, spritz_interval=0)

    assert service.inputs == before
    assert service.inputs.meat_type is MeatType.PORK_BUTT
    store.save.assert_not_called()


def test_fields_passed_with_meat_type_override_its_defaults(service) -> None:
    inputs = service.update(meat_type=MeatType.BRISKET, weight=15, wrap_temp=170)

    assert inputs.meat_type is MeatType.BRISKET
    assert inputs.weight == 15
    assert inputs.wrap_temp == 170


def test_update_with_meat_type_saves_once(service, store) -> None:
    store.save.reset_mock()

    service.update(meat_type=MeatType.RIBS, temp=275)

    store.save.assert_called_once()


@pytest.mark.parametrize("field", ["weight", "rest_time", "prep_time", "spritz_start"])
@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_numbers_are_rejected(service, store, field, value) -> None:
    before = service.inputs
    store.save.reset_mock()

    with pytest.raises(ValidationError):
        service.update(**{field: value})

    assert service.inputs == before
    store.save.assert_not_called()
