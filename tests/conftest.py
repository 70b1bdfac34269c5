"""Shared fixtures: packaged catalog, engine, fixed clock."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Callable

import pytest

from pellet_planner.catalog import ProfileCatalog, get_catalog
from pellet_planner.config import get_catalog_data, get_settings
from pellet_planner.engine import PlanningEngine
from pellet_planner.models import PlanInputs

SERVE = "2024-01-01T18:00"


@pytest.fixture(autouse=True)
def clear_config_caches():
    """Settings and catalog are lru_cached; tests that touch env must not leak."""
    get_settings.cache_clear()
    get_catalog_data.cache_clear()
    get_catalog.cache_clear()
    yield
    get_settings.cache_clear()
    get_catalog_data.cache_clear()
    get_catalog.cache_clear()


@pytest.fixture
def catalog() -> ProfileCatalog:
    return ProfileCatalog(get_catalog_data())


@pytest.fixture
def engine(catalog: ProfileCatalog) -> PlanningEngine:
    return PlanningEngine(catalog=catalog)


@pytest.fixture
def now() -> datetime:
    # Two days before SERVE
    return datetime(2023, 12, 30, 18, 0)


@pytest.fixture
def make_inputs() -> Callable[..., PlanInputs]:
    """PlanInputs with a serve time and spritz off unless overridden."""

    def _make(**overrides: Any) -> PlanInputs:
        fields: dict[str, Any] = {"serve_time": SERVE, "spritz_enabled": False}
        fields.update(overrides)
        return PlanInputs(**fields)

    return _make
