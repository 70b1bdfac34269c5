"""Settings persistence: JSON file and Redis stores."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from pellet_planner.models import MeatType, PlanInputs, WrapStrategyKey
from pellet_planner.persistence import RedisSettingsStore, SettingsStore, create_settings_store


def _inputs() -> PlanInputs:
    return PlanInputs(
        meat_type=MeatType.BRISKET,
        weight=13.5,
        temp=275,
        serve_time="2024-07-04T18:00",
        wrap_strategy=WrapStrategyKey.PAPER,
        fat_side_up=True,
    )


def test_file_store_saves_and_loads(tmp_path) -> None:
    store = SettingsStore(tmp_path)

    store.save(_inputs())

    assert store.load() == _inputs()
    saved = json.loads(store.path.read_text())
    assert saved["meat_type"] == "brisket"
    assert saved["wrap_strategy"] == "paper"


def test_file_store_missing_file_loads_nothing(tmp_path) -> None:
    assert SettingsStore(tmp_path / "fresh").load() is None


@pytest.mark.parametrize(
    "content",
    ["{not json", json.dumps({"meat_type": "lamb"}), json.dumps({"spritz_interval": 0})],
)
def test_file_store_unreadable_settings_load_nothing(tmp_path, content) -> None:
    store = SettingsStore(tmp_path)
    store.path.write_text(content)

    assert store.load() is None


def test_redis_store_round_trips_through_client() -> None:
    client = MagicMock()
    store = RedisSettingsStore("redis://localhost:6379/0")
    store._client = client

    store.save(_inputs())

    key, payload = client.set.call_args.args
    assert key == "pellet_planner:settings:default"
    client.get.return_value = payload
    assert store.load() == _inputs()


def test_redis_store_load_failure_returns_none() -> None:
    client = MagicMock()
    client.get.side_effect = ConnectionError("down")
    store = RedisSettingsStore("redis://localhost:6379/0")
    store._client = client

    assert store.load() is None


def test_redis_store_save_failure_propagates() -> None:
    client = MagicMock()
    client.set.side_effect = ConnectionError("down")
    store = RedisSettingsStore("redis://localhost:6379/0")
    store._client = client

    with pytest.raises(ConnectionError):
        store.save(_inputs())


def test_factory_uses_file_store_by_default(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("PELLET_REDIS_URL", raising=False)
    monkeypatch.setenv("PELLET_DATA_DIR", str(tmp_path / "data"))

    store = create_settings_store()

    assert isinstance(store, SettingsStore)
    assert store.path == tmp_path / "data" / "settings.json"


def test_factory_uses_redis_when_configured(monkeypatch) -> None:
    monkeypatch.setenv("PELLET_REDIS_URL", "redis://localhost:6379/0")

    assert isinstance(create_settings_store(), RedisSettingsStore)


def test_file_store_non_finite_settings_load_nothing(tmp_path) -> None:
    store = SettingsStore(tmp_path)
    # json.dump writes NaN and json.load reads it back
    store.path.write_text(json.dumps({"weight": float("nan")}))

    assert store.load() is None
