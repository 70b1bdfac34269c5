"""Persistence layer."""

from pellet_planner.persistence.factory import create_settings_store
from pellet_planner.persistence.redis_store import RedisSettingsStore
from pellet_planner.persistence.settings_store import SettingsStore

__all__ = [
    "RedisSettingsStore",
    "SettingsStore",
    "create_settings_store",
]
