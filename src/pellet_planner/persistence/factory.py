"""Store factory - creates a file or Redis settings store based on config."""

from pathlib import Path

from pellet_planner.config import get_settings
from pellet_planner.persistence.redis_store import RedisSettingsStore
from pellet_planner.persistence.settings_store import SettingsStore


def create_settings_store() -> SettingsStore | RedisSettingsStore:
    """
    Create the settings store based on PELLET_REDIS_URL.
    Uses Redis when it is set; otherwise a JSON file under data_dir.
    """
    settings = get_settings()
    if settings.redis_url:
        return RedisSettingsStore(settings.redis_url)
    return SettingsStore(Path(settings.data_dir))
