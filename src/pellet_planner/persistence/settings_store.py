"""Last-used plan settings - JSON file storage."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from pellet_planner.models import PlanInputs

logger = logging.getLogger(__name__)

SETTINGS_FILE = "settings.json"


class SettingsStore:
    """File-based store for the single active PlanInputs."""

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._path = self._data_dir / SETTINGS_FILE

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> PlanInputs | None:
        """Saved settings, or None if missing or unreadable."""
        if not self._path.exists():
            return None
        try:
            with self._path.open() as f:
                data = json.load(f)
            return PlanInputs.model_validate(data)
        except (json.JSONDecodeError, OSError, ValidationError) as e:
            logger.warning("Could not load settings %s: %s", self._path, e)
            return None

    def save(self, inputs: PlanInputs) -> None:
        """Overwrite saved settings."""
        try:
            with self._path.open("w") as f:
                json.dump(inputs.model_dump(mode="json"), f, indent=2)
        except OSError as e:
            logger.error("Could not save settings %s: %s", self._path, e)
            raise
