"""Redis-backed settings store. Use when PELLET_REDIS_URL is set."""

import json
import logging

from pellet_planner.models import PlanInputs

logger = logging.getLogger(__name__)

KEY_PREFIX = "pellet_planner"


class RedisSettingsStore:
    """Redis-backed store for the single active PlanInputs."""

    def __init__(self, redis_url: str, *, profile: str = "default") -> None:
        self._redis_url = redis_url
        self._profile = profile
        self._client = None

    def _get_client(self):
        """Lazy-init Redis client."""
        if self._client is None:
            import redis
            self._client = redis.from_url(
                self._redis_url,
                decode_responses=True,
            )
        return self._client

    def _key(self) -> str:
        safe = "".join(c for c in self._profile if c.isalnum() or c in "-_")
        return f"{KEY_PREFIX}:settings:{safe}"

    def load(self) -> PlanInputs | None:
        """Saved settings, or None if missing or unreadable."""
        try:
            data = self._get_client().get(self._key())
            if not data:
                return None
            return PlanInputs.model_validate(json.loads(data))
        except Exception as e:
            logger.warning("Redis settings load failed: %s", e)
            return None

    def save(self, inputs: PlanInputs) -> None:
        """Overwrite saved settings."""
        try:
            self._get_client().set(self._key(), json.dumps(inputs.model_dump(mode="json")))
        except Exception as e:
            logger.error("Redis settings save failed: %s", e)
            raise
