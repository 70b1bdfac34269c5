"""Configuration management - config-driven architecture."""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "catalog.yaml"


class Settings(BaseSettings):
    """Application settings from environment and .env."""

    model_config = SettingsConfigDict(
        env_prefix="PELLET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Data
    data_dir: Path = Field(default=Path("data"), description="Directory for JSON settings persistence")
    redis_url: str | None = Field(default=None, description="Redis URL for settings persistence")
    catalog_path: Path | None = Field(
        default=None,
        description="YAML catalog overriding the packaged meat and wrap tables",
    )

    # Logging
    log_level: str = Field(default="WARNING", description="Root log level for the CLI")


def load_yaml_config(config_path: Path) -> dict[str, Any]:
    """Load YAML config file."""
    if not config_path.exists():
        return {}
    with config_path.open() as f:
        return yaml.safe_load(f) or {}


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()


@lru_cache
def get_catalog_data(catalog_path_str: str = "") -> dict[str, Any]:
    """Load raw catalog tables. Falls back to the packaged catalog."""
    if not catalog_path_str:
        catalog_path = DEFAULT_CATALOG_PATH
    else:
        catalog_path = Path(catalog_path_str)
    return load_yaml_config(catalog_path)
