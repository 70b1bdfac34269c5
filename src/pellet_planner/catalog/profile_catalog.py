"""Profile catalog - read-only lookup over the meat, wrap and affiliate tables."""

import logging
from functools import lru_cache
from typing import Any

from pydantic import ValidationError

from pellet_planner.config import get_catalog_data, get_settings
from pellet_planner.models import (
    AffiliateMode,
    AffiliateProduct,
    MeatProfile,
    MeatType,
    WrapStrategy,
    WrapStrategyKey,
)

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Catalog data is malformed or does not cover every meat type / wrap strategy."""


class CatalogLookupError(KeyError):
    """Unknown catalog key."""


class ProfileCatalog:
    """Validated reference tables. Every MeatType and WrapStrategyKey must be present."""

    def __init__(self, data: dict[str, Any]) -> None:
        try:
            self._meats = {
                MeatType(key): MeatProfile.model_validate(raw)
                for key, raw in (data.get("meats") or {}).items()
            }
            self._wraps = {
                WrapStrategyKey(key): WrapStrategy.model_validate(raw)
                for key, raw in (data.get("wrap_strategies") or {}).items()
            }
            self._products = {
                AffiliateMode(mode): [AffiliateProduct.model_validate(p) for p in items or []]
                for mode, items in (data.get("affiliate_products") or {}).items()
            }
        except (ValidationError, ValueError) as e:
            raise CatalogError(f"Invalid catalog data: {e}") from e

        missing_meats = [m.value for m in MeatType if m not in self._meats]
        if missing_meats:
            raise CatalogError(f"Catalog missing meat profiles: {', '.join(missing_meats)}")
        missing_wraps = [w.value for w in WrapStrategyKey if w not in self._wraps]
        if missing_wraps:
            raise CatalogError(f"Catalog missing wrap strategies: {', '.join(missing_wraps)}")
        for meat, profile in self._meats.items():
            if not profile.temp_profiles:
                raise CatalogError(f"Meat profile {meat.value} has no temperature rates")

    def get_meat_profile(self, key: MeatType | str) -> MeatProfile:
        """Profile for a meat type. Raises CatalogLookupError if unknown."""
        try:
            return self._meats[MeatType(key)]
        except (ValueError, KeyError):
            raise CatalogLookupError(f"Unknown meat type: {key!r}") from None

    def get_wrap_strategy(self, key: WrapStrategyKey | str) -> WrapStrategy:
        """Wrap strategy by key. Raises CatalogLookupError if unknown."""
        try:
            return self._wraps[WrapStrategyKey(key)]
        except (ValueError, KeyError):
            raise CatalogLookupError(f"Unknown wrap strategy: {key!r}") from None

    def affiliate_products(self, mode: AffiliateMode | str) -> list[AffiliateProduct]:
        """Gear recommendations for a mode. Empty list if none configured."""
        return list(self._products.get(AffiliateMode(mode), []))

    def meat_types(self) -> list[MeatType]:
        return list(self._meats)

    def wrap_strategies(self) -> dict[WrapStrategyKey, WrapStrategy]:
        return dict(self._wraps)


@lru_cache
def get_catalog() -> ProfileCatalog:
    """Cached catalog from settings (packaged tables unless overridden)."""
    settings = get_settings()
    path = str(settings.catalog_path) if settings.catalog_path else ""
    if path:
        logger.info("Loading catalog override from %s", path)
    return ProfileCatalog(get_catalog_data(path))
