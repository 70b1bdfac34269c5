"""Reference data catalog."""

from pellet_planner.catalog.profile_catalog import (
    CatalogError,
    CatalogLookupError,
    ProfileCatalog,
    get_catalog,
)

__all__ = ["CatalogError", "CatalogLookupError", "ProfileCatalog", "get_catalog"]
