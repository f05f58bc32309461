"""Configuration package for grove."""

from grove.config.settings import (
    BuildSettings,
    DatesSettings,
    GroveConfig,
    ListingSettings,
    PathsSettings,
    SiteSettings,
    create_default_config,
    find_grove_config,
    load_grove_config,
    save_grove_config,
)

__all__ = [
    "BuildSettings",
    "DatesSettings",
    "GroveConfig",
    "ListingSettings",
    "PathsSettings",
    "SiteSettings",
    "create_default_config",
    "find_grove_config",
    "load_grove_config",
    "save_grove_config",
]
