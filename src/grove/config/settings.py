"""Centralized configuration for grove.

This module consolidates the configuration code in one place:
- Pydantic models for .grove/grove.toml
- Loading and saving functions

Configuration priority (highest to lowest):
1. CLI (applied via ``GroveConfig.from_cli_overrides``)
2. Environment variables (GROVE_SECTION__KEY)
3. Config file (.grove/grove.toml)
4. Defaults
"""

from __future__ import annotations

import logging
import os
import tomllib
from copy import deepcopy
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from grove.constants import DEFAULT_DATE_PRIORITY, DateSource, DateType, InaccessiblePolicy

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".grove"
CONFIG_FILE_NAME = "grove.toml"
ENV_PREFIX = "GROVE_"

DEFAULT_IGNORE_PATTERNS = (".obsidian", "private", "templates", ".grove")


class DatesSettings(BaseModel):
    """Created/modified/published date resolution."""

    enabled: bool = Field(
        default=True,
        description="Resolve document dates at all",
    )
    priority: list[DateSource] = Field(
        default_factory=lambda: list(DEFAULT_DATE_PRIORITY),
        description="Metadata sources, highest priority first",
    )
    max_title_length: int | None = Field(
        default=None,
        gt=0,
        description="Truncate titles longer than this many characters (None disables)",
    )
    concurrency: int = Field(
        default=8,
        ge=1,
        description="Documents resolved concurrently",
    )
    git_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Seconds before a git history lookup is abandoned",
    )

    @field_validator("priority")
    @classmethod
    def validate_priority(cls, v: list[DateSource]) -> list[DateSource]:
        """Priority must name each source at most once."""
        if not v:
            msg = "dates.priority must list at least one source"
            raise ValueError(msg)
        if len(set(v)) != len(v):
            msg = f"dates.priority contains duplicate sources: {[s.value for s in v]}"
            raise ValueError(msg)
        return v


class ListingSettings(BaseModel):
    """Folder listing pages."""

    show_folder_count: bool = Field(
        default=True,
        description="Show the 'N items under this folder' label",
    )
    sort_by: DateType = Field(
        default=DateType.CREATED,
        description="Date used to order listing entries (newest first)",
    )


class SiteSettings(BaseModel):
    """Site-wide presentation settings."""

    title: str = Field(default="Grove", description="Site title")
    locale: str = Field(default="en-US", description="Locale used for phrase lookup")
    base_url: str | None = Field(default=None, description="Public base URL")


class PathsSettings(BaseModel):
    """Site directory paths (relative to site root)."""

    content_dir: str = Field(default="content", description="Markdown source tree")
    output_dir: str = Field(default="public", description="Rendered site output")


class BuildSettings(BaseModel):
    """Build orchestration policy."""

    on_inaccessible: InaccessiblePolicy = Field(
        default=InaccessiblePolicy.SKIP,
        description="Skip documents whose file cannot be stat'ed, or fail the build",
    )
    ignore_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS),
        description="Glob patterns (relative to content_dir) excluded from the build",
    )


class GroveConfig(BaseSettings):
    """Root configuration for grove.

    This model defines the complete .grove/grove.toml schema.

    Supports environment variable overrides with the pattern:
    GROVE_SECTION__KEY (e.g., GROVE_DATES__ENABLED)
    """

    dates: DatesSettings = Field(
        default_factory=DatesSettings,
        description="Date resolution",
    )
    listing: ListingSettings = Field(
        default_factory=ListingSettings,
        description="Folder listings",
    )
    site: SiteSettings = Field(
        default_factory=SiteSettings,
        description="Site settings",
    )
    paths: PathsSettings = Field(
        default_factory=PathsSettings,
        description="Site directory paths (relative to site root)",
    )
    build: BuildSettings = Field(
        default_factory=BuildSettings,
        description="Build policy",
    )

    model_config = SettingsConfigDict(
        extra="forbid",
        validate_assignment=True,
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
    )

    @classmethod
    def from_cli_overrides(cls, base_config: GroveConfig, **cli_args: Any) -> GroveConfig:
        """Create a new config instance with CLI overrides applied.

        ``None`` values mean "not given on the command line" and are skipped.
        """
        paths_overrides = {}
        if cli_args.get("content_dir") is not None:
            paths_overrides["content_dir"] = str(cli_args["content_dir"])
        if cli_args.get("output_dir") is not None:
            paths_overrides["output_dir"] = str(cli_args["output_dir"])

        dates_overrides = {}
        if cli_args.get("enable_dates") is not None:
            dates_overrides["enabled"] = cli_args["enable_dates"]

        updates = {}
        if paths_overrides:
            updates["paths"] = base_config.paths.model_copy(update=paths_overrides)
        if dates_overrides:
            updates["dates"] = base_config.dates.model_copy(update=dates_overrides)

        return base_config.model_copy(update=updates)


# ============================================================================
# Configuration Loading and Saving
# ============================================================================


def find_grove_config(start_dir: Path) -> Path | None:
    """Search upward for .grove/grove.toml."""
    current = start_dir.expanduser().resolve()
    for candidate in (current, *current.parents):
        toml_path = candidate / CONFIG_DIR_NAME / CONFIG_FILE_NAME
        if toml_path.exists():
            return toml_path
    return None


def _collect_env_override_paths() -> set[tuple[str, ...]]:
    """Return the set of config paths defined via environment variables."""
    env_paths: set[tuple[str, ...]] = set()

    for key in os.environ:
        if not key.startswith(ENV_PREFIX):
            continue
        parts = [part.lower() for part in key[len(ENV_PREFIX) :].split("__") if part]
        if parts:
            env_paths.add(tuple(parts))

    return env_paths


def _merge_config(
    base: dict[str, Any],
    override: dict[str, Any],
    env_override_paths: set[tuple[str, ...]],
    current_path: tuple[str, ...] = (),
) -> dict[str, Any]:
    """Merge override into base, skipping keys provided via env vars."""
    merged = deepcopy(base)

    for key, value in override.items():
        path = (*current_path, str(key).lower())
        if path in env_override_paths:
            continue

        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_config(merged[key], value, env_override_paths, path)
        else:
            merged[key] = value

    return merged


def load_grove_config(site_root: Path | None = None) -> GroveConfig:
    """Load grove configuration from .grove/grove.toml.

    A missing file yields defaults (plus environment overrides) without writing
    anything. An invalid file is reported and defaults are used instead.

    Raises:
        OSError: If the config file exists but cannot be read.
        tomllib.TOMLDecodeError: If the config file is not valid TOML.

    """
    if site_root is None:
        site_root = Path.cwd()

    config_path = find_grove_config(site_root)
    if config_path is None:
        logger.debug("No configuration found under %s, using defaults", site_root)
        return GroveConfig()

    logger.info("Loading config from %s", config_path)

    try:
        raw_config = config_path.read_text(encoding="utf-8")
    except OSError:
        logger.exception("Failed to read config from %s", config_path)
        raise

    try:
        file_data = tomllib.loads(raw_config)
    except tomllib.TOMLDecodeError:
        logger.exception("Failed to parse config in %s", config_path)
        raise

    try:
        # Env Vars > Config File > Defaults
        base_dict = GroveConfig().model_dump(mode="json")
        merged = _merge_config(base_dict, file_data, _collect_env_override_paths())
        return GroveConfig.model_validate(merged)
    except ValidationError as e:
        logger.error("Configuration validation failed for %s:", config_path)  # noqa: TRY400
        for error in e.errors():
            loc = " -> ".join(str(location_part) for location_part in error["loc"])
            logger.error("  %s: %s", loc, error["msg"])  # noqa: TRY400
        logger.warning("Using default config due to validation error")
        return GroveConfig()


def save_grove_config(config: GroveConfig, site_root: Path) -> Path:
    """Save GroveConfig to .grove/grove.toml, creating .grove/ if needed."""
    grove_dir = site_root / CONFIG_DIR_NAME
    grove_dir.mkdir(exist_ok=True, parents=True)

    config_path = grove_dir / CONFIG_FILE_NAME

    data = config.model_dump(exclude_defaults=False, mode="json")

    # tomli_w doesn't support None values
    def _clean_nones(d: dict[str, Any]) -> dict[str, Any]:
        cleaned = {}
        for k, v in d.items():
            if v is None:
                continue
            if isinstance(v, dict):
                v = _clean_nones(v)
            cleaned[k] = v
        return cleaned

    config_path.write_text(tomli_w.dumps(_clean_nones(data)), encoding="utf-8")
    logger.debug("Saved config to %s", config_path)

    return config_path


def create_default_config(site_root: Path) -> GroveConfig:
    """Write a default .grove/grove.toml and return it."""
    config = GroveConfig()
    save_grove_config(config, site_root)
    logger.info("Created default config at %s", site_root / CONFIG_DIR_NAME / CONFIG_FILE_NAME)
    return config
