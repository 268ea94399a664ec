"""Configuration package for runtime settings and startup validation."""

from .settings import (
    AppSettings,
    BuildMetadataSettings,
    SettingsLoadError,
    config_load_build_metadata,
    config_load_settings,
)

__all__ = [
    "AppSettings",
    "BuildMetadataSettings",
    "SettingsLoadError",
    "config_load_build_metadata",
    "config_load_settings",
]
