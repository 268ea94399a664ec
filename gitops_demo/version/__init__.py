"""Build metadata provider package."""

from .info import version_configure, version_get_info, version_get_metadata, version_override

__all__ = ["version_configure", "version_get_info", "version_get_metadata", "version_override"]
