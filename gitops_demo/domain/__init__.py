"""Domain models used across application layer boundaries."""

from .models import BuildInfo, BuildMetadata, HealthStatus

__all__ = ["BuildInfo", "BuildMetadata", "HealthStatus"]
