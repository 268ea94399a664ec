"""Typed domain models shared across runtime layers.

This module provides simple immutable data contracts for build metadata and
probe responses.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class BuildMetadata:
    """Build-time identification injected by the packaging step.

    Attributes:
        tag: Release tag of the running build.
        commit: Source commit hash the build was produced from.
        build_time: Build timestamp text.
    """

    tag: str = "dev"
    commit: str = "unknown"
    build_time: str = "unknown"


@dataclass(frozen=True)
class BuildInfo:
    """Build metadata snapshot returned by the info endpoint.

    Attributes:
        tag: Release tag of the running build.
        commit: Source commit hash the build was produced from.
        build_time: Build timestamp text.
        python_version: Version of the running interpreter.
    """

    tag: str
    commit: str
    build_time: str
    python_version: str


@dataclass(frozen=True)
class HealthStatus:
    """Health response contract used by probe endpoints.

    Attributes:
        status: Probe status text, `ok` for liveness and `ready` for readiness.
    """

    status: str
