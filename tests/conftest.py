"""Shared pytest fixtures for environment, logging and build metadata isolation."""

import logging
from collections.abc import Iterator

import pytest
import structlog

from gitops_demo.version import version_configure, version_get_metadata

_ISOLATED_ENVIRONMENT_NAMES = (
    "HOST",
    "PORT",
    "LOG_LEVEL",
    "SHUTDOWN_TIMEOUT_SECONDS",
    "IDLE_TIMEOUT_SECONDS",
    "READ_TIMEOUT_SECONDS",
    "WRITE_TIMEOUT_SECONDS",
    "BUILD_TAG",
    "BUILD_COMMIT",
    "BUILD_TIME",
)


@pytest.fixture
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> pytest.MonkeyPatch:
    """Run a test from an empty directory without service environment variables.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        tmp_path: Pytest temporary directory fixture.

    Returns:
        pytest.MonkeyPatch: Monkeypatch instance for further environment edits.
    """

    monkeypatch.chdir(tmp_path)
    for environment_name in _ISOLATED_ENVIRONMENT_NAMES:
        monkeypatch.delenv(environment_name, raising=False)
    return monkeypatch


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Restore structlog defaults and root logger handlers after a test."""

    root_logger = logging.getLogger()
    previous_handlers = list(root_logger.handlers)
    previous_level = root_logger.level
    try:
        yield
    finally:
        root_logger.handlers = previous_handlers
        root_logger.setLevel(previous_level)
        structlog.reset_defaults()


@pytest.fixture
def restore_build_metadata() -> Iterator[None]:
    """Restore process-wide build metadata after a test installs new values."""

    previous_metadata = version_get_metadata()
    try:
        yield
    finally:
        version_configure(previous_metadata)
