"""Tests for build info endpoint behavior."""

import platform

import structlog
from fastapi.testclient import TestClient

from gitops_demo.api.application import create_api_application
from gitops_demo.domain import BuildInfo
from gitops_demo.version import version_override


def test_api_info_echoes_current_build_metadata() -> None:
    """Return overridden tag, commit and build time with runtime version.

    Returns:
        None: Assertions validate metadata echo.

    Raises:
        AssertionError: Raised when payload does not echo provider values.
    """

    client = TestClient(create_api_application(logger=structlog.get_logger("test")))

    with version_override(tag="v0.1.0-test", commit="deadbeef", build_time="2026-01-01T00:00:00Z"):
        response = client.get("/info")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    payload = response.json()
    assert payload["tag"] == "v0.1.0-test"
    assert payload["commit"] == "deadbeef"
    assert payload["build_time"] == "2026-01-01T00:00:00Z"
    assert payload["python_version"] == platform.python_version()
    assert payload["python_version"]


def test_api_info_payload_has_exact_field_order() -> None:
    """Serialize build info as compact JSON in declared field order."""

    def _static_provider() -> BuildInfo:
        return BuildInfo(tag="v1", commit="c0ffee", build_time="t0", python_version="3.12.0")

    client = TestClient(
        create_api_application(logger=structlog.get_logger("test"), build_info_provider=_static_provider)
    )

    response = client.get("/info")

    assert response.content == b'{"tag":"v1","commit":"c0ffee","build_time":"t0","python_version":"3.12.0"}'


def test_api_info_reads_provider_on_every_request() -> None:
    """Reflect metadata changes between requests without caching.

    Returns:
        None: Assertions validate uncached reads.

    Raises:
        AssertionError: Raised when a stale snapshot is served.
    """

    provider_calls: list[int] = []

    def _counting_provider() -> BuildInfo:
        provider_calls.append(1)
        return BuildInfo(
            tag=f"v0.{len(provider_calls)}.0",
            commit="unknown",
            build_time="unknown",
            python_version="3.12.0",
        )

    client = TestClient(
        create_api_application(logger=structlog.get_logger("test"), build_info_provider=_counting_provider)
    )

    first_payload = client.get("/info").json()
    second_payload = client.get("/info").json()

    assert first_payload["tag"] == "v0.1.0"
    assert second_payload["tag"] == "v0.2.0"


def test_api_info_logs_tag_and_commit() -> None:
    """Emit an info hit record carrying tag and commit."""

    with structlog.testing.capture_logs() as captured_logs:
        client = TestClient(create_api_application(logger=structlog.get_logger("test")))
        with version_override(tag="v3.0.0", commit="feedface"):
            client.get("/info")

    info_records = [entry for entry in captured_logs if entry["event"] == "info endpoint hit"]
    assert len(info_records) == 1
    assert info_records[0]["tag"] == "v3.0.0"
    assert info_records[0]["commit"] == "feedface"
