"""Build info endpoint router composition."""

from collections.abc import Callable
from dataclasses import asdict

import structlog
from fastapi import APIRouter
from fastapi.responses import Response

from gitops_demo.api.responses import api_render_json
from gitops_demo.domain import BuildInfo


def api_create_info_router(
    logger: structlog.stdlib.BoundLogger,
    build_info_provider: Callable[[], BuildInfo],
) -> APIRouter:
    """Create router exposing build metadata of the running service.

    Args:
        logger: Structured logger for info hit records.
        build_info_provider: Callable returning the current build metadata snapshot.

    Returns:
        APIRouter: Router exposing `/info` endpoint.

    Raises:
        ValueError: Raised when logger or build_info_provider is invalid.
    """

    if logger is None:
        raise ValueError("logger must not be None")
    if build_info_provider is None:
        raise ValueError("build_info_provider must not be None")

    router = APIRouter(tags=["info"])

    @router.get("/info")
    def api_build_info() -> Response:
        """Return build metadata read fresh from the provider.

        Returns:
            Response: Build metadata payload with HTTP 200.
        """

        build_info = build_info_provider()
        logger.info("info endpoint hit", tag=build_info.tag, commit=build_info.commit)
        return api_render_json(asdict(build_info))

    return router
