"""FastAPI application factory for the probe service.

This module builds the request-dispatch table: probe and info routes wrapped
by the request logging middleware.
"""

from collections.abc import Callable

import structlog
from fastapi import FastAPI

from gitops_demo.domain import BuildInfo
from gitops_demo.version import version_get_info

from .middleware import RequestLoggingMiddleware
from .routers import api_create_health_router, api_create_info_router


def create_api_application(
    logger: structlog.stdlib.BoundLogger,
    build_info_provider: Callable[[], BuildInfo] = version_get_info,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Interactive docs and the OpenAPI schema are disabled so that only the
    probe and info routes are served; every other path returns 404.

    Args:
        logger: Structured logger shared by handlers and middleware.
        build_info_provider: Callable returning the current build metadata snapshot.

    Returns:
        FastAPI: Framework application instance with routes and middleware.

    Raises:
        ValueError: Raised when logger is None.
    """

    if logger is None:
        raise ValueError("logger must not be None")

    application = FastAPI(title="gitops-demo", docs_url=None, redoc_url=None, openapi_url=None)
    application.include_router(api_create_health_router(logger=logger))
    application.include_router(api_create_info_router(logger=logger, build_info_provider=build_info_provider))
    application.add_middleware(RequestLoggingMiddleware, logger=logger)

    return application
