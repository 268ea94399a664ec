"""Application bootstrap wiring for startup validation and dependency assembly."""

import structlog
from fastapi import FastAPI

from gitops_demo.api import create_api_application
from gitops_demo.config import AppSettings, config_load_build_metadata
from gitops_demo.server import HTTPServerController, ServerTimeouts
from gitops_demo.version import version_configure, version_get_info


def bootstrap_configure_build_metadata() -> None:
    """Install build metadata injected by the packaging step.

    Returns:
        None: Metadata is installed as process-wide state.

    Raises:
        SettingsLoadError: Raised when build metadata settings are invalid.
    """

    version_configure(config_load_build_metadata())


def bootstrap_create_application(logger: structlog.stdlib.BoundLogger) -> FastAPI:
    """Assemble the runtime application with routes and request logging.

    Args:
        logger: Structured logger shared by handlers and middleware.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.
    """

    return create_api_application(logger=logger, build_info_provider=version_get_info)


def bootstrap_create_server_controller(
    settings: AppSettings,
    logger: structlog.stdlib.BoundLogger,
) -> HTTPServerController:
    """Build the HTTP server lifecycle controller from validated settings.

    Args:
        settings: Validated runtime settings.
        logger: Structured logger for lifecycle and request records.

    Returns:
        HTTPServerController: Controller ready to bind and serve.
    """

    return HTTPServerController(
        application=bootstrap_create_application(logger=logger),
        host=settings.host,
        port=settings.port,
        logger=logger,
        timeouts=ServerTimeouts(
            idle_timeout_seconds=settings.idle_timeout_seconds,
            read_timeout_seconds=settings.read_timeout_seconds,
            write_timeout_seconds=settings.write_timeout_seconds,
            shutdown_timeout_seconds=settings.shutdown_timeout_seconds,
        ),
    )
