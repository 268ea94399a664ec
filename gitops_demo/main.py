"""Main module entrypoint for local and container runtime execution.

This module validates startup configuration, installs signal handling and
runs the HTTP server until a termination signal arrives.
"""

import asyncio
import signal

import structlog

from gitops_demo.bootstrap import bootstrap_configure_build_metadata, bootstrap_create_server_controller
from gitops_demo.config import SettingsLoadError, config_load_settings
from gitops_demo.observability import observability_configure_logging, observability_get_logger
from gitops_demo.server import ServerLifecycleError
from gitops_demo.version import version_get_info

_SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def main() -> None:
    """Run the service and exit with status 1 on any startup or shutdown failure.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SystemExit: Raised with code 1 when startup or shutdown fails.
    """

    observability_configure_logging()
    logger = observability_get_logger()
    try:
        asyncio.run(main_start())
    except (SettingsLoadError, ServerLifecycleError) as error:
        logger.error("server exited with error", error=str(error))
        raise SystemExit(1) from error


async def main_start() -> None:
    """Load configuration, log startup metadata and serve until cancelled.

    Returns:
        None: Returned after a clean graceful shutdown.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
        ServerLifecycleError: Raised when bind, serve or shutdown fails.
    """

    settings = config_load_settings()
    observability_configure_logging(settings.log_level)
    bootstrap_configure_build_metadata()

    logger = observability_get_logger()
    main_log_startup(logger, settings.port)

    cancel_event = asyncio.Event()
    main_install_signal_handlers(asyncio.get_running_loop(), cancel_event)

    controller = bootstrap_create_server_controller(settings=settings, logger=logger)
    await controller.server_run(cancel_event)


def main_log_startup(logger: structlog.stdlib.BoundLogger, port: str) -> None:
    """Log the server configuration and build metadata at startup.

    Args:
        logger: Structured logger receiving the startup record.
        port: Configured listen port.
    """

    build_info = version_get_info()
    logger.info(
        "starting server",
        port=port,
        tag=build_info.tag,
        commit=build_info.commit,
        build_time=build_info.build_time,
    )


def main_install_signal_handlers(loop: asyncio.AbstractEventLoop, cancel_event: asyncio.Event) -> None:
    """Route SIGINT and SIGTERM to the shutdown cancel event.

    Args:
        loop: Running event loop that owns the cancel event.
        cancel_event: Event set when a termination signal arrives.
    """

    for shutdown_signal in _SHUTDOWN_SIGNALS:
        try:
            loop.add_signal_handler(shutdown_signal, cancel_event.set)
        except NotImplementedError:
            # Windows event loops have no add_signal_handler.
            signal.signal(shutdown_signal, lambda _signum, _frame: loop.call_soon_threadsafe(cancel_event.set))


if __name__ == "__main__":
    main()
