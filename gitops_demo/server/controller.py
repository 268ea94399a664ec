"""HTTP server lifecycle controller built on an embedded uvicorn server.

The controller owns the listening socket and moves through
INITIALIZING -> LISTENING -> SHUTTING_DOWN -> STOPPED, or into FAILED when
binding, serving or draining fails.
"""

from __future__ import annotations

import asyncio
import contextlib
import enum
import socket
from collections.abc import Iterator
from dataclasses import dataclass

import structlog
import uvicorn
from starlette.types import ASGIApp

from .errors import GracefulShutdownError, ServerListenError
from .timeouts import ConnectionTimeoutMiddleware

SHUTDOWN_TIMEOUT_SECONDS = 15.0
IDLE_TIMEOUT_SECONDS = 120.0
READ_TIMEOUT_SECONDS = 30.0
WRITE_TIMEOUT_SECONDS = 30.0
LISTEN_BACKLOG = 2048


class ServerState(enum.Enum):
    """Lifecycle states of the HTTP server controller."""

    INITIALIZING = "initializing"
    LISTENING = "listening"
    SHUTTING_DOWN = "shutting_down"
    STOPPED = "stopped"
    FAILED = "failed"


@dataclass(frozen=True)
class ServerTimeouts:
    """Connection and shutdown bounds for the HTTP server.

    Attributes:
        idle_timeout_seconds: Keep-alive idle timeout for client connections.
        read_timeout_seconds: Deadline for receiving a full request body.
        write_timeout_seconds: Deadline for sending a full response.
        shutdown_timeout_seconds: Drain deadline for in-flight requests on shutdown.
    """

    idle_timeout_seconds: float = IDLE_TIMEOUT_SECONDS
    read_timeout_seconds: float = READ_TIMEOUT_SECONDS
    write_timeout_seconds: float = WRITE_TIMEOUT_SECONDS
    shutdown_timeout_seconds: float = SHUTDOWN_TIMEOUT_SECONDS


class _EmbeddedUvicornServer(uvicorn.Server):
    """uvicorn server whose signal handling is owned by the process entrypoint."""

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        yield


class HTTPServerController:
    """Coordinate bind, serve and bounded graceful shutdown of the HTTP server."""

    def __init__(
        self,
        application: ASGIApp,
        host: str,
        port: str,
        logger: structlog.stdlib.BoundLogger,
        timeouts: ServerTimeouts | None = None,
    ):
        """Initialize server lifecycle controller.

        Args:
            application: ASGI application serving requests.
            host: Host interface to bind.
            port: Port to bind as decimal text, `0` selects a free port.
            logger: Structured logger for lifecycle records.
            timeouts: Optional connection and shutdown bounds.

        Raises:
            ValueError: Raised when application or logger is None.
        """

        if application is None:
            raise ValueError("application must not be None")
        if logger is None:
            raise ValueError("logger must not be None")

        self._application = application
        self._host = host
        self._port = port
        self._logger = logger
        self._timeouts = timeouts or ServerTimeouts()
        self._state = ServerState.INITIALIZING
        self._bound_address: tuple[str, int] | None = None
        self._listening = asyncio.Event()

    @property
    def state(self) -> ServerState:
        """Return the current lifecycle state."""

        return self._state

    @property
    def bound_address(self) -> tuple[str, int] | None:
        """Return the bound `(host, port)` pair once listening, otherwise None."""

        return self._bound_address

    @property
    def timeouts(self) -> ServerTimeouts:
        """Return the configured connection and shutdown bounds."""

        return self._timeouts

    async def wait_listening(self) -> None:
        """Block until the listening socket is bound.

        Returns:
            None: Returns once the controller reaches LISTENING.
        """

        await self._listening.wait()

    async def server_run(self, cancel_event: asyncio.Event) -> None:
        """Serve requests until cancellation, then drain within the deadline.

        Args:
            cancel_event: Event set by signal handlers or callers to request shutdown.

        Returns:
            None: Returned only after a clean graceful shutdown.

        Raises:
            ServerListenError: Raised when binding fails or the accept loop exits on its own.
            GracefulShutdownError: Raised when draining exceeds the shutdown deadline.
        """

        listen_socket = self._server_bind_socket()
        server = _EmbeddedUvicornServer(
            uvicorn.Config(
                ConnectionTimeoutMiddleware(
                    self._application,
                    read_timeout_seconds=self._timeouts.read_timeout_seconds,
                    write_timeout_seconds=self._timeouts.write_timeout_seconds,
                ),
                lifespan="off",
                log_config=None,
                access_log=False,
                timeout_keep_alive=self._timeouts.idle_timeout_seconds,
                backlog=LISTEN_BACKLOG,
            )
        )
        serve_task = asyncio.create_task(server.serve(sockets=[listen_socket]))
        self._state = ServerState.LISTENING
        self._listening.set()
        self._logger.info("server listening", host=self._bound_address[0], port=self._bound_address[1])

        cancel_task = asyncio.create_task(cancel_event.wait())
        try:
            done, _ = await asyncio.wait({serve_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancel_task.cancel()

        if serve_task in done:
            self._state = ServerState.FAILED
            listen_socket.close()
            cause = None if serve_task.cancelled() else serve_task.exception()
            raise ServerListenError(
                f"server listen: {cause or 'accept loop exited before shutdown was requested'}"
            ) from cause

        self._logger.info("shutdown signal received")
        await self._server_shutdown(server, serve_task)

    async def _server_shutdown(self, server: uvicorn.Server, serve_task: asyncio.Task) -> None:
        self._state = ServerState.SHUTTING_DOWN
        server.should_exit = True
        deadline_seconds = self._timeouts.shutdown_timeout_seconds

        try:
            await asyncio.wait_for(asyncio.shield(serve_task), timeout=deadline_seconds)
        except asyncio.TimeoutError as error:
            server.force_exit = True
            serve_task.cancel()
            await asyncio.wait({serve_task})
            self._state = ServerState.FAILED
            raise GracefulShutdownError(
                f"graceful shutdown: in-flight requests did not complete within {deadline_seconds:g}s"
            ) from error
        except Exception as error:
            self._state = ServerState.FAILED
            raise GracefulShutdownError(f"graceful shutdown: {error}") from error

        self._state = ServerState.STOPPED
        self._logger.info("server stopped gracefully")

    def _server_bind_socket(self) -> socket.socket:
        try:
            port_number = int(self._port)
        except ValueError as error:
            self._state = ServerState.FAILED
            raise ServerListenError(f"server listen: invalid port {self._port!r}") from error

        family = socket.AF_INET6 if ":" in self._host else socket.AF_INET
        listen_socket = socket.socket(family, socket.SOCK_STREAM)
        try:
            listen_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listen_socket.bind((self._host, port_number))
            listen_socket.listen(LISTEN_BACKLOG)
        except (OSError, OverflowError) as error:
            listen_socket.close()
            self._state = ServerState.FAILED
            raise ServerListenError(f"server listen: {self._host}:{self._port}: {error}") from error

        bound_host, bound_port = listen_socket.getsockname()[:2]
        self._bound_address = (bound_host, bound_port)
        return listen_socket
