"""HTTP server lifecycle package for startup, serving and graceful shutdown."""

from .controller import HTTPServerController, ServerState, ServerTimeouts
from .errors import GracefulShutdownError, ResponseWriteTimeoutError, ServerLifecycleError, ServerListenError
from .timeouts import ConnectionTimeoutMiddleware

__all__ = [
    "ConnectionTimeoutMiddleware",
    "GracefulShutdownError",
    "HTTPServerController",
    "ResponseWriteTimeoutError",
    "ServerLifecycleError",
    "ServerListenError",
    "ServerState",
    "ServerTimeouts",
]
