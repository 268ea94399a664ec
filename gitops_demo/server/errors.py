"""Project-native typed exceptions for server lifecycle failures."""


class ServerLifecycleError(RuntimeError):
    """Base exception for fatal startup and shutdown failures."""


class ServerListenError(ServerLifecycleError):
    """Socket bind failure or unexpected accept-loop termination."""


class GracefulShutdownError(ServerLifecycleError):
    """In-flight requests did not drain before the shutdown deadline."""


class ResponseWriteTimeoutError(TimeoutError):
    """Client did not accept the response before the write deadline."""
