"""Request logging middleware emitting one structured record per request."""

from __future__ import annotations

import time

import structlog
from starlette.types import ASGIApp, Message, Receive, Scope, Send


class _StatusRecordingSend:
    """ASGI send adapter that forwards every message and records the status.

    Attributes:
        status_code: Last status seen on `http.response.start`, 200 until then.
        response_started: Whether the wrapped app started a response.
    """

    def __init__(self, send: Send):
        self._send = send
        self.status_code = 200
        self.response_started = False

    async def __call__(self, message: Message) -> None:
        if message["type"] == "http.response.start":
            self.status_code = message["status"]
            self.response_started = True
        await self._send(message)


class RequestLoggingMiddleware:
    """Pure ASGI middleware that logs method, path, status, duration and peer.

    Response messages pass through unchanged. Non-HTTP scopes are forwarded
    without logging.
    """

    def __init__(self, app: ASGIApp, logger: structlog.stdlib.BoundLogger):
        """Initialize request logging middleware.

        Args:
            app: Wrapped ASGI application.
            logger: Structured logger receiving request records.

        Raises:
            ValueError: Raised when logger is None.
        """

        if logger is None:
            raise ValueError("logger must not be None")
        self._app = app
        self._logger = logger

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self._app(scope, receive, send)
            return

        started_at = time.perf_counter()
        recording_send = _StatusRecordingSend(send)
        try:
            await self._app(scope, receive, recording_send)
        except Exception:
            if not recording_send.response_started:
                recording_send.status_code = 500
            raise
        finally:
            duration_micros = int((time.perf_counter() - started_at) * 1_000_000)
            self._logger.info(
                "request completed",
                method=scope["method"],
                path=scope["path"],
                status=recording_send.status_code,
                duration_micros=duration_micros,
                remote_addr=_format_remote_address(scope.get("client")),
            )


def _format_remote_address(client: tuple[str, int] | None) -> str:
    if client is None:
        return ""
    host, port = client
    return f"{host}:{port}"
