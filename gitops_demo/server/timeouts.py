"""Per-request read and write deadlines applied around the ASGI application.

Both deadlines start when the request head has been parsed. The read deadline
covers the whole request body and the write deadline covers every response
message, so a client that trickles its body or stops reading cannot hold a
connection past them.
"""

from __future__ import annotations

import asyncio

from starlette.exceptions import HTTPException
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .errors import ResponseWriteTimeoutError


class _DeadlineReceive:
    """ASGI receive adapter bounding body reads by a request-wide deadline.

    Once the final body chunk arrives, later calls (disconnect waits) are
    forwarded without a deadline.
    """

    def __init__(self, receive: Receive, deadline: float):
        self._receive = receive
        self._deadline = deadline
        self._body_complete = False

    async def __call__(self) -> Message:
        if self._body_complete:
            return await self._receive()

        remaining_seconds = self._deadline - asyncio.get_running_loop().time()
        try:
            message = await asyncio.wait_for(self._receive(), timeout=max(remaining_seconds, 0))
        except asyncio.TimeoutError as error:
            raise HTTPException(status_code=408) from error

        if message["type"] != "http.request" or not message.get("more_body", False):
            self._body_complete = True
        return message


class _DeadlineSend:
    """ASGI send adapter bounding response writes by a request-wide deadline."""

    def __init__(self, send: Send, deadline: float, timeout_seconds: float):
        self._send = send
        self._deadline = deadline
        self._timeout_seconds = timeout_seconds

    async def __call__(self, message: Message) -> None:
        remaining_seconds = self._deadline - asyncio.get_running_loop().time()
        try:
            await asyncio.wait_for(self._send(message), timeout=max(remaining_seconds, 0))
        except asyncio.TimeoutError as error:
            raise ResponseWriteTimeoutError(
                f"response write exceeded {self._timeout_seconds:g}s deadline"
            ) from error


class ConnectionTimeoutMiddleware:
    """Pure ASGI middleware enforcing full-read and write deadlines per request.

    A read timeout surfaces to the application as HTTP 408. A write timeout
    raises `ResponseWriteTimeoutError`, which makes the server drop the
    connection.
    """

    def __init__(self, app: ASGIApp, read_timeout_seconds: float, write_timeout_seconds: float):
        """Initialize connection timeout middleware.

        Args:
            app: Wrapped ASGI application.
            read_timeout_seconds: Deadline for receiving the full request body.
            write_timeout_seconds: Deadline for sending the full response.

        Raises:
            ValueError: Raised when a timeout is not positive.
        """

        if read_timeout_seconds <= 0 or write_timeout_seconds <= 0:
            raise ValueError("read and write timeouts must be positive")
        self._app = app
        self._read_timeout_seconds = read_timeout_seconds
        self._write_timeout_seconds = write_timeout_seconds

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self._app(scope, receive, send)
            return

        started_at = asyncio.get_running_loop().time()
        await self._app(
            scope,
            _DeadlineReceive(receive, deadline=started_at + self._read_timeout_seconds),
            _DeadlineSend(
                send,
                deadline=started_at + self._write_timeout_seconds,
                timeout_seconds=self._write_timeout_seconds,
            ),
        )
