"""JSON response rendering with a plain-text fallback on encode failure."""

from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse, PlainTextResponse, Response

ENCODE_FAILURE_BODY = '{"error":"internal server error"}'


def api_render_json(payload: Any, status_code: int = status.HTTP_200_OK) -> Response:
    """Render a payload as compact JSON with an encode-failure fallback.

    The body is fully encoded before any byte reaches the client, so a failed
    encode is downgraded to a plain-text 500 without partial output.

    Args:
        payload: JSON-compatible response content.
        status_code: HTTP status code for a successful render.

    Returns:
        Response: JSON response, or plain-text 500 response when encoding fails.
    """

    try:
        return JSONResponse(content=payload, status_code=status_code)
    except (TypeError, ValueError):
        return PlainTextResponse(
            content=ENCODE_FAILURE_BODY,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
