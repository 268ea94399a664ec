"""Health endpoint router composition for liveness and readiness probes."""

from dataclasses import asdict

import structlog
from fastapi import APIRouter
from fastapi.responses import Response

from gitops_demo.api.responses import api_render_json
from gitops_demo.domain import HealthStatus


def api_create_health_router(logger: structlog.stdlib.BoundLogger) -> APIRouter:
    """Create probe router exposing liveness and readiness endpoints.

    Readiness has no dependency checks wired, so it always reports ready while
    the process is able to serve requests.

    Args:
        logger: Structured logger for probe hit records.

    Returns:
        APIRouter: Router exposing `/healthz` and `/readyz` endpoints.

    Raises:
        ValueError: Raised when logger is invalid.
    """

    if logger is None:
        raise ValueError("logger must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/healthz")
    def api_liveness_status() -> Response:
        """Return liveness status for the running process.

        Returns:
            Response: `{"status":"ok"}` payload with HTTP 200.
        """

        logger.info("liveness probe hit")
        return api_render_json(asdict(HealthStatus(status="ok")))

    @router.get("/readyz")
    def api_readiness_status() -> Response:
        """Return readiness status for traffic routing.

        Returns:
            Response: `{"status":"ready"}` payload with HTTP 200.
        """

        logger.info("readiness probe hit")
        return api_render_json(asdict(HealthStatus(status="ready")))

    return router
