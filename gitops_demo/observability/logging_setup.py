"""JSON structured logging wired through structlog and stdlib logging.

structlog events and foreign stdlib records (uvicorn) share one stdout handler
so every line is a single JSON object.
"""

from __future__ import annotations

import logging
import sys

import structlog

_SHARED_PROCESSORS: tuple[structlog.typing.Processor, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
)


def observability_configure_logging(level: str = "INFO") -> None:
    """Configure process-wide JSON logging to stdout.

    Args:
        level: Minimum stdlib level name for emitted records.

    Returns:
        None: Logging configuration is installed as side effect.

    Raises:
        ValueError: Raised when level is not a known level name.
    """

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"unknown log level: {level}")

    structlog.configure(
        processors=[
            *_SHARED_PROCESSORS,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=list(_SHARED_PROCESSORS),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(),
        ],
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(numeric_level)


def observability_get_logger(name: str = "gitops_demo") -> structlog.stdlib.BoundLogger:
    """Return a named structlog logger.

    Args:
        name: Logger name recorded on every event.

    Returns:
        structlog.stdlib.BoundLogger: Logger proxy bound lazily on first use.
    """

    return structlog.get_logger(name)
