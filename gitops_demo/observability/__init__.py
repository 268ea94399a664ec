"""Structured logging setup for the service runtime."""

from .logging_setup import observability_configure_logging, observability_get_logger

__all__ = ["observability_configure_logging", "observability_get_logger"]
