"""
Centralized logging and error classification utilities.

This module provides helpers that standardize how research
operations are logged:
- Structured logging with contextual information
- Error classification for log records
- Timing of whole operations
"""

from __future__ import annotations

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from .exceptions import (
    EventParseError,
    ResearchHTTPError,
    ResearchInputError,
    ResearchTransportError,
    ServerShuttingDownError,
)

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer(colors=True),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)


class ResearchErrorHandler:
    """Error classification for structured log records."""

    @staticmethod
    def classify_error(error: BaseException) -> str:
        """
        Classify an error into a log category.

        Args:
            error: The exception to classify

        Returns:
            Category name
        """
        if isinstance(error, ServerShuttingDownError):
            return "shutdown"
        if isinstance(error, ResearchInputError | ValidationError):
            return "validation_error"
        if isinstance(error, EventParseError):
            return "parse_error"
        if isinstance(error, ResearchHTTPError):
            return "http_error"
        if isinstance(error, ResearchTransportError | httpx.TransportError):
            return "transport_error"
        if isinstance(error, TimeoutError):
            return "timeout_error"
        if isinstance(error, ConnectionError | OSError):
            return "connection_error"
        return "unknown_error"

    @staticmethod
    def error_context(error: BaseException) -> dict[str, Any]:
        """Build the log fields describing a failure."""
        context: dict[str, Any] = {
            "error_type": type(error).__name__,
            "error_category": ResearchErrorHandler.classify_error(error),
            "error_message": str(error),
        }
        status_code = getattr(error, "status_code", None)
        if status_code is not None:
            context["status_code"] = status_code
        return context


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)


@asynccontextmanager
async def operation_context(
    operation: str,
    *,
    context: dict[str, Any] | None = None,
    log_timing: bool = True,
) -> AsyncIterator[Any]:
    """
    Async context manager for operation logging.

    Args:
        operation: Description of the operation
        context: Additional context for logging
        log_timing: Whether to log operation timing

    Yields:
        Bound logger for the operation
    """
    operation_logger = logger.bind(
        operation=operation,
        **(context or {}),
    )

    operation_logger.info("Operation started")
    start_time = time.perf_counter() if log_timing else None

    try:
        yield operation_logger
    except Exception as e:
        error_log_data = ResearchErrorHandler.error_context(e)
        if start_time is not None:
            error_log_data["duration_ms"] = _elapsed_ms(start_time)
        operation_logger.error("Operation failed", **error_log_data)
        raise

    log_data: dict[str, Any] = {}
    if start_time is not None:
        log_data["duration_ms"] = _elapsed_ms(start_time)
    operation_logger.info("Operation completed successfully", **log_data)


class ContextualLogger:
    """Logger that maintains context across related operations."""

    def __init__(self, base_context: dict[str, Any] | None = None):
        self.base_context = base_context or {}
        self._logger = logger.bind(**self.base_context)

    def bind(self, **context: Any) -> ContextualLogger:
        """Create a new logger with additional context."""
        merged_context = {**self.base_context, **context}
        return ContextualLogger(merged_context)

    def info(self, message: str, **context: Any) -> None:
        self._logger.info(message, **context)

    def warning(self, message: str, **context: Any) -> None:
        self._logger.warning(message, **context)

    def error(self, message: str, **context: Any) -> None:
        self._logger.error(message, **context)

    def debug(self, message: str, **context: Any) -> None:
        self._logger.debug(message, **context)
