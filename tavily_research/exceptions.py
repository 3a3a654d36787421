"""
Error types for research streaming operations.

All errors raised by the client derive from ResearchError so callers can
catch them in one place. Exceptions raised by caller hooks are never
wrapped and propagate unchanged.
"""

from __future__ import annotations

from typing import Any


class ResearchError(Exception):
    """Base research error with response context."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_data: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data or {}


class ResearchInputError(ResearchError, ValueError):
    """Request failed local validation before any network call."""
    pass


class ResearchHTTPError(ResearchError):
    """Research endpoint answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int, body: str = "", **kwargs):
        super().__init__(message, status_code=status_code, **kwargs)
        self.body = body


class ResearchTransportError(ResearchError):
    """Network or protocol failure talking to the research endpoint."""
    pass


class EventParseError(ResearchError):
    """A streamed event payload could not be decoded."""

    def __init__(self, message: str, raw_data: str = "", event_type: str = "", **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.event_type = event_type


class ServerShuttingDownError(ResearchError):
    """Stream aborted because the process is shutting down."""

    def __init__(self, message: str = "Server is shutting down", **kwargs):
        super().__init__(message, **kwargs)
