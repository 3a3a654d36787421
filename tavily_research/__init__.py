"""Async client for the Tavily streaming research API."""

from __future__ import annotations

from .exceptions import (
    EventParseError,
    ResearchError,
    ResearchHTTPError,
    ResearchInputError,
    ResearchTransportError,
    ServerShuttingDownError,
)
from .research import (
    CitationFormat,
    ResearchClient,
    ResearchModel,
    ResearchProgress,
    ResearchRequest,
    Source,
    ToolCall,
    stream_research,
)
from .shutdown import ShutdownSignal, install_signal_handlers, shutdown_signal

__all__ = [
    "CitationFormat",
    "EventParseError",
    "ResearchClient",
    "ResearchError",
    "ResearchHTTPError",
    "ResearchInputError",
    "ResearchModel",
    "ResearchProgress",
    "ResearchRequest",
    "ResearchTransportError",
    "ServerShuttingDownError",
    "ShutdownSignal",
    "Source",
    "ToolCall",
    "install_signal_handlers",
    "shutdown_signal",
    "stream_research",
]
