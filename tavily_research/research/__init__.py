"""
Streaming research API integration.

This package provides:
- Typed request and event models
- An async httpx client that consumes the SSE response
- Progress and source hooks fired as the research advances
"""

from __future__ import annotations

from .client import RESEARCH_URL, ResearchClient, prepare_request, stream_research
from .models import (
    CitationFormat,
    Choice,
    Delta,
    ResearchEventType,
    ResearchModel,
    ResearchProgress,
    ResearchRequest,
    Source,
    StreamResearchEvent,
    ToolCall,
    ToolCallsDelta,
)
from .streaming.parser import ProgressHook, SourceHook

__all__ = [
    "RESEARCH_URL",
    "Choice",
    "CitationFormat",
    "Delta",
    "ProgressHook",
    # Client
    "ResearchClient",
    "ResearchEventType",
    "ResearchModel",
    "ResearchProgress",
    # Core models
    "ResearchRequest",
    "Source",
    "SourceHook",
    "StreamResearchEvent",
    "ToolCall",
    "ToolCallsDelta",
    "prepare_request",
    "stream_research",
]
