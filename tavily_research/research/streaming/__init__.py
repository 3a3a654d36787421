"""
Streaming support for research responses.

This package contains:
- SSE line parsing
- Research event demultiplexing and text accumulation
"""

from .models import SSEEvent, StreamingStats
from .parser import ResearchStreamProcessor, StreamingParser

__all__ = [
    "ResearchStreamProcessor",
    "SSEEvent",
    "StreamingParser",
    "StreamingStats",
]
