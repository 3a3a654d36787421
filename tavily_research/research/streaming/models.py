"""
Streaming-specific dataclasses for SSE consumption.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass(frozen=True)
class SSEEvent:
    """One dispatched server-sent event."""
    type: str = ""
    data: str = ""
    id: str | None = None
    retry: int | None = None
    timestamp: float = field(default_factory=time.time)


@dataclass
class SSEBuffer:
    """Fields collected for the event currently being read."""
    event_type: str = ""
    data_lines: list[str] = field(default_factory=list)
    last_event_id: str | None = None
    retry: int | None = None

    @property
    def has_data(self) -> bool:
        return bool(self.data_lines)

    def reset(self) -> None:
        """Clear per-event fields. The last event id carries over."""
        self.event_type = ""
        self.data_lines = []
        self.retry = None


@dataclass
class AccumulatorState:
    """Mutable state for one research stream."""
    content_buffer: list[str] = field(default_factory=list)
    event_count: int = 0
    content_chunks: int = 0
    tool_call_count: int = 0
    source_count: int = 0
    first_event_time: float | None = None
    last_event_time: float | None = None

    def update_timing(self, timestamp: float) -> None:
        """Update timing information for latency tracking."""
        if self.first_event_time is None:
            self.first_event_time = timestamp
        self.last_event_time = timestamp
        self.event_count += 1

    @property
    def content(self) -> str:
        return "".join(self.content_buffer)

    @property
    def streaming_duration(self) -> float:
        if self.first_event_time is None or self.last_event_time is None:
            return 0.0
        return self.last_event_time - self.first_event_time


@dataclass(frozen=True)
class StreamingStats:
    """Summary of a finished research stream."""
    total_events: int
    content_chunks: int
    tool_calls: int
    sources: int
    total_duration: float
