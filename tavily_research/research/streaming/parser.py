"""
SSE parser and research event dispatcher.

StreamingParser turns the line stream of an HTTP response into SSEEvent
objects. ResearchStreamProcessor interprets those events, accumulates the
report text and fires caller hooks.
"""

from __future__ import annotations

import inspect
from collections.abc import AsyncGenerator, AsyncIterable, Awaitable, Callable
from typing import Any

import httpx
import structlog

from ..models import (
    TOOL_CALL_DELTA_TYPE,
    ResearchEventType,
    ResearchProgress,
    Source,
    StreamResearchEvent,
)
from .models import AccumulatorState, SSEBuffer, SSEEvent, StreamingStats

ProgressHook = Callable[[ResearchProgress], Awaitable[None] | None]
SourceHook = Callable[[list[Source]], Awaitable[None] | None]

DONE_PROGRESS = ResearchProgress(name="Done", arguments="Research Completed")

logger = structlog.get_logger(__name__)


class StreamingParser:
    """Line-oriented SSE decoder."""

    def __init__(self) -> None:
        self.stats = {
            "events": 0,
            "comments": 0,
            "ignored_lines": 0,
        }

    async def parse_sse_stream(
        self, response: httpx.Response
    ) -> AsyncGenerator[SSEEvent]:
        """Parse the body of a streaming httpx response."""
        async for event in self.parse_lines(response.aiter_lines()):
            yield event

    async def parse_lines(
        self, lines: AsyncIterable[str]
    ) -> AsyncGenerator[SSEEvent]:
        """
        Parse SSE lines and yield an event at every blank line.

        A trailing event without a terminating blank line is still
        dispatched when the stream ends.
        """
        buffer = SSEBuffer()
        first_line = True

        async for raw_line in lines:
            line = raw_line.rstrip("\r\n")
            if first_line:
                line = line.removeprefix("\ufeff")
                first_line = False

            if not line:
                if buffer.has_data:
                    yield self._dispatch(buffer)
                buffer.reset()
                continue

            self._process_line(line, buffer)

        if buffer.has_data:
            yield self._dispatch(buffer)

    def _process_line(self, line: str, buffer: SSEBuffer) -> None:
        if line.startswith(":"):
            self.stats["comments"] += 1
            return

        field_name, sep, value = line.partition(":")
        if sep and value.startswith(" "):
            value = value[1:]

        if field_name == "event":
            buffer.event_type = value
        elif field_name == "data":
            buffer.data_lines.append(value)
        elif field_name == "id":
            if "\0" not in value:
                buffer.last_event_id = value
        elif field_name == "retry":
            if value.isdigit():
                buffer.retry = int(value)
            else:
                self.stats["ignored_lines"] += 1
        else:
            self.stats["ignored_lines"] += 1

    def _dispatch(self, buffer: SSEBuffer) -> SSEEvent:
        self.stats["events"] += 1
        return SSEEvent(
            type=buffer.event_type,
            data="\n".join(buffer.data_lines),
            id=buffer.last_event_id,
            retry=buffer.retry,
        )

    def get_stats(self) -> dict[str, int]:
        """Get parser statistics for monitoring."""
        return self.stats.copy()

    def reset_stats(self) -> None:
        """Reset statistics counters."""
        for key in self.stats:
            self.stats[key] = 0


async def _call_hook(hook: Callable[[Any], Any], arg: Any) -> None:
    result = hook(arg)
    if inspect.isawaitable(result):
        await result


class ResearchStreamProcessor:
    """
    Demultiplex research events by type.

    - `done` reports a final progress step and ends the stream
    - `sources` hands every source of the event to the source hook at once
    - anything else appends content or reports tool-call progress

    Hook exceptions propagate unchanged.
    """

    def __init__(
        self,
        progress_hook: ProgressHook | None = None,
        source_hook: SourceHook | None = None,
    ) -> None:
        self.progress_hook = progress_hook
        self.source_hook = source_hook
        self.state = AccumulatorState()

    @property
    def content(self) -> str:
        return self.state.content

    async def process(self, event: SSEEvent) -> bool:
        """Handle one event. Returns True when the stream is finished."""
        if not event.data:
            return False

        self.state.update_timing(event.timestamp)

        if event.type == ResearchEventType.DONE.value:
            if self.progress_hook is not None:
                await _call_hook(self.progress_hook, DONE_PROGRESS)
            return True

        payload = StreamResearchEvent.parse(event.data, event.type)

        if event.type == ResearchEventType.SOURCES.value:
            await self._handle_sources(payload)
        else:
            await self._handle_delta(payload)
        return False

    async def _handle_sources(self, payload: StreamResearchEvent) -> None:
        sources = payload.all_sources()
        self.state.source_count += len(sources)
        if self.source_hook is not None:
            await _call_hook(self.source_hook, sources)

    async def _handle_delta(self, payload: StreamResearchEvent) -> None:
        for choice in payload.choices:
            delta = choice.delta
            if delta.content:
                self.state.content_buffer.append(delta.content)
                self.state.content_chunks += 1
            elif delta.tool_calls is not None:
                if delta.tool_calls.type != TOOL_CALL_DELTA_TYPE:
                    continue
                for tool_call in delta.tool_calls.tool_call:
                    self.state.tool_call_count += 1
                    logger.info(
                        "Research step",
                        tool=tool_call.name,
                        arguments=tool_call.arguments,
                    )
                    if self.progress_hook is not None:
                        await _call_hook(
                            self.progress_hook,
                            ResearchProgress(
                                name=tool_call.name,
                                arguments=tool_call.arguments,
                                queries=tool_call.queries,
                            ),
                        )

    def get_streaming_stats(self) -> StreamingStats:
        return StreamingStats(
            total_events=self.state.event_count,
            content_chunks=self.state.content_chunks,
            tool_calls=self.state.tool_call_count,
            sources=self.state.source_count,
            total_duration=self.state.streaming_duration,
        )

    def reset(self) -> None:
        """Reset accumulator state for a new stream."""
        self.state = AccumulatorState()
