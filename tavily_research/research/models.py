"""
Request and event models for the streaming research API.

This module provides:
- The research request with its defaulting rules
- Streamed event payloads (choices, deltas, tool calls, sources)
- The progress notification handed to caller hooks
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ..exceptions import EventParseError


class CitationFormat(Enum):
    """Citation styles supported by the research endpoint."""
    NUMBERED = "numbered"
    MLA = "mla"
    APA = "apa"
    CHICAGO = "chicago"


class ResearchModel(Enum):
    """Research model tiers."""
    MINI = "mini"
    PRO = "pro"
    AUTO = "auto"


class ResearchEventType(Enum):
    """SSE event types with dedicated handling."""
    DONE = "done"
    SOURCES = "sources"


TOOL_CALL_DELTA_TYPE = "tool_call"


class ResearchRequest(BaseModel):
    """Research request body.

    Blank citation format or model fall back to their defaults. The request
    is always sent with streaming enabled.
    """
    citation_format: CitationFormat = CitationFormat.NUMBERED
    input: str = ""
    model: ResearchModel = ResearchModel.MINI
    output_schema: dict[str, Any] | None = None
    stream: bool = True

    @field_validator("citation_format", mode="before")
    @classmethod
    def _default_citation_format(cls, value: Any) -> Any:
        return CitationFormat.NUMBERED if value in (None, "") else value

    @field_validator("model", mode="before")
    @classmethod
    def _default_model(cls, value: Any) -> Any:
        return ResearchModel.MINI if value in (None, "") else value

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON body, forcing streaming on."""
        payload = self.model_dump(mode="json", exclude_none=True)
        payload["stream"] = True
        return payload


class EventModel(BaseModel):
    """Base for streamed payload models. JSON null means the field default."""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Source(EventModel):
    """A web source consulted during research."""
    favicon: str | None = None
    title: str = ""
    url: str = ""


class ToolCall(EventModel):
    """One step of the remote research agent."""
    id: str = ""
    name: str = ""
    arguments: str = ""
    queries: list[str] | None = None

    @field_validator("arguments", mode="before")
    @classmethod
    def _arguments_as_text(cls, value: Any) -> Any:
        if isinstance(value, dict | list):
            return json.dumps(value, ensure_ascii=False)
        return value


class ToolCallsDelta(EventModel):
    """Tool call batch carried by a delta."""
    type: str = ""
    tool_call: list[ToolCall] = Field(default_factory=list)


class Delta(EventModel):
    """Incremental fragment of the streamed response."""
    content: str | None = None
    role: str | None = None
    tool_calls: ToolCallsDelta | None = None
    sources: list[Source] | None = None


class Choice(EventModel):
    delta: Delta = Field(default_factory=Delta)


class StreamResearchEvent(EventModel):
    """Decoded `data` payload of one streamed event."""
    id: str = ""
    object: str = ""
    model: str = ""
    created: int = 0
    choices: list[Choice] = Field(default_factory=list)

    @classmethod
    def parse(cls, data: str, event_type: str = "") -> StreamResearchEvent:
        """Decode an event payload, raising EventParseError on bad input."""
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise EventParseError(
                f"Invalid research event payload: {e}",
                raw_data=data,
                event_type=event_type,
            ) from e

    def all_sources(self) -> list[Source]:
        """Flatten sources across every choice, preserving order."""
        return [
            source
            for choice in self.choices
            for source in (choice.delta.sources or [])
        ]


@dataclass(frozen=True)
class ResearchProgress:
    """Progress notification passed to the progress hook."""
    name: str
    arguments: str
    queries: list[str] | None = None
