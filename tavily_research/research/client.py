"""
Async HTTP client for the streaming research endpoint.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

import httpx

from ..exceptions import (
    ResearchHTTPError,
    ResearchInputError,
    ResearchTransportError,
    ServerShuttingDownError,
)
from ..logging_utils import ContextualLogger, operation_context
from ..shutdown import ShutdownSignal, shutdown_signal
from .models import ResearchRequest
from .streaming.models import SSEEvent
from .streaming.parser import (
    ProgressHook,
    ResearchStreamProcessor,
    SourceHook,
    StreamingParser,
)

RESEARCH_URL = "https://api.tavily.com/research"

DEFAULT_TIMEOUT = httpx.Timeout(connect=10.0, read=300.0, write=10.0, pool=10.0)

EVENT_STREAM = "text/event-stream"


def prepare_request(request: ResearchRequest | str) -> ResearchRequest:
    """Validate a request and apply defaults before it is sent."""
    if isinstance(request, str):
        request = ResearchRequest(input=request)
    if not request.input:
        raise ResearchInputError("Input required")
    return request.model_copy(update={"stream": True})


class ResearchClient:
    """
    HTTP client for streaming research requests.

    Owns an httpx.AsyncClient unless one is injected. An injected client
    keeps its own timeouts, so `timeout` must not be passed with it. Use
    as an async context manager, or call close() when done.
    """

    def __init__(
        self,
        api_key: str,
        *,
        url: str = RESEARCH_URL,
        timeout: httpx.Timeout | float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("API key is required for research requests")

        self.api_key = api_key
        self.url = url
        if http_client is not None and timeout is not None:
            raise ValueError("timeout cannot be combined with an injected http_client")

        self._owns_client = http_client is None
        self.client: httpx.AsyncClient = http_client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
        )
        self._logger = ContextualLogger({"endpoint": url})

    @classmethod
    def from_config(cls, research_config: dict[str, Any], api_key: str) -> ResearchClient:
        """Build a client from the `research` section of the configuration."""
        http_config = research_config["http_client"]
        timeout = httpx.Timeout(
            connect=http_config["connect_timeout"],
            read=http_config["read_timeout"],
            write=http_config["write_timeout"],
            pool=http_config["pool_timeout"],
        )
        return cls(api_key, url=research_config.get("url", RESEARCH_URL), timeout=timeout)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Accept": EVENT_STREAM,
        }

    async def stream_research(
        self,
        request: ResearchRequest | str,
        *,
        progress_hook: ProgressHook | None = None,
        source_hook: SourceHook | None = None,
        shutdown: ShutdownSignal | None = None,
    ) -> str:
        """
        Run a research request and return the assembled report.

        Args:
            request: Research request, or the input text alone
            progress_hook: Called for each research step and on completion
            source_hook: Called with the sources of each `sources` event
            shutdown: Signal checked before each event; defaults to the
                process-wide signal

        Returns:
            Concatenated report text

        Raises:
            ResearchInputError: Input is empty; nothing was sent
            ResearchHTTPError: Endpoint returned a non-2xx status
            ResearchTransportError: Network or protocol failure
            EventParseError: An event payload was malformed
            ServerShuttingDownError: Shutdown was requested mid-stream
        """
        request = prepare_request(request)
        shutdown = shutdown or shutdown_signal
        processor = ResearchStreamProcessor(progress_hook, source_hook)
        parser = StreamingParser()

        async with operation_context(
            "stream_research",
            context={"model": request.model.value,
                     "citation_format": request.citation_format.value},
        ) as op_logger:
            response = await self._open_stream(request)
            events = parser.parse_sse_stream(response)
            try:
                await self._check_response(response)

                while (event := await self._next_event(events)) is not None:
                    if shutdown.is_set():
                        raise ServerShuttingDownError()
                    if await processor.process(event):
                        break
            finally:
                await events.aclose()
                await response.aclose()

            stats = processor.get_streaming_stats()
            op_logger.info(
                "Research stream finished",
                events=stats.total_events,
                content_chunks=stats.content_chunks,
                tool_calls=stats.tool_calls,
                sources=stats.sources,
                parser=parser.get_stats(),
            )
            return processor.content

    async def _open_stream(self, request: ResearchRequest) -> httpx.Response:
        http_request = self.client.build_request(
            "POST", self.url, json=request.to_payload(), headers=self._headers()
        )
        try:
            return await self.client.send(http_request, stream=True)
        except httpx.HTTPError as e:
            raise ResearchTransportError(f"HTTP error: {e!s}") from e

    async def _check_response(self, response: httpx.Response) -> None:
        if not response.is_success:
            try:
                body = (await response.aread()).decode("utf-8", errors="replace")
            except httpx.HTTPError as e:
                raise ResearchTransportError(f"HTTP error: {e!s}") from e
            raise ResearchHTTPError(
                f"Research API error {response.status_code}: {body}",
                status_code=response.status_code,
                body=body,
            )

        content_type = response.headers.get("content-type", "")
        if EVENT_STREAM not in content_type:
            self._logger.warning(
                "Unexpected content-type for research stream",
                content_type=content_type,
            )

    @staticmethod
    async def _next_event(events: AsyncGenerator[SSEEvent]) -> SSEEvent | None:
        """Read the next event, translating transport failures."""
        try:
            return await anext(events)
        except StopAsyncIteration:
            return None
        except httpx.HTTPError as e:
            raise ResearchTransportError(f"HTTP error during streaming: {e!s}") from e

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> ResearchClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


async def stream_research(
    api_key: str,
    request: ResearchRequest | str,
    *,
    progress_hook: ProgressHook | None = None,
    source_hook: SourceHook | None = None,
    shutdown: ShutdownSignal | None = None,
    url: str = RESEARCH_URL,
    http_client: httpx.AsyncClient | None = None,
) -> str:
    """One-shot helper: open a client, stream one request, close it.

    The request is validated before the client is created, so an empty
    input never opens a connection pool.
    """
    request = prepare_request(request)
    async with ResearchClient(api_key, url=url, http_client=http_client) as client:
        return await client.stream_research(
            request,
            progress_hook=progress_hook,
            source_hook=source_hook,
            shutdown=shutdown,
        )
