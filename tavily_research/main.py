"""
Command line entry point for streaming research requests.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from tavily_research.config import Configuration
from tavily_research.exceptions import ResearchError, ServerShuttingDownError
from tavily_research.research import (
    CitationFormat,
    ResearchClient,
    ResearchModel,
    ResearchProgress,
    ResearchRequest,
    Source,
)
from tavily_research.shutdown import install_signal_handlers


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tavily-research",
        description="Run a streaming research request and print the report.",
    )
    parser.add_argument("input", help="Research question or topic")
    parser.add_argument(
        "--model",
        choices=[m.value for m in ResearchModel],
        help="Research model tier (default from config)",
    )
    parser.add_argument(
        "--citation-format",
        choices=[c.value for c in CitationFormat],
        help="Citation style (default from config)",
    )
    parser.add_argument("--config", help="Path to an alternate config.yaml")
    return parser


def print_progress(progress: ResearchProgress) -> None:
    """Echo research steps to stderr."""
    line = f"[{progress.name}] {progress.arguments}"
    if progress.queries:
        line += f" ({'; '.join(progress.queries)})"
    print(line, file=sys.stderr)


def print_sources(sources: list[Source]) -> None:
    """Echo consulted sources to stderr."""
    for source in sources:
        print(f"  - {source.title or source.url} <{source.url}>", file=sys.stderr)


async def run(args: argparse.Namespace) -> int:
    config = Configuration(args.config)
    research_config = config.get_research_config()

    logging_config = config.get_logging_config()
    logging.getLogger().setLevel(logging_config.get("level", "INFO"))

    install_signal_handlers(asyncio.get_running_loop())

    request = ResearchRequest(
        input=args.input,
        model=args.model or research_config.get("model"),
        citation_format=args.citation_format or research_config.get("citation_format"),
    )

    async with ResearchClient.from_config(research_config, config.tavily_api_key) as client:
        try:
            report = await client.stream_research(
                request,
                progress_hook=print_progress,
                source_hook=print_sources,
            )
        except ServerShuttingDownError:
            logging.info("Research aborted by shutdown")
            return 130
        except ResearchError as e:
            logging.error(f"Research failed: {e}")
            return 1

    print(report)
    return 0


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
    )
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
