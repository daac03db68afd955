"""MCP server exposing the Altmetric tools over stdio."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Final

import mcp.server.stdio
from mcp import types
from mcp.server.lowlevel import Server
from pydantic import ValidationError

from altmetric_mcp import __version__
from altmetric_mcp.logging_pipeline import configure_logging, shutdown_listeners
from altmetric_mcp.schemas import (
    AttentionSummaryArgs,
    CitationCountsArgs,
    CitationDetailsArgs,
    DemographicsArgs,
    JournalsArgs,
    MentionsArgs,
    MentionSourcesArgs,
    ResearchOutputsArgs,
    SearchCitationsArgs,
    ToolArguments,
)
from altmetric_mcp.settings import AltmetricSettings, ConfigurationError, get_settings
from altmetric_mcp.tools import AltmetricTools, ToolResult

__all__ = ["SERVER_NAME", "TOOL_SPECS", "ToolExecutionError", "build_server", "call_tool", "main"]

LOGGER = logging.getLogger(__name__)

SERVER_NAME: Final[str] = "altmetric-mcp-server"

_CONFIG_HELP: Final[str] = """\
Error: At least one API configuration is required
Please configure either:
  1. Details Page API: ALTMETRIC_DETAILS_API_KEY
  2. Explorer API: ALTMETRIC_EXPLORER_API_KEY and ALTMETRIC_EXPLORER_API_SECRET

Set these in:
  - A .env file in the project root, or
  - Environment variables

Get API credentials at: https://www.altmetric.com/solutions/altmetric-api/
"""

_EXPLORER_NOTE = "Requires Explorer API credentials."


class ToolExecutionError(RuntimeError):
    """Raised to report a failed tool call back to the client."""


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """Static description of a tool and the handler serving it."""

    name: str
    description: str
    arguments: type[ToolArguments]

    def definition(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.arguments.model_json_schema(),
            annotations=types.ToolAnnotations(
                readOnlyHint=True,
                idempotentHint=True,
                openWorldHint=True,
            ),
        )

    def handler(self, tools: AltmetricTools) -> Callable[..., Awaitable[ToolResult]]:
        return getattr(tools, self.name)


TOOL_SPECS: Final[tuple[ToolSpec, ...]] = (
    ToolSpec(
        "get_citation_counts",
        "Retrieve citation counts and basic metadata for a research output using its DOI, "
        "PubMed ID, arXiv ID, or other identifier. Returns citation metrics across platforms "
        "(Twitter, news, blogs, policy documents, etc.). Available with free tier API keys.",
        CitationCountsArgs,
    ),
    ToolSpec(
        "get_citation_details",
        "Retrieve detailed citation information including full text of mentions, author "
        "details, and complete metadata for a research output. Commercial feature requiring "
        "a paid API key. Does not support pagination and returns all data at once.",
        CitationDetailsArgs,
    ),
    ToolSpec(
        "search_citations",
        "Search aggregated citation data across all tracked research outputs for a "
        "timeframe. Returns outputs sorted by citation counts, filtered by various criteria. "
        "Available with free tier API keys.",
        SearchCitationsArgs,
    ),
    ToolSpec(
        "explore_research_outputs",
        "Search research outputs in your Altmetric Explorer instance or across all Altmetric "
        "data. Supports full-text search and filtering by author, department, journal, "
        "publication date and research type. Returns paginated results (25 per page, max "
        f"100). {_EXPLORER_NOTE}",
        ResearchOutputsArgs,
    ),
    ToolSpec(
        "explore_attention_summary",
        "Get aggregated attention data for research outputs matching your query in Explorer, "
        "broken down by source and date. Single-page endpoint with no pagination. "
        f"{_EXPLORER_NOTE}",
        AttentionSummaryArgs,
    ),
    ToolSpec(
        "explore_mentions",
        "Get individual mentions of research outputs from your Explorer search, including "
        "author info, URLs, timestamps, and related research outputs. Supports pagination. "
        f"{_EXPLORER_NOTE}",
        MentionsArgs,
    ),
    ToolSpec(
        "explore_demographics",
        "Get demographic information about the audiences engaging with research outputs, "
        f"including geographic distribution. {_EXPLORER_NOTE}",
        DemographicsArgs,
    ),
    ToolSpec(
        "explore_mention_sources",
        "Get information about the sources of mentions for research outputs: which "
        f"platforms, channels, and outlets mention the research. {_EXPLORER_NOTE}",
        MentionSourcesArgs,
    ),
    ToolSpec(
        "explore_journals",
        "Get journal-related data and metrics. Search and filter by publication venue and "
        f"retrieve journal rankings. {_EXPLORER_NOTE}",
        JournalsArgs,
    ),
)

_SPECS_BY_NAME: Final[dict[str, ToolSpec]] = {spec.name: spec for spec in TOOL_SPECS}


async def call_tool(
    tools: AltmetricTools, name: str, arguments: dict[str, Any] | None
) -> tuple[list[types.TextContent], dict[str, Any]]:
    """Validate ``arguments`` and run the named tool.

    Returns:
        The summary as text content and the raw API payload as structured
        content.

    Raises:
        ToolExecutionError: For unknown tools and for any handler failure.
            The message is safe to show to the client.
    """

    spec = _SPECS_BY_NAME.get(name)
    if spec is None:
        raise ToolExecutionError(f"Unknown tool: {name}")

    try:
        parsed = spec.arguments.model_validate(arguments or {})
        result = await spec.handler(tools)(**parsed.model_dump(exclude_none=True))
    except ValidationError as exc:
        LOGGER.warning("Tool %s rejected arguments", name, extra={"tool": name})
        raise ToolExecutionError(f"Error executing tool: {exc}") from exc
    except Exception as exc:
        LOGGER.error("Tool %s error", name, extra={"tool": name}, exc_info=exc)
        raise ToolExecutionError(f"Error executing tool: {str(exc) or 'Unknown error'}") from exc

    return [types.TextContent(type="text", text=result.summary)], result.data


def build_server(settings: AltmetricSettings, tools: AltmetricTools | None = None) -> Server:
    """Create the MCP server with every Altmetric tool registered."""

    toolset = tools if tools is not None else AltmetricTools.from_settings(settings)
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def _list_tools() -> list[types.Tool]:
        return [spec.definition() for spec in TOOL_SPECS]

    # Arguments are validated by the pydantic models in call_tool only.
    @server.call_tool(validate_input=False)
    async def _call_tool(
        name: str, arguments: dict[str, Any]
    ) -> tuple[list[types.TextContent], dict[str, Any]]:
        return await call_tool(toolset, name, arguments)

    return server


async def serve(settings: AltmetricSettings) -> None:
    """Run the server on stdio until the client disconnects."""

    server = build_server(settings)
    async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
        LOGGER.info("Altmetric MCP Server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main(argv: list[str] | None = None) -> int:
    """Validate configuration and serve over stdio."""
    parser = argparse.ArgumentParser(
        description="Serve Altmetric Details and Explorer API tools over MCP stdio."
    )
    parser.add_argument(
        "--log-format",
        choices=("json", "text"),
        default="json",
        help="Format of log lines written to stderr.",
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    try:
        settings.require_any_api()
    except ConfigurationError:
        print(_CONFIG_HELP, file=sys.stderr, end="")
        return 1

    listener = configure_logging(
        level=settings.log_level, json_output=args.log_format == "json"
    )
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:  # pragma: no cover - interactive shutdown
        return 0
    except Exception as exc:
        LOGGER.critical("Fatal error", exc_info=exc)
        return 1
    finally:
        shutdown_listeners([listener])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
