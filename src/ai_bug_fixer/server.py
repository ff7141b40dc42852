"""MCP server exposing the analyze-error workflow as a tool."""

import logging
import sys

from fastmcp import FastMCP
from fastmcp.server.context import Context

from . import __version__
from .aggregator import SuggestionAggregator
from .config import settings
from .hosts.mcp import McpHost
from .observability import setup_structured_logging
from .workflow import analyze_error as run_analyze_error

logger = logging.getLogger("ai_bug_fixer")


def format_tool_response(host: McpHost, include_chat: bool) -> str:
    """Render what the host collected as a plain-text tool response."""
    lines: list[str] = []
    for level, message in host.notifications:
        if level != "info":
            lines.append(f"[{level}] {message}")
    if host.quick_pick_items:
        if lines:
            lines.append("")
        lines.extend(host.quick_pick_items)
    if include_chat and host.html:
        lines.extend(["", host.html])
    return "\n".join(lines)


def serve(aggregator: SuggestionAggregator | None = None) -> FastMCP:
    """Create and configure the MCP server.

    Args:
        aggregator: Aggregator shared by all calls. By default one is built
            from the current settings on each call.
    """
    setup_structured_logging(settings.server.logging_level)

    server = FastMCP("ai_bug_fixer")

    @server.tool()
    async def analyze_error(ctx: Context, error_text: str | None = None, include_chat: bool = False) -> str:
        """
        Explain an error message and find related Stack Overflow questions.

        Args:
            error_text: The error message or log to analyze. When omitted, the
                server machine's clipboard is used if enabled
                and the server runs over stdio.
            include_chat: Append the HTML of the follow-up chat panel.

        Returns:
            The AI suggestion followed by up to three related links, one per
            line, preceded by any warnings raised while looking them up.
        """
        host = McpHost(ctx, settings, selection=error_text)
        agg = aggregator or SuggestionAggregator.from_settings(settings)

        result = await run_analyze_error(host, agg, open_chat=include_chat, command="analyze_error")
        if result is None:
            return f"Error: {host.notifications[-1][1]}"
        return format_tool_response(host, include_chat)

    @server.tool()
    async def health_check() -> dict:
        """Report server status and the endpoints in use (no secrets)."""
        return {
            "status": "healthy",
            "version": __version__,
            "model": settings.llm.model_name,
            "llm_base_url": settings.llm.base_url,
            "search_site": settings.search.site,
            "api_key_configured": settings.llm.resolve_api_key() is not None,
        }

    return server


def main() -> None:
    """Entry point for MCP server."""
    transport = settings.server.transport
    server_instance = serve()

    if transport == "stdio":
        logger.info(f"Starting AI bug fixer MCP server (model: {settings.llm.model_name}, transport: stdio)")
        server_instance.run(transport="stdio")
    elif transport in ("streamable-http", "sse"):
        logger.info(f"Starting AI bug fixer MCP server (model: {settings.llm.model_name}, transport: {transport})")
        logger.info(f"HTTP server at http://{settings.server.host}:{settings.server.port}/mcp")
        server_instance.run(transport=transport, host=settings.server.host, port=settings.server.port)
    else:
        print(f"Unknown transport: {transport}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
