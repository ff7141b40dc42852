"""CLI interface for the AI bug fixer."""

import asyncio
import sys

import typer

from .aggregator import SuggestionAggregator
from .config import CONFIG_FILE, settings
from .hosts.terminal import TerminalHost
from .observability import setup_structured_logging
from .workflow import analyze_error

app = typer.Typer(help="Explain error messages with an LLM and related Stack Overflow questions")


def _read_piped_stdin() -> str | None:
    if sys.stdin is None or sys.stdin.isatty():
        return None
    return sys.stdin.read()


@app.command()
def analyze(
    text: str = typer.Argument(None, help="Error message to analyze (default: piped stdin, then the clipboard)"),
    chat: bool = typer.Option(True, "--chat/--no-chat", help="Open the follow-up chat panel in a browser"),
    clipboard: bool = typer.Option(True, "--clipboard/--no-clipboard", help="Fall back to the system clipboard"),
    pick: bool = typer.Option(False, "--pick", "-p", help="Prompt for a suggestion after listing them"),
) -> None:
    """Analyze an error message."""
    setup_structured_logging(settings.server.logging_level)

    selection = text if text is not None else _read_piped_stdin()
    host = TerminalHost(settings, selection=selection, use_clipboard=clipboard, interactive=pick)

    async def _analyze():
        return await analyze_error(host, SuggestionAggregator.from_settings(settings), open_chat=chat, command="analyze")

    result = asyncio.run(_analyze())
    if result is None:
        raise typer.Exit(code=1)


@app.command()
def config() -> None:
    """Show current configuration."""
    api_key = settings.llm.resolve_api_key()
    print(f"Config file: {CONFIG_FILE}")
    print(f"Model: {settings.llm.model_name}")
    print(f"LLM Base URL: {settings.llm.base_url}")
    print(f"API Key: {'(set)' if api_key else '(not set)'}")
    print(f"Max Input Chars: {settings.llm.max_input_chars}")
    print(f"Search: {settings.search.base_url} (site: {settings.search.site})")
    print(f"Max Results: {settings.search.max_results}")
    print(f"Transport: {settings.server.transport}")


@app.command()
def serve() -> None:
    """Run the MCP server."""
    from .server import main

    main()


if __name__ == "__main__":
    app()
