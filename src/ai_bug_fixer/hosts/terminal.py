"""Terminal host: drives the workflow from the command line."""

import logging
import tempfile
import webbrowser
from collections.abc import Sequence
from pathlib import Path

import typer

from ..config import AppSettings
from ..host import NotificationLevel
from .clipboard import read_clipboard

logger = logging.getLogger(__name__)

_LEVEL_STYLES: dict[str, dict] = {
    "info": {"fg": typer.colors.BLUE},
    "warning": {"fg": typer.colors.YELLOW},
    "error": {"fg": typer.colors.RED, "bold": True},
}


class TerminalHost:
    """HostContext for the CLI.

    The selection is whatever text was passed on the command line (or piped
    on stdin); the clipboard is the system clipboard.

    Args:
        app_settings: Settings answering ``read_config``.
        selection: Text given by the user, if any.
        use_clipboard: Whether to fall back to the system clipboard.
        interactive: Whether to prompt for a suggestion choice.
        open_browser: Whether to open the rendered HTML in a browser.
    """

    def __init__(
        self,
        app_settings: AppSettings,
        selection: str | None = None,
        use_clipboard: bool = True,
        interactive: bool = False,
        open_browser: bool = True,
    ):
        self.app_settings = app_settings
        self.selection = selection
        self.use_clipboard = use_clipboard
        self.interactive = interactive
        self.open_browser = open_browser
        self.html_path: Path | None = None

    async def read_selection(self) -> str | None:
        return self.selection

    async def read_clipboard(self) -> str | None:
        if not self.use_clipboard:
            return None
        return await read_clipboard()

    async def read_config(self, name: str) -> str | None:
        return self.app_settings.get_config_value(name)

    async def notify(self, level: NotificationLevel, message: str) -> None:
        typer.secho(message, err=True, **_LEVEL_STYLES.get(level, {}))

    async def show_quick_pick(self, items: Sequence[str], placeholder: str) -> str | None:
        typer.secho(placeholder, bold=True)
        for index, item in enumerate(items, start=1):
            typer.echo(f"{index}. {item}")

        if not self.interactive or not items:
            return None
        choice = typer.prompt("Pick a suggestion (0 to skip)", type=int, default=0)
        if 1 <= choice <= len(items):
            return items[choice - 1]
        return None

    async def show_html(self, title: str, html: str) -> None:
        with tempfile.NamedTemporaryFile("w", suffix=".html", prefix="ai-bug-fixer-chat-", delete=False, encoding="utf-8") as f:
            f.write(html)
        self.html_path = Path(f.name)
        typer.secho(f"{title}: {self.html_path}", err=True)
        if self.open_browser:
            webbrowser.open(self.html_path.as_uri())
