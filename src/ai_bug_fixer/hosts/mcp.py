"""MCP host: lets an MCP client (editor or agent) trigger the workflow."""

from collections.abc import Sequence
from typing import TYPE_CHECKING

from ..config import AppSettings
from ..host import NotificationLevel
from .clipboard import read_clipboard

if TYPE_CHECKING:
    from fastmcp.server.context import Context


class McpHost:
    """HostContext backed by a FastMCP tool call.

    The tool argument plays the role of the selection. Notifications become
    MCP log messages; the quick-pick items and rendered HTML are kept so the
    tool can return them to the client.
    """

    def __init__(self, ctx: "Context", app_settings: AppSettings, selection: str | None = None):
        self.ctx = ctx
        self.app_settings = app_settings
        self.selection = selection
        self.notifications: list[tuple[NotificationLevel, str]] = []
        self.quick_pick_items: list[str] = []
        self.html: str | None = None

    async def read_selection(self) -> str | None:
        return self.selection

    async def read_clipboard(self) -> str | None:
        if not self.app_settings.server.clipboard_allowed():
            return None
        return await read_clipboard()

    async def read_config(self, name: str) -> str | None:
        return self.app_settings.get_config_value(name)

    async def notify(self, level: NotificationLevel, message: str) -> None:
        self.notifications.append((level, message))
        match level:
            case "error":
                await self.ctx.error(message)
            case "warning":
                await self.ctx.warning(message)
            case _:
                await self.ctx.info(message)

    async def show_quick_pick(self, items: Sequence[str], placeholder: str) -> str | None:
        # The client picks from the returned list itself
        self.quick_pick_items = list(items)
        return None

    async def show_html(self, title: str, html: str) -> None:
        self.html = html
