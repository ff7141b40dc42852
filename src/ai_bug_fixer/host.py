"""Capabilities the surrounding editor or application provides to the workflow."""

from collections.abc import Sequence
from typing import Literal, Protocol

NotificationLevel = Literal["info", "warning", "error"]


class HostContext(Protocol):
    """Capability bundle passed into the workflow by the caller.

    Core modules reach the editor only through this object, so tests can
    substitute a fake.
    """

    async def read_selection(self) -> str | None:
        """Return the active text selection, or None when nothing is selected."""
        ...

    async def read_clipboard(self) -> str | None:
        """Return the clipboard contents, or None when unavailable."""
        ...

    async def read_config(self, name: str) -> str | None:
        """Return a named configuration value."""
        ...

    async def notify(self, level: NotificationLevel, message: str) -> None:
        """Show a notification to the user."""
        ...

    async def show_quick_pick(self, items: Sequence[str], placeholder: str) -> str | None:
        """Offer a single-choice list and return the chosen item, if any."""
        ...

    async def show_html(self, title: str, html: str) -> None:
        """Render an HTML surface."""
        ...
