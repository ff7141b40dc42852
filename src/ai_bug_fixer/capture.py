"""Error text capture from the host selection or clipboard."""

import logging

from .exceptions import NoInputError
from .host import HostContext
from .models import ErrorQuery

logger = logging.getLogger(__name__)


async def capture_error_text(host: HostContext) -> ErrorQuery:
    """Capture error text, preferring the selection over the clipboard.

    The text is returned untouched; no validation or length limit applies.

    Raises:
        NoInputError: If the selection is empty and the clipboard is empty or
            whitespace-only.
    """
    selection = await host.read_selection()
    if selection:
        logger.debug("Captured error text from selection")
        return ErrorQuery(text=selection)

    clipboard = await host.read_clipboard()
    if clipboard and clipboard.strip():
        logger.debug("Captured error text from clipboard")
        return ErrorQuery(text=clipboard)

    raise NoInputError("No error text in the selection or clipboard")
