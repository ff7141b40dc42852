"""The analyze-error command: capture, aggregate, present."""

import logging
import uuid

from .aggregator import SuggestionAggregator
from .capture import capture_error_text
from .config import API_KEY_CONFIG_NAME
from .exceptions import NoInputError
from .host import HostContext
from .models import SuggestionResult
from .observability import bind_request_context, clear_request_context, get_request_logger, setup_structured_logging
from .presentation import (
    ANALYZING_MESSAGE,
    CHAT_PANEL_TITLE,
    NO_INPUT_MESSAGE,
    QUICK_PICK_PLACEHOLDER,
    format_suggestions,
    render_chat_html,
    report_failures,
)

logger = logging.getLogger(__name__)


async def analyze_error(
    host: HostContext,
    aggregator: SuggestionAggregator,
    open_chat: bool = True,
    command: str = "analyze_error",
) -> SuggestionResult | None:
    """Run the analyze-error command against a host.

    Returns the combined suggestions, or None when there was no error text
    to analyze. Lookup failures are reported through ``host.notify`` and
    never raised.
    """
    # No-op when the CLI or server already configured logging
    setup_structured_logging()
    bind_request_context(str(uuid.uuid4()), command)
    request_logger = get_request_logger()
    try:
        try:
            query = await capture_error_text(host)
        except NoInputError:
            request_logger.info("no_input")
            await host.notify("error", NO_INPUT_MESSAGE)
            return None

        request_logger.info("request_started", text_length=len(query.text))
        await host.notify("info", ANALYZING_MESSAGE)

        api_key = await host.read_config(API_KEY_CONFIG_NAME)
        result = await aggregator.aggregate(query, api_key)
        await report_failures(result, host)

        request_logger.info(
            "request_completed",
            related_links=len(result.related_links),
            failures=[failure.kind.value for failure in result.failures],
        )

        choice = await host.show_quick_pick(format_suggestions(result), QUICK_PICK_PLACEHOLDER)
        if choice:
            logger.debug(f"Suggestion picked: {choice[:100]}")

        if open_chat:
            await host.show_html(CHAT_PANEL_TITLE, render_chat_html(query.text))

        return result
    finally:
        clear_request_context()
