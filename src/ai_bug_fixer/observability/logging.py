"""Structured logging for workflow runs using structlog and contextvars.

Every run of the analyze-error command binds a ``request_id`` and the
``command`` that started it, so log lines from the capture, lookup and
presentation steps can be correlated. Output goes to stderr as JSON; stdout
belongs to CLI output and the stdio MCP transport.
"""

import logging
import sys
from contextvars import ContextVar
from typing import Any

import structlog

current_request_id: ContextVar[str | None] = ContextVar("current_request_id", default=None)

# Event keys whose values are replaced before rendering
SENSITIVE_KEYS = frozenset({"api_key", "authorization", "headers"})
REDACTED = "[REDACTED]"

_configured = False


def redact_sensitive_fields(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor masking credential-bearing fields."""
    for key in event_dict.keys() & SENSITIVE_KEYS:
        event_dict[key] = REDACTED
    return event_dict


def setup_structured_logging(level: str = "INFO") -> None:
    """Configure structlog to render JSON through stdlib logging on stderr.

    Safe to call more than once; only the first call takes effect.
    """
    global _configured
    if _configured:
        return

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            redact_sensitive_fields,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
        stream=sys.stderr,
    )

    # httpx logs full request URLs, which include the error text
    for logger_name in ("httpx", "httpcore"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    _configured = True


def bind_request_context(request_id: str, command: str) -> None:
    """Attach ``request_id`` and ``command`` to every log line in this async context."""
    current_request_id.set(request_id)
    structlog.contextvars.bind_contextvars(request_id=request_id, command=command)


def clear_request_context() -> None:
    current_request_id.set(None)
    structlog.contextvars.clear_contextvars()


def get_request_logger(name: str = "ai_bug_fixer") -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def get_current_request_id() -> str | None:
    return current_request_id.get()
