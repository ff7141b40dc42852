"""Observability module for structured request logging."""

from .logging import (
    bind_request_context,
    clear_request_context,
    get_current_request_id,
    get_request_logger,
    redact_sensitive_fields,
    setup_structured_logging,
)

__all__ = [
    "bind_request_context",
    "clear_request_context",
    "get_current_request_id",
    "get_request_logger",
    "redact_sensitive_fields",
    "setup_structured_logging",
]
