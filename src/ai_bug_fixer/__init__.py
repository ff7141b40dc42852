"""Explain error messages with an LLM and related Stack Overflow questions."""

__version__ = "0.1.0"

from .aggregator import SuggestionAggregator  # noqa: E402
from .capture import capture_error_text  # noqa: E402
from .config import settings  # noqa: E402
from .exceptions import BugFixerError, MissingCredentialError, NoInputError, UpstreamRequestError  # noqa: E402
from .models import ErrorQuery, FailureKind, LookupFailure, RelatedLink, SuggestionResult  # noqa: E402
from .workflow import analyze_error  # noqa: E402

__all__ = [
    "__version__",
    "analyze_error",
    "capture_error_text",
    "settings",
    "SuggestionAggregator",
    "ErrorQuery",
    "RelatedLink",
    "SuggestionResult",
    "FailureKind",
    "LookupFailure",
    "BugFixerError",
    "NoInputError",
    "MissingCredentialError",
    "UpstreamRequestError",
]
