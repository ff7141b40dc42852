"""Value types passed between capture, aggregation and presentation."""

from dataclasses import dataclass, field
from enum import Enum

MAX_RELATED_LINKS = 3


@dataclass(frozen=True)
class ErrorQuery:
    """Error text captured from the host."""

    text: str


@dataclass(frozen=True)
class RelatedLink:
    """A single Q&A search hit."""

    title: str
    url: str


class FailureKind(str, Enum):
    """Kind of lookup failure absorbed by the aggregator."""

    MISSING_CREDENTIAL = "missing_credential"
    LLM_REQUEST = "llm_request"
    SEARCH_REQUEST = "search_request"


@dataclass(frozen=True)
class LookupFailure:
    """A failure that was replaced by a fallback value."""

    kind: FailureKind
    message: str


@dataclass
class SuggestionResult:
    """Combined suggestions for one error query.

    ``ai_suggestion`` is never empty and ``related_links`` holds at most
    three links in the order the search endpoint returned them. Lookups that
    failed are listed in ``failures`` so an outer layer can report them.
    """

    ai_suggestion: str
    related_links: list[RelatedLink] = field(default_factory=list)
    failures: list[LookupFailure] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.ai_suggestion:
            raise ValueError("ai_suggestion must be non-empty")
        if len(self.related_links) > MAX_RELATED_LINKS:
            raise ValueError(f"related_links holds at most {MAX_RELATED_LINKS} links, got {len(self.related_links)}")

    @property
    def degraded(self) -> bool:
        return bool(self.failures)

    def failure_kinds(self) -> set[FailureKind]:
        return {failure.kind for failure in self.failures}
