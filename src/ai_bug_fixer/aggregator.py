"""Suggestion aggregation: completion lookup plus Q&A search for one error query."""

import asyncio
import logging

import httpx

from .config import AppSettings
from .exceptions import MissingCredentialError, UpstreamRequestError
from .llm import ChatCompletionClient
from .models import ErrorQuery, FailureKind, LookupFailure, RelatedLink, SuggestionResult
from .search import QASearchClient

logger = logging.getLogger(__name__)


class SuggestionAggregator:
    """Run both lookups for an error query and merge them into one result.

    Failures never escape ``aggregate``: each is replaced by its fallback
    value and recorded on the result as a ``LookupFailure``.
    """

    def __init__(
        self,
        llm_client: ChatCompletionClient,
        search_client: QASearchClient,
        missing_key_message: str = "No API key found.",
        error_message: str = "Error fetching AI response.",
    ):
        self.llm_client = llm_client
        self.search_client = search_client
        self.missing_key_message = missing_key_message
        self.error_message = error_message

    @classmethod
    def from_settings(cls, app_settings: AppSettings, http_client: httpx.AsyncClient | None = None) -> "SuggestionAggregator":
        return cls(
            llm_client=ChatCompletionClient(app_settings.llm, http_client=http_client),
            search_client=QASearchClient(app_settings.search, http_client=http_client),
            missing_key_message=app_settings.llm.missing_key_message,
            error_message=app_settings.llm.error_message,
        )

    async def lookup_ai(self, text: str, api_key: str | None) -> tuple[str, LookupFailure | None]:
        try:
            return await self.llm_client.complete(text, api_key), None
        except MissingCredentialError as e:
            logger.warning("Skipping completion lookup: no API key configured")
            return self.missing_key_message, LookupFailure(FailureKind.MISSING_CREDENTIAL, str(e))
        except UpstreamRequestError as e:
            logger.warning(f"Completion lookup failed: {e.message}")
            return self.error_message, LookupFailure(FailureKind.LLM_REQUEST, e.message)

    async def lookup_links(self, text: str) -> tuple[list[RelatedLink], LookupFailure | None]:
        try:
            return await self.search_client.search(text), None
        except UpstreamRequestError as e:
            logger.warning(f"Search lookup failed: {e.message}")
            return [], LookupFailure(FailureKind.SEARCH_REQUEST, e.message)

    async def aggregate(self, query: ErrorQuery, api_key: str | None) -> SuggestionResult:
        """Run both lookups concurrently and combine them."""
        (ai_suggestion, ai_failure), (links, search_failure) = await asyncio.gather(
            self.lookup_ai(query.text, api_key),
            self.lookup_links(query.text),
        )
        failures = [failure for failure in (ai_failure, search_failure) if failure is not None]
        logger.info(f"Aggregated suggestions: {len(links)} related links, {len(failures)} failed lookups")
        return SuggestionResult(ai_suggestion=ai_suggestion, related_links=links, failures=failures)
