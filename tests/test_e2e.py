"""End-to-end tests against the real completion and search endpoints.

These tests hit the network and are skipped unless opted into.

Run e2e tests:
    BUGFIX_RUN_E2E=1 OPENAI_API_KEY=... pytest tests/test_e2e.py -m e2e -v
"""

import os

import pytest

from ai_bug_fixer.aggregator import SuggestionAggregator
from ai_bug_fixer.config import AppSettings, LLMSettings, SearchSettings
from ai_bug_fixer.models import ErrorQuery, FailureKind

pytestmark = [
    pytest.mark.e2e,
    pytest.mark.anyio,
    pytest.mark.skipif(not os.environ.get("BUGFIX_RUN_E2E"), reason="Set BUGFIX_RUN_E2E=1 to run network tests"),
]


async def test_search_returns_links():
    aggregator = SuggestionAggregator.from_settings(AppSettings(llm=LLMSettings(), search=SearchSettings()))
    result = await aggregator.aggregate(ErrorQuery(text="is not a function"), api_key=None)

    assert FailureKind.SEARCH_REQUEST not in result.failure_kinds()
    assert 0 < len(result.related_links) <= 3
    assert all(link.url.startswith("https://stackoverflow.com/") for link in result.related_links)


@pytest.mark.skipif(not os.environ.get("OPENAI_API_KEY"), reason="OPENAI_API_KEY not set")
async def test_completion_returns_suggestion():
    settings = AppSettings(llm=LLMSettings(), search=SearchSettings())
    aggregator = SuggestionAggregator.from_settings(settings)
    result = await aggregator.aggregate(ErrorQuery(text="TypeError: x is not a function"), api_key=settings.llm.resolve_api_key())

    assert FailureKind.LLM_REQUEST not in result.failure_kinds()
    assert result.ai_suggestion not in (settings.llm.missing_key_message, settings.llm.error_message)
