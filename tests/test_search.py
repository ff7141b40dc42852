"""Tests for the Stack Exchange search client."""

import httpx
import pytest

from ai_bug_fixer.config import SearchSettings
from ai_bug_fixer.exceptions import UpstreamRequestError
from ai_bug_fixer.models import RelatedLink
from ai_bug_fixer.search import QASearchClient


@pytest.fixture
def search_settings() -> SearchSettings:
    return SearchSettings(base_url="https://api.stackexchange.com/2.3", site="stackoverflow", max_results=3)


class TestSearchRequest:
    @pytest.mark.asyncio
    async def test_query_parameters(self, search_settings, endpoints):
        async with endpoints.client() as http_client:
            await QASearchClient(search_settings, http_client=http_client).search("TypeError: x is not a function")

        (request,) = endpoints.requests
        assert request.method == "GET"
        assert request.url.host == "api.stackexchange.com"
        assert request.url.path == "/2.3/search"
        assert request.url.params["order"] == "desc"
        assert request.url.params["sort"] == "relevance"
        assert request.url.params["site"] == "stackoverflow"
        assert request.url.params["intitle"] == "TypeError: x is not a function"

    @pytest.mark.asyncio
    async def test_query_is_url_encoded(self, search_settings, endpoints):
        async with endpoints.client() as http_client:
            await QASearchClient(search_settings, http_client=http_client).search("a&b=c d")

        raw_query = endpoints.requests[0].url.query.decode()
        assert "intitle=a%26b" in raw_query
        assert endpoints.requests[0].url.params["intitle"] == "a&b=c d"


class TestSearchResults:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("count", [0, 1, 2, 3, 4, 30])
    async def test_truncates_to_three_in_order(self, search_settings, endpoints, make_search_body, count):
        endpoints.search = make_search_body(count)
        async with endpoints.client() as http_client:
            links = await QASearchClient(search_settings, http_client=http_client).search("boom")

        assert len(links) == min(count, 3)
        assert [link.url for link in links] == [f"https://stackoverflow.com/q/{i}" for i in range(min(count, 3))]

    @pytest.mark.asyncio
    async def test_projects_title_and_link(self, search_settings, endpoints):
        endpoints.search = {"items": [{"title": "Why is &quot;x&quot; not a function?", "link": "https://stackoverflow.com/q/1", "score": 3}]}
        async with endpoints.client() as http_client:
            links = await QASearchClient(search_settings, http_client=http_client).search("boom")

        assert links == [RelatedLink(title='Why is "x" not a function?', url="https://stackoverflow.com/q/1")]

    @pytest.mark.asyncio
    async def test_custom_site_and_limit(self, endpoints, make_search_body):
        endpoints.search = make_search_body(5)
        settings = SearchSettings(site="serverfault", max_results=1)
        async with endpoints.client() as http_client:
            links = await QASearchClient(settings, http_client=http_client).search("boom")

        assert len(links) == 1
        assert endpoints.requests[0].url.params["site"] == "serverfault"


class TestSearchFailures:
    @pytest.mark.asyncio
    async def test_transport_error(self, search_settings, endpoints):
        endpoints.search = httpx.ReadTimeout("timed out")
        async with endpoints.client() as http_client:
            with pytest.raises(UpstreamRequestError, match="timed out") as exc_info:
                await QASearchClient(search_settings, http_client=http_client).search("boom")
        assert exc_info.value.source == "search"

    @pytest.mark.asyncio
    async def test_throttled(self, search_settings, endpoints):
        endpoints.search = httpx.Response(400, json={"error_id": 502, "error_name": "throttle_violation"})
        async with endpoints.client() as http_client:
            with pytest.raises(UpstreamRequestError, match="400"):
                await QASearchClient(search_settings, http_client=http_client).search("boom")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"items": None}, [], {"items": [{"title": "no link"}]}, {"items": ["not an object"]}])
    async def test_malformed_body(self, search_settings, endpoints, body):
        endpoints.search = body
        async with endpoints.client() as http_client:
            with pytest.raises(UpstreamRequestError):
                await QASearchClient(search_settings, http_client=http_client).search("boom")

    @pytest.mark.asyncio
    async def test_query_too_long_for_url(self, search_settings, endpoints):
        async with endpoints.client() as http_client:
            with pytest.raises(UpstreamRequestError) as exc_info:
                await QASearchClient(search_settings, http_client=http_client).search("E" * 70_000)
        assert exc_info.value.source == "search"
        assert endpoints.requests == []
