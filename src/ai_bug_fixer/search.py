"""Stack Exchange title search."""

import html
import json
import logging
from typing import Any

import httpx

from .config import SearchSettings
from .exceptions import UpstreamRequestError
from .models import RelatedLink

logger = logging.getLogger(__name__)

SOURCE = "search"


class QASearchClient:
    """Search one Stack Exchange site for questions whose title matches the error text."""

    def __init__(self, settings: SearchSettings, http_client: httpx.AsyncClient | None = None):
        self.settings = settings
        self.http_client = http_client

    @property
    def endpoint(self) -> str:
        return f"{self.settings.base_url.rstrip('/')}/search"

    def build_params(self, error_text: str) -> dict[str, str]:
        # httpx percent-encodes the values when building the query string
        return {
            "order": "desc",
            "sort": "relevance",
            "intitle": error_text,
            "site": self.settings.site,
        }

    async def search(self, error_text: str) -> list[RelatedLink]:
        """Return up to ``max_results`` links in the endpoint's relevance order.

        Raises:
            UpstreamRequestError: On any transport, HTTP status or parse failure.
        """
        params = self.build_params(error_text)
        logger.debug(f"Searching {self.settings.site} via {self.endpoint}")

        try:
            if self.http_client is not None:
                response = await self.http_client.get(self.endpoint, params=params)
            else:
                async with httpx.AsyncClient(timeout=self.settings.timeout) as client:
                    response = await client.get(self.endpoint, params=params)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            # InvalidURL covers error text too long to fit in a query string
            raise UpstreamRequestError(SOURCE, str(e) or type(e).__name__) from e
        except UnicodeEncodeError as e:
            raise UpstreamRequestError(SOURCE, f"Could not encode search request: {e}") from e

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise UpstreamRequestError(SOURCE, f"Invalid JSON in search response: {e}") from e

        return _project_items(data, self.settings.max_results)


def _project_items(data: Any, limit: int) -> list[RelatedLink]:
    items = data.get("items") if isinstance(data, dict) else None
    if not isinstance(items, list):
        raise UpstreamRequestError(SOURCE, "Search response has no item list")

    links = []
    for item in items[:limit]:
        try:
            title, link = item["title"], item["link"]
        except (KeyError, TypeError) as e:
            raise UpstreamRequestError(SOURCE, f"Malformed search item: {e!r}") from e
        # Stack Exchange returns titles with HTML entities escaped
        links.append(RelatedLink(title=html.unescape(str(title)), url=str(link)))
    return links
