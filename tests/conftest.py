"""Pytest configuration and fixtures for ai-bug-fixer tests."""

import json
from collections.abc import Callable, Sequence

import httpx
import pytest

from ai_bug_fixer.config import AppSettings, LLMSettings, SearchSettings, ServerSettings


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "e2e: End-to-end tests requiring real API keys and network access")


@pytest.fixture
def anyio_backend():
    return "asyncio"


class FakeHost:
    """In-memory HostContext recording every UI call."""

    def __init__(self, selection: str | None = None, clipboard: str | None = None, config: dict[str, str] | None = None, pick: int | None = None):
        self.selection = selection
        self.clipboard = clipboard
        self.config = config or {}
        self.pick = pick
        self.clipboard_reads = 0
        self.notifications: list[tuple[str, str]] = []
        self.quick_picks: list[tuple[list[str], str]] = []
        self.html_panels: list[tuple[str, str]] = []

    async def read_selection(self) -> str | None:
        return self.selection

    async def read_clipboard(self) -> str | None:
        self.clipboard_reads += 1
        return self.clipboard

    async def read_config(self, name: str) -> str | None:
        return self.config.get(name)

    async def notify(self, level: str, message: str) -> None:
        self.notifications.append((level, message))

    async def show_quick_pick(self, items: Sequence[str], placeholder: str) -> str | None:
        self.quick_picks.append((list(items), placeholder))
        if self.pick is not None and self.pick < len(items):
            return items[self.pick]
        return None

    async def show_html(self, title: str, html: str) -> None:
        self.html_panels.append((title, html))


@pytest.fixture
def fake_host() -> type[FakeHost]:
    return FakeHost


class FakeEndpoints:
    """Mock transport serving the completion and search endpoints.

    Set ``completion`` / ``search`` to a JSON-able body, an ``httpx.Response``,
    or an exception instance to raise as a transport failure.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.completion: object = completion_body("Check that x is callable before invoking it.")
        self.search: object = search_body(2)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path.endswith("/chat/completions"):
            reply = self.completion
        elif request.url.path.endswith("/search"):
            reply = self.search
        else:
            return httpx.Response(404, json={"error": "not found"})

        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, httpx.Response):
            return reply
        return httpx.Response(200, content=json.dumps(reply).encode(), headers={"Content-Type": "application/json"})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def requests_to(self, suffix: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.url.path.endswith(suffix)]


def completion_body(content: str | None) -> dict:
    return {"id": "chatcmpl-1", "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


def search_body(count: int) -> dict:
    return {
        "items": [{"title": f"Question {i}", "link": f"https://stackoverflow.com/q/{i}", "score": 10 - i} for i in range(count)],
        "has_more": False,
    }


@pytest.fixture
def endpoints() -> FakeEndpoints:
    return FakeEndpoints()


@pytest.fixture
def make_completion_body() -> Callable[[str | None], dict]:
    return completion_body


@pytest.fixture
def make_search_body() -> Callable[[int], dict]:
    return search_body


@pytest.fixture
def app_settings(monkeypatch) -> AppSettings:
    """Settings built from defaults only, ignoring the caller's environment."""
    for var in ("OPENAI_API_KEY", "BUGFIX_LLM_API_KEY"):
        monkeypatch.delenv(var, raising=False)
    return AppSettings(llm=LLMSettings(), search=SearchSettings(), server=ServerSettings(read_clipboard=False))
