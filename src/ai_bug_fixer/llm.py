"""Chat-completion client for OpenAI-compatible endpoints."""

import json
import logging
from typing import Any

import httpx

from .config import LLMSettings
from .exceptions import MissingCredentialError, UpstreamRequestError
from .prompts import build_messages

logger = logging.getLogger(__name__)

SOURCE = "llm"


class ChatCompletionClient:
    """Ask a chat-completion endpoint to explain an error.

    Args:
        settings: Endpoint, model and prompt configuration.
        http_client: Optional shared client. When omitted a short-lived
            client is opened for each request.
    """

    def __init__(self, settings: LLMSettings, http_client: httpx.AsyncClient | None = None):
        self.settings = settings
        self.http_client = http_client

    @property
    def endpoint(self) -> str:
        return f"{self.settings.base_url.rstrip('/')}/chat/completions"

    def build_payload(self, error_text: str) -> dict[str, Any]:
        return {
            "model": self.settings.model_name,
            "messages": build_messages(self.settings.system_prompt, error_text, self.settings.max_input_chars),
        }

    async def complete(self, error_text: str, api_key: str | None) -> str:
        """Return the first completion's message content.

        Raises:
            MissingCredentialError: If ``api_key`` is empty. No request is sent.
            UpstreamRequestError: On any transport, HTTP status or parse failure.
        """
        if not api_key:
            raise MissingCredentialError("Completion API key is not configured")

        headers = {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}
        payload = self.build_payload(error_text)
        logger.debug(f"Requesting completion from {self.endpoint} (model: {self.settings.model_name})")

        try:
            if self.http_client is not None:
                response = await self.http_client.post(self.endpoint, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.settings.timeout) as client:
                    response = await client.post(self.endpoint, json=payload, headers=headers)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise UpstreamRequestError(SOURCE, str(e) or type(e).__name__) from e
        except UnicodeEncodeError as e:
            raise UpstreamRequestError(SOURCE, f"Could not encode completion request: {e}") from e

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise UpstreamRequestError(SOURCE, f"Invalid JSON in completion response: {e}") from e

        return _extract_content(data)


def _extract_content(data: Any) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise UpstreamRequestError(SOURCE, f"Unexpected completion response shape: {e!r}") from e

    if not isinstance(content, str) or not content.strip():
        raise UpstreamRequestError(SOURCE, "Completion response contained no message content")
    return content
