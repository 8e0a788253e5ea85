"""Groq review client.

Groq serves Llama models through an OpenAI-compatible chat completions
API with a generous free tier. Authentication is a bearer token.
"""

from __future__ import annotations

from typing import Any

import httpx

from ...config.schema import GroqConfig
from ...models.provider import Provider
from .base import BaseReviewClient, WireRequest


class GroqReviewClient(BaseReviewClient):
    """Review client for the Groq chat completions endpoint.

    Example:
        client = GroqReviewClient("gsk_...")
        result = client.review(ReviewRequest(source_text, "Main.java"))
    """

    provider = Provider.GROQ

    def __init__(
        self,
        api_key: str,
        config: GroqConfig | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._config = config or GroqConfig()
        super().__init__(api_key, self._config.timeout, http_client)

    @property
    def model_name(self) -> str:
        return self._config.model

    def build_request(self, prompt: str) -> WireRequest:
        return WireRequest(
            url=self._config.api_url,
            headers={"Authorization": f"Bearer {self._api_key}"},
            payload={
                "model": self._config.model,
                "messages": [{"role": "user", "content": prompt}],
                "temperature": self._config.temperature,
                "max_tokens": self._config.max_tokens,
            },
        )

    def extract_text(self, envelope: dict[str, Any]) -> str:
        # choices[0].message.content
        choices = envelope.get("choices")
        if not isinstance(choices, list) or not choices:
            raise self._malformed("No choices")
        try:
            return choices[0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise self._malformed(f"Missing message content ({e!r})") from e
