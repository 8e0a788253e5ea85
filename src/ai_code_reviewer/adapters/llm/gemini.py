"""Google Gemini review client.

The API key travels as the ``key`` query parameter, so request URLs must
never be logged unredacted.
"""

from __future__ import annotations

from typing import Any

import httpx

from ...config.schema import GeminiConfig
from ...models.provider import Provider
from .base import BaseReviewClient, WireRequest


class GeminiReviewClient(BaseReviewClient):
    """Review client for the Gemini ``generateContent`` endpoint."""

    provider = Provider.GEMINI

    def __init__(
        self,
        api_key: str,
        config: GeminiConfig | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._config = config or GeminiConfig()
        super().__init__(api_key, self._config.timeout, http_client)

    @property
    def model_name(self) -> str:
        return self._config.model

    def build_request(self, prompt: str) -> WireRequest:
        return WireRequest(
            url=self._config.api_url,
            params={"key": self._api_key},
            payload={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": {
                    "maxOutputTokens": self._config.max_output_tokens,
                    "temperature": self._config.temperature,
                },
            },
        )

    def extract_text(self, envelope: dict[str, Any]) -> str:
        # candidates[0].content.parts[0].text
        candidates = envelope.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            raise self._malformed("No candidates")
        try:
            return candidates[0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise self._malformed(f"Missing candidate text ({e!r})") from e
