"""Anthropic Claude review client.

Calls the Messages API directly over HTTP so that status codes and error
bodies reach the caller verbatim.

Unlike the other backends, Claude issues must carry a ``line`` field; an
issue without one fails the whole parse. A missing title stays empty
instead of getting a placeholder.
"""

from __future__ import annotations

from typing import Any

import httpx

from ...config.schema import ClaudeConfig
from ...models.provider import Provider
from .base import BaseReviewClient, WireRequest


class ClaudeReviewClient(BaseReviewClient):
    """Review client for the Anthropic Messages endpoint."""

    provider = Provider.CLAUDE
    default_line = None
    default_title = ""

    def __init__(
        self,
        api_key: str,
        config: ClaudeConfig | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._config = config or ClaudeConfig()
        super().__init__(api_key, self._config.timeout, http_client)

    @property
    def model_name(self) -> str:
        return self._config.model

    def build_request(self, prompt: str) -> WireRequest:
        return WireRequest(
            url=self._config.api_url,
            headers={
                "x-api-key": self._api_key,
                "anthropic-version": self._config.api_version,
            },
            payload={
                "model": self._config.model,
                "max_tokens": self._config.max_tokens,
                "messages": [{"role": "user", "content": prompt}],
            },
        )

    def extract_text(self, envelope: dict[str, Any]) -> str:
        # content[0].text
        content = envelope.get("content")
        if not isinstance(content, list) or not content:
            raise self._malformed("Empty content")
        try:
            return content[0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise self._malformed(f"Missing content text ({e!r})") from e
