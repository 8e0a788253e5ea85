"""Client registry: maps each provider to a factory building its client."""

from __future__ import annotations

from collections.abc import Callable

import httpx

from ...config.schema import ReviewSettings
from ...models.provider import Provider
from ...utils.errors import ConfigurationError
from .base import BaseReviewClient
from .claude import ClaudeReviewClient
from .gemini import GeminiReviewClient
from .groq import GroqReviewClient

ClientFactory = Callable[[ReviewSettings, httpx.Client | None], BaseReviewClient]

_REGISTRY: dict[Provider, ClientFactory] = {
    Provider.GROQ: lambda s, http: GroqReviewClient(s.groq_api_key, s.groq, http),
    Provider.GEMINI: lambda s, http: GeminiReviewClient(s.gemini_api_key, s.gemini, http),
    Provider.CLAUDE: lambda s, http: ClaudeReviewClient(s.claude_api_key, s.claude, http),
}


def register_client(provider: Provider, factory: ClientFactory) -> None:
    """Register (or replace) the factory used for ``provider``."""
    _REGISTRY[provider] = factory


def create_review_client(
    provider: Provider,
    settings: ReviewSettings,
    http_client: httpx.Client | None = None,
) -> BaseReviewClient:
    """Build the client for ``provider`` from ``settings``.

    Raises:
        ConfigurationError: If no client is registered for ``provider``
            (always the case for ``Provider.NONE``) or its key is blank.
    """
    factory = _REGISTRY.get(provider)
    if factory is None:
        available = ", ".join(p.value for p in _REGISTRY)
        raise ConfigurationError(
            f"No review client for provider '{provider.value}'. Available: {available}"
        )
    return factory(settings, http_client)


def registered_providers() -> list[Provider]:
    """Return the providers that currently have a client factory."""
    return list(_REGISTRY)
