"""Single entry point for running a review.

The orchestrator asks the selector which backend to use, builds that
backend's client and runs one review. It adds no retries, no fallback to
another backend on failure and no caching: the selected client's result
or error is returned to the caller unchanged.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

import structlog

from ..adapters.llm.registry import create_review_client
from ..config.schema import ReviewSettings
from ..models.provider import Provider
from ..models.review import Category, ReviewRequest, ReviewResult
from ..utils.errors import ConfigurationError, ReviewError
from ..utils.logging import LogEventNames, bind_context, unbind_context
from .selector import ProviderSelector

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from ..interfaces.llm import ReviewProvider

    ReviewClientFactory = Callable[[Provider, ReviewSettings, httpx.Client | None], ReviewProvider]

log = structlog.get_logger()

NOT_CONFIGURED_MESSAGE = (
    "No API key configured.\n\n"
    "RECOMMENDED FREE option:\n"
    "1. Go to console.groq.com -> sign up free\n"
    "2. Create an API key (no credit card)\n"
    "3. Set groq_api_key in your settings file "
    "(or the AI_CODE_REVIEWER_GROQ_API_KEY environment variable)\n"
    "Free limit: 14,400 checks/day\n\n"
    "Gemini (aistudio.google.com/app/apikey) and Claude "
    "(console.anthropic.com) keys are also supported."
)


class ReviewOrchestrator:
    """Composes provider selection and a provider client.

    Example:
        orchestrator = ReviewOrchestrator(load_settings(path))
        result = orchestrator.review(source, "src/Main.java")
        print(orchestrator.provider_label, result.summary)
    """

    def __init__(
        self,
        settings: ReviewSettings,
        http_client: httpx.Client | None = None,
        client_factory: ReviewClientFactory | None = None,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            settings: Review settings (keys, preference, categories, models).
            http_client: Shared HTTP client passed to every backend client.
                If None, each review opens and closes its own.
            client_factory: Builds the client for the selected provider.
                Defaults to the client registry.
        """
        self._settings = settings
        self._selector = ProviderSelector(settings.credentials())
        self._http_client = http_client
        self._client_factory = client_factory or create_review_client

    @property
    def selector(self) -> ProviderSelector:
        return self._selector

    @property
    def provider(self) -> Provider:
        """Backend the next review would use."""
        return self._selector.choose()

    @property
    def provider_label(self) -> str:
        """Human-readable name of the backend the next review would use."""
        return self._selector.provider_label

    def review(
        self,
        source_text: str,
        file_path: str,
        categories: Iterable[Category] | None = None,
    ) -> ReviewResult:
        """Review one file.

        Args:
            source_text: Full file contents.
            file_path: Path used to key the result.
            categories: Categories to check. Defaults to the ones enabled
                in settings.

        Returns:
            Issues in the order the model returned them.

        Raises:
            ConfigurationError: If no provider has a usable key.
            ProviderError: If the selected backend fails at any step.
        """
        enabled = (
            frozenset(categories)
            if categories is not None
            else self._settings.enabled_categories()
        )
        request = ReviewRequest(
            source_text=source_text,
            file_path=file_path,
            enabled_categories=enabled,
        )

        provider = self._selector.choose()
        if provider is Provider.NONE:
            log.warning(LogEventNames.PROVIDER_NOT_CONFIGURED, file_path=file_path)
            raise ConfigurationError(NOT_CONFIGURED_MESSAGE)

        log.debug(
            LogEventNames.PROVIDER_SELECTED,
            provider=provider.value,
            preference=self._settings.provider.value,
        )
        bind_context(file_path=file_path, provider=provider.value)
        try:
            log.info(
                LogEventNames.REVIEW_STARTED,
                provider_label=provider.label,
                categories=[c.value for c in request.ordered_categories],
            )
            client = self._client_factory(provider, self._settings, self._http_client)
            result = client.review(request)
        except ReviewError as e:
            log.error(LogEventNames.REVIEW_FAILED, error_type=type(e).__name__, error=str(e))
            raise
        finally:
            unbind_context("file_path", "provider")

        log.info(
            LogEventNames.REVIEW_COMPLETE,
            file_path=file_path,
            critical=result.critical_count,
            warnings=result.warning_count,
            suggestions=result.suggestion_count,
        )
        return result

