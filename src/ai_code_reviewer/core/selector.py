"""Backend selection from credentials and the user's preference.

Selection is a pure function of its inputs: no I/O, no state.

Priority:
1. An explicit preference wins if that provider has a non-blank key.
2. Otherwise (AUTO, or an explicit choice without a key) the first of
   Groq, Gemini, Claude with a non-blank key.
3. Otherwise ``Provider.NONE``.
"""

from __future__ import annotations

from ..models.provider import FALLBACK_ORDER, Provider, ProviderCredentials


def select_provider(credentials: ProviderCredentials) -> Provider:
    """Resolve which backend answers a review."""
    preferred = credentials.preference.provider
    if preferred is not None and credentials.has_key(preferred):
        return preferred

    for provider in FALLBACK_ORDER:
        if credentials.has_key(provider):
            return provider

    return Provider.NONE


class ProviderSelector:
    """Holds a set of credentials and answers which backend to use."""

    def __init__(self, credentials: ProviderCredentials) -> None:
        self._credentials = credentials

    @property
    def credentials(self) -> ProviderCredentials:
        return self._credentials

    def choose(self) -> Provider:
        """Return the selected provider, ``Provider.NONE`` if unconfigured."""
        return select_provider(self._credentials)

    @property
    def provider_label(self) -> str:
        """Human-readable name of the backend that would answer."""
        return self.choose().label
