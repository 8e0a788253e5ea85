"""Data models for backend selection and credentials."""

from dataclasses import dataclass
from enum import Enum


class Provider(Enum):
    """A backend that can answer a review, or NONE when nothing is configured."""

    GROQ = "groq"
    GEMINI = "gemini"
    CLAUDE = "claude"
    NONE = "none"

    @property
    def label(self) -> str:
        """Human-readable name for display in the host."""
        return _PROVIDER_LABELS[self]


_PROVIDER_LABELS = {
    Provider.GROQ: "Groq (FREE - Llama 3.3)",
    Provider.GEMINI: "Google Gemini",
    Provider.CLAUDE: "Anthropic Claude",
    Provider.NONE: "Not configured",
}

# Fallback order used for AUTO and for explicit choices without a key
FALLBACK_ORDER: tuple[Provider, ...] = (Provider.GROQ, Provider.GEMINI, Provider.CLAUDE)


class ProviderPreference(Enum):
    """User preference stored in settings."""

    AUTO = "AUTO"
    GROQ = "GROQ"
    GEMINI = "GEMINI"
    CLAUDE = "CLAUDE"

    @property
    def provider(self) -> Provider | None:
        """The explicitly requested provider, or None for AUTO."""
        if self is ProviderPreference.AUTO:
            return None
        return Provider[self.name]


@dataclass(frozen=True)
class ProviderCredentials:
    """API keys for each backend plus the selection preference."""

    groq_key: str | None = None
    gemini_key: str | None = None
    claude_key: str | None = None
    preference: ProviderPreference = ProviderPreference.AUTO

    def key_for(self, provider: Provider) -> str | None:
        """Return the configured key for ``provider`` (None for NONE)."""
        return {
            Provider.GROQ: self.groq_key,
            Provider.GEMINI: self.gemini_key,
            Provider.CLAUDE: self.claude_key,
        }.get(provider)

    def has_key(self, provider: Provider) -> bool:
        """True when the key for ``provider`` is present and not blank."""
        key = self.key_for(provider)
        return bool(key and key.strip())

    def __repr__(self) -> str:
        # Keys never appear in reprs
        configured = [p.value for p in FALLBACK_ORDER if self.has_key(p)]
        return (
            f"ProviderCredentials(preference={self.preference.value}, "
            f"configured={configured})"
        )
