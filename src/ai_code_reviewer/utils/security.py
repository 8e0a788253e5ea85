"""Secret redaction for anything that leaves the process as text.

API keys travel in headers and, for Gemini, in the request URL. Error
bodies returned by the backends sometimes echo them back. Everything that
reaches a log line goes through :class:`SecretRedactor` first.

Redaction is fail-closed: if a pattern cannot be compiled or applied, an
exception is raised instead of returning unredacted text.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import Sequence

log = structlog.get_logger()


class SecurityError(Exception):
    """Base exception for security-related errors."""


class RedactionError(SecurityError):
    """Raised when secret redaction fails."""


class SecretRedactor:
    """Detects and redacts secrets from text.

    Usage:
        redactor = SecretRedactor()
        safe_text = redactor.redact(potentially_sensitive_text)

    Attributes:
        placeholder: The string to replace secrets with (default: "[REDACTED]").
    """

    DEFAULT_PATTERNS: tuple[tuple[str, str], ...] = (
        # Generic assignments
        (
            r"(?i)(api[_-]?key|secret|token|password)\s*[=:]\s*[\"']?[\w-]{16,}",
            "Generic secret",
        ),
        # Groq
        (r"gsk_[a-zA-Z0-9]{20,}", "Groq API key"),
        # Anthropic
        (r"sk-ant-[\w-]{20,}", "Anthropic API key"),
        # OpenAI-style keys
        (r"sk-proj-[a-zA-Z0-9_-]{20,}", "OpenAI project API key"),
        (r"sk-[a-zA-Z0-9]{32,}", "OpenAI legacy API key"),
        # Google
        (r"AIza[0-9A-Za-z\-_]{35}", "Google API key"),
        (r"ya29\.[0-9A-Za-z\-_]+", "Google OAuth access token"),
        # Gemini passes the key as a query parameter
        (r"(?<=[?&]key=)[^&\s\"']+", "URL key parameter"),
        # Authorization headers
        (r"(?i)bearer\s+[\w.\-]{16,}", "Bearer token"),
    )

    def __init__(
        self,
        placeholder: str = "[REDACTED]",
        custom_patterns: Sequence[tuple[str, str]] | None = None,
    ) -> None:
        """Initialize the SecretRedactor.

        Args:
            placeholder: String to replace detected secrets with.
            custom_patterns: Additional (pattern, name) tuples to detect.

        Raises:
            RedactionError: If any pattern fails to compile.
        """
        self.placeholder = placeholder
        self._pattern_names: dict[re.Pattern[str], str] = {}

        all_patterns = list(self.DEFAULT_PATTERNS)
        if custom_patterns:
            all_patterns.extend(custom_patterns)

        try:
            for pattern_str, name in all_patterns:
                self._pattern_names[re.compile(pattern_str)] = name
        except re.error as e:
            log.error("pattern_compilation_failed", pattern=pattern_str, error=str(e))
            raise RedactionError(f"Failed to compile secret pattern '{pattern_str}': {e}") from e

    @property
    def patterns(self) -> list[re.Pattern[str]]:
        """Return the list of compiled patterns."""
        return list(self._pattern_names.keys())

    def redact(self, text: str) -> str:
        """Redact all secrets from the given text.

        Args:
            text: The text to scan and redact secrets from.

        Returns:
            The text with all detected secrets replaced with the placeholder.

        Raises:
            RedactionError: If redaction fails for any reason.
        """
        if not text:
            return text

        try:
            result = text
            for pattern in self._pattern_names:
                result = pattern.sub(self.placeholder, result)
            return result
        except Exception as e:
            raise RedactionError(f"Redaction failed: {e}") from e

    def has_secrets(self, text: str) -> bool:
        """Check if text contains any secrets."""
        if not text:
            return False

        try:
            return any(pattern.search(text) for pattern in self._pattern_names)
        except Exception as e:
            raise RedactionError(f"Secret check failed: {e}") from e
