"""Pydantic models for configuration schema."""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.provider import ProviderCredentials, ProviderPreference
from ..models.review import Category

DEFAULT_TIMEOUT = 60.0


class GroqConfig(BaseModel):
    """Groq-specific configuration (OpenAI-compatible chat completions)."""

    api_url: str = "https://api.groq.com/openai/v1/chat/completions"
    model: str = "llama-3.3-70b-versatile"
    max_tokens: int = Field(4096, ge=1)
    temperature: float = Field(0.1, ge=0.0, le=2.0)
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0)


class GeminiConfig(BaseModel):
    """Google Gemini-specific configuration."""

    api_base: str = "https://generativelanguage.googleapis.com/v1beta/models"
    model: str = "gemini-2.0-flash-exp"
    max_output_tokens: int = Field(4096, ge=1)
    temperature: float = Field(0.1, ge=0.0, le=2.0)
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0)

    @property
    def api_url(self) -> str:
        """generateContent endpoint for the configured model."""
        return f"{self.api_base.rstrip('/')}/{self.model}:generateContent"


class ClaudeConfig(BaseModel):
    """Anthropic Claude-specific configuration."""

    api_url: str = "https://api.anthropic.com/v1/messages"
    model: str = "claude-sonnet-4-20250514"
    api_version: str = "2023-06-01"
    max_tokens: int = Field(4096, ge=1)
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0)


class FileLoggingConfig(BaseModel):
    """File logging configuration."""

    enabled: bool = False
    path: Path = Path("ai-code-reviewer.log")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["json", "console"] = "console"
    file: FileLoggingConfig = FileLoggingConfig()


class ReviewSettings(BaseSettings):
    """Root settings record.

    The flat fields mirror what the IDE plugin persisted: provider
    preference, three API keys, four category toggles, auto-review-on-save
    and the file size limit. Only the preference and the keys are read by
    the review core; everything else is for the host.
    """

    provider: ProviderPreference = ProviderPreference.AUTO

    groq_api_key: str = ""
    gemini_api_key: str = ""
    claude_api_key: str = ""

    check_bugs: bool = True
    check_spelling: bool = True  # Also enables NAMING
    check_readability: bool = True
    check_javadoc: bool = True

    auto_review_on_save: bool = False
    max_file_size_kb: int = Field(100, ge=1)

    groq: GroqConfig = GroqConfig()
    gemini: GeminiConfig = GeminiConfig()
    claude: ClaudeConfig = ClaudeConfig()
    logging: LoggingConfig = LoggingConfig()

    model_config = SettingsConfigDict(
        env_prefix="AI_CODE_REVIEWER_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @field_validator("provider", mode="before")
    @classmethod
    def normalize_provider(cls, v: Any) -> Any:
        """Accept provider names in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("groq_api_key", "gemini_api_key", "claude_api_key", mode="before")
    @classmethod
    def none_key_is_blank(cls, v: Any) -> Any:
        """Treat a null key (e.g. an empty YAML value) as not configured."""
        return "" if v is None else v

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_kb * 1024

    def enabled_categories(self) -> frozenset[Category]:
        """Map the four toggles onto the five review categories."""
        enabled: set[Category] = set()
        if self.check_bugs:
            enabled.add(Category.BUG)
        if self.check_spelling:
            enabled.update((Category.SPELL_CHECK, Category.NAMING))
        if self.check_readability:
            enabled.add(Category.READABILITY)
        if self.check_javadoc:
            enabled.add(Category.JAVADOC)
        return frozenset(enabled)

    def credentials(self) -> ProviderCredentials:
        """Extract what the provider selector needs."""
        return ProviderCredentials(
            groq_key=self.groq_api_key,
            gemini_key=self.gemini_api_key,
            claude_key=self.claude_api_key,
            preference=self.provider,
        )
