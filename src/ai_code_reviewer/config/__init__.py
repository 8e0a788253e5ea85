"""Settings loading and validation."""

from .loader import load_settings
from .schema import (
    DEFAULT_TIMEOUT,
    ClaudeConfig,
    FileLoggingConfig,
    GeminiConfig,
    GroqConfig,
    LoggingConfig,
    ReviewSettings,
)

__all__ = [
    # Loader
    "load_settings",
    # Root settings
    "ReviewSettings",
    # Provider-specific configs
    "ClaudeConfig",
    "GeminiConfig",
    "GroqConfig",
    "DEFAULT_TIMEOUT",
    # Logging
    "FileLoggingConfig",
    "LoggingConfig",
]
