"""Utility functions and helpers.

- errors: Review error taxonomy
- logging: Structured logging with secret sanitization
- security: Secret redaction
"""

from ai_code_reviewer.utils.errors import (
    ConfigurationError,
    ErrorKind,
    FileTooLargeError,
    HttpError,
    MalformedResponseError,
    ProviderError,
    ProviderReportedError,
    ProviderTransportError,
    ResponseParseError,
    ReviewError,
)
from ai_code_reviewer.utils.logging import (
    LogEventNames,
    LogFormat,
    LogLevel,
    bind_context,
    configure_logging,
    unbind_context,
)
from ai_code_reviewer.utils.security import (
    RedactionError,
    SecretRedactor,
    SecurityError,
)

__all__ = [
    # Errors
    "ConfigurationError",
    "ErrorKind",
    "FileTooLargeError",
    "HttpError",
    "MalformedResponseError",
    "ProviderError",
    "ProviderReportedError",
    "ProviderTransportError",
    "ResponseParseError",
    "ReviewError",
    # Logging
    "LogEventNames",
    "LogFormat",
    "LogLevel",
    "bind_context",
    "configure_logging",
    "unbind_context",
    # Security
    "RedactionError",
    "SecretRedactor",
    "SecurityError",
]
