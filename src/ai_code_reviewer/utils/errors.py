"""Exception hierarchy for code review failures.

Every failure is raised to the immediate caller of ``review()``. Nothing in
the package retries or degrades a failure into an empty result: a transport
or parse failure must never look like a clean file.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Machine-readable kind of a provider failure."""

    HTTP_ERROR = "http_error"
    PROVIDER_REPORTED_ERROR = "provider_reported_error"
    MALFORMED_RESPONSE = "malformed_response"
    PARSE_ERROR = "parse_error"
    TRANSPORT_ERROR = "transport_error"


# =============================================================================
# Custom Exceptions
# =============================================================================


class ReviewError(Exception):
    """Base exception for all review errors."""


class ConfigurationError(ReviewError):
    """No usable provider credential is configured."""


class FileTooLargeError(ReviewError):
    """Source file exceeds the configured size limit.

    Attributes:
        size_bytes: Actual size of the file.
        limit_bytes: Configured maximum size.
    """

    def __init__(self, file_path: str, size_bytes: int, limit_bytes: int) -> None:
        super().__init__(
            f"File too large ({size_bytes // 1024}KB). "
            f"Max: {limit_bytes // 1024}KB. "
            f"Increase the limit in settings (max_file_size_kb): {file_path}"
        )
        self.file_path = file_path
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes


class ProviderError(ReviewError):
    """A single provider round trip failed.

    Attributes:
        provider: Name of the backend that failed (e.g. "groq").
    """

    kind: ErrorKind

    def __init__(self, message: str, provider: str = "") -> None:
        super().__init__(message)
        self.provider = provider


class HttpError(ProviderError):
    """Backend answered with a non-200 status.

    Attributes:
        status_code: HTTP status returned by the backend.
        body: Raw error body, verbatim.
    """

    kind = ErrorKind.HTTP_ERROR

    def __init__(self, status_code: int, body: str, provider: str = "") -> None:
        label = provider.capitalize() or "Provider"
        super().__init__(f"{label} API error {status_code}: {body}", provider)
        self.status_code = status_code
        self.body = body


class ProviderReportedError(ProviderError):
    """Backend returned 200 but embedded an error object in the envelope."""

    kind = ErrorKind.PROVIDER_REPORTED_ERROR


class MalformedResponseError(ProviderError):
    """Response JSON lacks the envelope shape expected for the backend."""

    kind = ErrorKind.MALFORMED_RESPONSE


class ResponseParseError(ProviderError):
    """Model output is not a valid JSON array of issues.

    Attributes:
        raw_text: The cleaned model output that failed to parse.
    """

    kind = ErrorKind.PARSE_ERROR

    def __init__(self, message: str, raw_text: str, provider: str = "") -> None:
        super().__init__(message, provider)
        self.raw_text = raw_text


class ProviderTransportError(ProviderError):
    """Connection failed or timed out before a status was received."""

    kind = ErrorKind.TRANSPORT_ERROR
