"""Abstract interface for LLM review backends."""

from typing import Protocol

from ..models.review import ReviewRequest, ReviewResult


class ReviewProvider(Protocol):
    """Abstract interface for LLM review backends.

    Groq, Gemini and Claude clients implement this protocol; they differ
    only in how the request envelope is built and how the generated text
    is located in the response envelope.
    """

    def review(self, request: ReviewRequest) -> ReviewResult:
        """
        Perform one complete review round trip.

        Args:
            request: Source text, file path and enabled categories

        Returns:
            Issues in the order the model returned them

        Raises:
            HttpError: If the backend answers with a non-200 status
            ProviderReportedError: If the envelope carries an error object
            MalformedResponseError: If the envelope shape is unexpected
            ResponseParseError: If the model output is not a JSON issue array
            ProviderTransportError: If the connection fails or times out
        """
        ...

    @property
    def name(self) -> str:
        """
        Return the backend identifier.

        Examples:
            - "groq"
            - "gemini"
            - "claude"
        """
        ...

    @property
    def model_name(self) -> str:
        """Return the model identifier being used."""
        ...
