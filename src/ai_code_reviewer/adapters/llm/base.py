"""Shared review round trip for all LLM backends.

Every backend follows the same steps: build the prompt, wrap it in the
backend's request envelope, POST it, locate the generated text in the
response envelope, strip markdown fences and parse the issue array.
Subclasses only supply the two envelope-specific hooks.

Model output is validated with a strict Pydantic schema. Individual
fields that are missing or null fall back to defaults; a field with the
wrong JSON type, or output that is not a JSON array, fails the whole
review. Partial results are never returned.
"""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError

from ...models.provider import Provider
from ...models.review import Category, Issue, ReviewRequest, ReviewResult, Severity
from ...utils.errors import (
    ConfigurationError,
    HttpError,
    MalformedResponseError,
    ProviderReportedError,
    ProviderTransportError,
    ResponseParseError,
)
from ...utils.logging import LogEventNames
from .prompt import build_prompt

log = structlog.get_logger()

# Opening fence with an optional language tag, e.g. ```json
_LEADING_FENCE = re.compile(r"^```[\w+#.-]*")
_FENCE = "```"

NO_TITLE = "(no title)"


class IssuePayload(BaseModel):
    """One element of the issue array as emitted by the model."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    line: StrictInt | None = None
    severity: StrictStr | None = None
    category: StrictStr | None = None
    title: StrictStr | None = None
    description: StrictStr | None = None
    suggestion: StrictStr | None = None
    fixed_code: StrictStr | None = Field(default=None, alias="fixedCode")


@dataclass(frozen=True)
class WireRequest:
    """A backend-specific request ready to be sent."""

    url: str
    payload: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)


def strip_markdown_fences(text: str) -> str:
    """Remove a leading code fence and everything from the last fence on.

    This is a best-effort textual strip: the opening fence is removed even
    when no closing fence follows. Without an opening fence the text is only
    cut when it ends with one, so backticks inside JSON strings survive.
    """
    text = text.strip()
    unfenced, opened = _LEADING_FENCE.subn("", text, count=1)
    if opened or text.endswith(_FENCE):
        end = unfenced.rfind(_FENCE)
        if end >= 0:
            unfenced = unfenced[:end]
    return unfenced.strip()


def parse_issues(
    text: str,
    *,
    default_line: int | None = 1,
    default_title: str = NO_TITLE,
    provider: str = "",
) -> list[Issue]:
    """Parse cleaned model output into issues.

    Args:
        text: Model output with fences already stripped.
        default_line: Line used when an issue has no ``line``. ``None``
            makes the field mandatory.
        default_title: Title used when an issue has no ``title``.
        provider: Backend name, attached to any error raised.

    Returns:
        Issues in model order.

    Raises:
        ResponseParseError: If the text is not a JSON array of valid issues.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        log.warning(
            LogEventNames.LLM_RESPONSE_PARSE_ERROR,
            provider=provider,
            error=str(e),
            response_preview=text[:200],
        )
        raise ResponseParseError(
            f"Failed to parse review issues JSON: {e}", raw_text=text, provider=provider
        ) from e

    if not isinstance(data, list):
        raise ResponseParseError(
            f"Expected a JSON array of issues, got {type(data).__name__}",
            raw_text=text,
            provider=provider,
        )

    issues: list[Issue] = []
    for index, element in enumerate(data):
        try:
            payload = IssuePayload.model_validate(element)
        except ValidationError as e:
            log.warning(
                LogEventNames.LLM_RESPONSE_PARSE_ERROR,
                provider=provider,
                index=index,
                error=str(e),
            )
            raise ResponseParseError(
                f"Invalid issue at index {index}: {e}", raw_text=text, provider=provider
            ) from e

        line = payload.line if payload.line is not None else default_line
        if line is None:
            raise ResponseParseError(
                f"Issue at index {index} has no line number", raw_text=text, provider=provider
            )

        issues.append(
            Issue(
                line=line,
                severity=Severity.parse(payload.severity or Severity.SUGGESTION.value),
                category=Category.parse(payload.category or Category.READABILITY.value),
                title=payload.title if payload.title is not None else default_title,
                description=payload.description or "",
                suggestion=payload.suggestion or "",
                fixed_code=payload.fixed_code or "",
            )
        )

    return issues


class BaseReviewClient(ABC):
    """Template for a single-backend review client.

    Subclasses set the class attributes and implement
    :meth:`build_request` and :meth:`extract_text`.

    An injected ``http_client`` is used as-is and left open; otherwise a
    client is created and closed for every review.
    """

    provider: ClassVar[Provider]
    default_line: ClassVar[int | None] = 1
    default_title: ClassVar[str] = NO_TITLE

    def __init__(
        self,
        api_key: str,
        timeout: float,
        http_client: httpx.Client | None = None,
    ) -> None:
        if not api_key or not api_key.strip():
            raise ConfigurationError(f"{self.provider.label} API key is not configured")
        self._api_key = api_key.strip()
        self._timeout = httpx.Timeout(timeout)
        self._http_client = http_client

    @property
    def name(self) -> str:
        """Return the backend identifier."""
        return self.provider.value

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Return the model identifier being used."""

    @abstractmethod
    def build_request(self, prompt: str) -> WireRequest:
        """Wrap ``prompt`` in the backend's request envelope."""

    @abstractmethod
    def extract_text(self, envelope: dict[str, Any]) -> str:
        """Locate the generated text inside the response envelope.

        Raises:
            MalformedResponseError: If the expected shape is absent.
        """

    def review(self, request: ReviewRequest) -> ReviewResult:
        """Perform one complete review round trip."""
        prompt = build_prompt(request)
        wire = self.build_request(prompt)

        log.info(
            LogEventNames.LLM_REQUEST_START,
            provider=self.name,
            model=self.model_name,
            file_path=request.file_path,
            prompt_chars=len(prompt),
        )

        response = self._post(wire)
        envelope = self._decode_envelope(response.text)
        text = strip_markdown_fences(self._require_text(self.extract_text(envelope)))
        issues = parse_issues(
            text,
            default_line=self.default_line,
            default_title=self.default_title,
            provider=self.name,
        )

        log.info(
            LogEventNames.LLM_REQUEST_COMPLETE,
            provider=self.name,
            file_path=request.file_path,
            issue_count=len(issues),
        )

        return ReviewResult(
            file_path=request.file_path,
            issues=tuple(issues),
            provider=self.provider.label,
        )

    def _post(self, wire: WireRequest) -> httpx.Response:
        """Send ``wire`` and return the response if its status is 200."""
        if self._http_client is not None:
            response = self._send(self._http_client, wire)
        else:
            with httpx.Client() as client:
                response = self._send(client, wire)

        if response.status_code != 200:
            log.error(
                LogEventNames.LLM_REQUEST_ERROR,
                provider=self.name,
                status_code=response.status_code,
                body_preview=response.text[:500],
            )
            raise HttpError(response.status_code, response.text, provider=self.name)

        return response

    def _send(self, client: httpx.Client, wire: WireRequest) -> httpx.Response:
        body = json.dumps(wire.payload).encode("utf-8")
        headers = {"Content-Type": "application/json", **wire.headers}
        try:
            return client.post(
                wire.url,
                params=wire.params or None,
                headers=headers,
                content=body,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as e:
            log.error(LogEventNames.LLM_REQUEST_ERROR, provider=self.name, error="timeout")
            raise ProviderTransportError(
                f"{self.provider.label} request timed out: {e}", provider=self.name
            ) from e
        except httpx.TransportError as e:
            log.error(LogEventNames.LLM_REQUEST_ERROR, provider=self.name, error=str(e))
            raise ProviderTransportError(
                f"{self.provider.label} connection failed: {e}", provider=self.name
            ) from e

    def _decode_envelope(self, body: str) -> dict[str, Any]:
        try:
            envelope = json.loads(body)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(
                f"Failed to parse {self.provider.label} response: {e}", provider=self.name
            ) from e

        if not isinstance(envelope, dict):
            raise MalformedResponseError(
                f"{self.provider.label} response is not a JSON object", provider=self.name
            )

        error = envelope.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else None
            raise ProviderReportedError(
                f"{self.provider.label} error: {message or json.dumps(error)}",
                provider=self.name,
            )

        return envelope

    def _require_text(self, text: Any) -> str:
        if not isinstance(text, str):
            raise MalformedResponseError(
                f"{self.provider.label} response text is not a string", provider=self.name
            )
        return text

    def _malformed(self, detail: str) -> MalformedResponseError:
        return MalformedResponseError(f"{detail} in {self.provider.label} response", self.name)
