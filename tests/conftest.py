"""Shared test fixtures for AI Code Reviewer."""

from __future__ import annotations

import json
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import httpx
import pytest

from ai_code_reviewer.config.schema import ReviewSettings
from ai_code_reviewer.models.review import ReviewRequest

SAMPLE_JAVA = """public class Greeter {
    private String nmae;

    public String greet(String who) {
        return "Hello, " + who.trim();
    }
}
"""


class MockBackend:
    """Records every request and answers with a canned response.

    Wraps :class:`httpx.MockTransport` so client tests can inspect the exact
    wire request without any network access.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body = ""
        self.error: type[httpx.TransportError] | None = None
        self.client = httpx.Client(transport=httpx.MockTransport(self._handle))

    def respond(self, body: Any, status_code: int = 200) -> None:
        """Set the next response. Non-string bodies are sent as JSON."""
        self.body = body if isinstance(body, str) else json.dumps(body)
        self.status_code = status_code

    def fail_with(self, error: type[httpx.TransportError]) -> None:
        """Make the transport raise ``error`` instead of answering."""
        self.error = error

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_json(self) -> Any:
        return json.loads(self.last_request.content)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error("simulated failure", request=request)
        return httpx.Response(self.status_code, text=self.body)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep real keys and ``.env`` files out of every test."""
    for name in list(os.environ):
        if name.startswith("AI_CODE_REVIEWER_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def backend() -> Iterator[MockBackend]:
    """A mock HTTP backend with a client bound to it."""
    mock = MockBackend()
    yield mock
    mock.client.close()


@pytest.fixture
def sample_source() -> str:
    """A small Java class with a typo and an unguarded dereference."""
    return SAMPLE_JAVA


@pytest.fixture
def review_request(sample_source: str) -> ReviewRequest:
    """A review request with every category enabled."""
    return ReviewRequest(source_text=sample_source, file_path="src/Greeter.java")


@pytest.fixture
def issues_json() -> str:
    """Model output describing two issues, wrapped in a json fence."""
    issues = [
        {
            "line": 5,
            "severity": "critical",
            "category": "bug",
            "title": "Possible NPE on who",
            "description": "who may be null",
            "suggestion": "Check for null first",
            "fixedCode": 'return "Hello, " + (who == null ? "" : who.trim());',
        },
        {
            "line": 2,
            "severity": "WARNING",
            "category": "SPELL_CHECK",
            "title": "nmae -> name",
            "description": "Field name is misspelled",
            "suggestion": "Rename to name",
            "fixedCode": "",
        },
    ]
    return f"```json\n{json.dumps(issues, indent=2)}\n```"


@pytest.fixture
def settings_factory() -> Any:
    """Build settings without reading the environment or a ``.env`` file."""

    def factory(**overrides: Any) -> ReviewSettings:
        return ReviewSettings(_env_file=None, **overrides)

    return factory
