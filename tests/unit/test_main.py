"""Tests for the command line entry point."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from ai_code_reviewer import core
from ai_code_reviewer.__main__ import format_report, main, parse_args, read_source
from ai_code_reviewer.core import ReviewOrchestrator
from ai_code_reviewer.models.review import Category, Issue, ReviewResult, Severity
from ai_code_reviewer.utils.errors import FileTooLargeError


def groq_reply(text: str) -> dict[str, Any]:
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


@pytest.fixture
def wired(monkeypatch: pytest.MonkeyPatch, backend: Any) -> Any:
    """Route every orchestrator the CLI builds through the mock backend."""

    class WiredOrchestrator(ReviewOrchestrator):
        def __init__(self, settings: Any) -> None:
            super().__init__(settings, http_client=backend.client)

    monkeypatch.setattr(core, "ReviewOrchestrator", WiredOrchestrator)
    monkeypatch.setenv("AI_CODE_REVIEWER_GROQ_API_KEY", "gsk_test")
    return backend


@pytest.fixture
def java_file(tmp_path: Path, sample_source: str) -> Path:
    """A Java source file on disk."""
    path = tmp_path / "Greeter.java"
    path.write_text(sample_source)
    return path


class TestParseArgs:
    """Test argument parsing."""

    def test_defaults(self) -> None:
        """Test the defaults for a bare invocation."""
        args = parse_args(["Main.java"])
        assert args.files == [Path("Main.java")]
        assert args.config is None
        assert args.provider is None
        assert args.output == "text"
        assert args.format == "console"
        assert not args.dry_run

    def test_provider_case_insensitive(self) -> None:
        """Test that --provider accepts any case."""
        assert parse_args(["--provider", "Gemini"]).provider == "gemini"

    def test_only_categories(self) -> None:
        """Test collecting several categories."""
        args = parse_args(["--only", "bug", "naming", "--", "A.java"])
        assert args.only == ["bug", "naming"]
        assert args.files == [Path("A.java")]


class TestReadSource:
    """Test the file size check."""

    def test_within_limit(self, java_file: Path, sample_source: str) -> None:
        """Test that small files are read whole."""
        assert read_source(java_file, 1024) == sample_source

    def test_over_limit(self, tmp_path: Path) -> None:
        """Test that large files are refused before any review."""
        path = tmp_path / "Big.java"
        path.write_text("x" * 3000)

        with pytest.raises(FileTooLargeError) as exc_info:
            read_source(path, 1024)

        assert exc_info.value.size_bytes == 3000
        assert str(exc_info.value).startswith("File too large (2KB). Max: 1KB.")


class TestFormatReport:
    """Test the plain-text report."""

    def test_clean_file(self) -> None:
        """Test the report for a file with no issues."""
        report = format_report(ReviewResult(file_path="A.java", provider="Google Gemini"))
        assert report.splitlines() == [
            "A.java (Google Gemini)",
            "[!!] 0 Critical  [!] 0 Warnings  [i] 0 Suggestions",
            "No issues found.",
        ]

    def test_grouped_issues(self) -> None:
        """Test grouping, details and fixed code."""
        result = ReviewResult(
            file_path="A.java",
            issues=(
                Issue(5, Severity.SUGGESTION, Category.READABILITY, "Magic number"),
                Issue(
                    2,
                    Severity.CRITICAL,
                    Category.BUG,
                    "Unclosed stream",
                    description="FileInputStream is never closed",
                    suggestion="Use try-with-resources",
                    fixed_code="try (var in = new FileInputStream(f)) {",
                ),
            ),
        )

        report = format_report(result)

        assert report.index("[Bug] (1)") < report.index("[Readability] (1)")
        assert "  [!!] [Bug] Line 2: Unclosed stream" in report
        assert "      Suggestion: Use try-with-resources" in report
        assert "        try (var in = new FileInputStream(f)) {" in report


class TestMain:
    """Test full CLI runs against a mock backend."""

    def test_text_report(
        self, wired: Any, java_file: Path, issues_json: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test a successful review printed as text."""
        wired.respond(groq_reply(issues_json))

        assert main([str(java_file)]) == 0

        out = capsys.readouterr().out
        assert "[!!] 1 Critical  [!] 1 Warnings  [i] 0 Suggestions" in out
        assert "[!!] [Bug] Line 5: Possible NPE on who" in out
        assert "[!] [Spell Check] Line 2: nmae -> name" in out

    def test_json_output(
        self, wired: Any, java_file: Path, issues_json: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that --output json prints parseable results."""
        wired.respond(groq_reply(issues_json))

        assert main(["--output", "json", str(java_file)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data[0]["file_path"] == str(java_file)
        assert data[0]["provider"] == "Groq (FREE - Llama 3.3)"
        assert data[0]["issues"][0]["severity"] == "CRITICAL"

    def test_only_limits_prompt(self, wired: Any, java_file: Path) -> None:
        """Test that --only narrows the categories sent to the model."""
        wired.respond(groq_reply("[]"))

        assert main(["--only", "BUG", "--", str(java_file)]) == 0

        prompt = wired.last_json["messages"][0]["content"]
        assert "- BUG:" in prompt
        assert "- JAVADOC:" not in prompt

    def test_unknown_category(self, wired: Any, java_file: Path) -> None:
        """Test that an unknown --only value fails before any request."""
        assert main(["--only", "STYLE", "--", str(java_file)]) == 1
        assert wired.requests == []

    def test_file_too_large(
        self, wired: Any, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that the size limit from settings is enforced."""
        config = tmp_path / "settings.yaml"
        config.write_text("max_file_size_kb: 1\n")
        big = tmp_path / "Big.java"
        big.write_text("// x\n" * 1000)

        assert main(["-c", str(config), str(big)]) == 1

        assert "File too large" in capsys.readouterr().err
        assert wired.requests == []

    def test_http_error(
        self, wired: Any, java_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that a backend failure is reported and fails the run."""
        wired.respond('{"error": {"message": "Invalid API Key"}}', status_code=401)

        assert main([str(java_file)]) == 1

        assert "Groq API error 401" in capsys.readouterr().err

    def test_not_configured(
        self,
        monkeypatch: pytest.MonkeyPatch,
        wired: Any,
        java_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test the guidance printed when no key is set."""
        monkeypatch.delenv("AI_CODE_REVIEWER_GROQ_API_KEY")

        assert main([str(java_file)]) == 1

        assert "No API key configured" in capsys.readouterr().err

    def test_missing_source_file(self, wired: Any, tmp_path: Path) -> None:
        """Test that an unreadable file fails the run."""
        assert main([str(tmp_path / "Missing.java")]) == 1
        assert wired.requests == []

    def test_non_utf8_file_is_reported(
        self,
        wired: Any,
        tmp_path: Path,
        java_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test that a Latin-1 file fails alone and the others still print."""
        wired.respond(groq_reply("[]"))
        legacy = tmp_path / "Latin1.java"
        legacy.write_bytes(b"// caf\xe9\nclass Latin1 {}\n")

        assert main([str(legacy), str(java_file)]) == 1

        captured = capsys.readouterr()
        assert f"{legacy}:" in captured.err
        assert f"{java_file} (Groq (FREE - Llama 3.3))" in captured.out
        assert len(wired.requests) == 1

    def test_missing_config(self, wired: Any, tmp_path: Path) -> None:
        """Test that a missing settings file is an error."""
        assert main(["-c", str(tmp_path / "nope.yaml"), "A.java"]) == 1

    def test_no_files(self, wired: Any) -> None:
        """Test that a review needs at least one file."""
        assert main([]) == 1

    def test_dry_run(
        self,
        monkeypatch: pytest.MonkeyPatch,
        wired: Any,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Test that --dry-run reports the provider without a request."""
        monkeypatch.setenv("AI_CODE_REVIEWER_CLAUDE_API_KEY", "sk-ant-test")

        assert main(["--dry-run", "--provider", "claude"]) == 0

        assert capsys.readouterr().out.strip() == "Provider: Anthropic Claude"
        assert wired.requests == []
