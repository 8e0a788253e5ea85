"""Command line entry point for the AI Code Reviewer.

This module provides the ``ai-code-reviewer`` command. It handles:
- Settings loading (YAML file and/or environment)
- Logging setup with secret sanitization
- File size checks before anything is sent to a backend
- Running one review per file and printing the report
"""

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from ai_code_reviewer._version import __version__

if TYPE_CHECKING:
    from ai_code_reviewer.models.review import ReviewResult

log = structlog.get_logger()


def setup_logging(
    debug: bool = False,
    log_format: str = "console",
    file_path: Path | None = None,
    file_enabled: bool = False,
) -> None:
    """Configure structured logging with secret sanitization.

    Args:
        debug: Enable debug logging if True
        log_format: Output format ("json" or "console")
        file_path: Path to log file (if file logging enabled)
        file_enabled: Whether to enable file logging
    """
    from ai_code_reviewer.utils.logging import LogFormat, LogLevel, configure_logging

    level = LogLevel.DEBUG if debug else LogLevel.INFO

    configure_logging(
        level=level,
        log_format=LogFormat(log_format.lower()),
        file_path=file_path,
        file_enabled=file_enabled,
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Arguments to parse. Defaults to ``sys.argv[1:]``.

    Returns:
        Parsed argument namespace
    """
    parser = argparse.ArgumentParser(
        prog="ai-code-reviewer",
        description="AI Code Reviewer - LLM-backed review of Java source files",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "files",
        nargs="*",
        type=Path,
        metavar="FILE",
        help="Source files to review",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to YAML settings file (default: environment variables only)",
    )

    parser.add_argument(
        "-p",
        "--provider",
        choices=["auto", "groq", "gemini", "claude"],
        type=str.lower,
        default=None,
        help="Override the provider preference from settings",
    )

    parser.add_argument(
        "--only",
        nargs="+",
        metavar="CATEGORY",
        default=None,
        help="Check only these categories (BUG, SPELL_CHECK, NAMING, READABILITY, JAVADOC)",
    )

    parser.add_argument(
        "-o",
        "--output",
        choices=["text", "json"],
        default="text",
        help="Report format on stdout (default: text)",
    )

    parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Load settings and show the selected provider without reviewing",
    )

    parser.add_argument(
        "--format",
        choices=["json", "console"],
        default="console",
        help="Log output format (default: console)",
    )

    return parser.parse_args(argv)


def read_source(path: Path, limit_bytes: int) -> str:
    """Read a source file, refusing files over the size limit.

    Raises:
        FileTooLargeError: If the file is larger than ``limit_bytes``.
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
    """
    from ai_code_reviewer.utils.errors import FileTooLargeError
    from ai_code_reviewer.utils.logging import LogEventNames

    size = path.stat().st_size
    if size > limit_bytes:
        log.warning(
            LogEventNames.REVIEW_REJECTED,
            file_path=str(path),
            size_bytes=size,
            limit_bytes=limit_bytes,
        )
        raise FileTooLargeError(str(path), size, limit_bytes)

    return path.read_text(encoding="utf-8")


def format_report(result: "ReviewResult") -> str:
    """Render one result as a plain-text report grouped by category."""
    lines = [f"{result.file_path} ({result.provider or 'unknown provider'})", result.summary]

    if result.is_empty:
        lines.append("No issues found.")
        return "\n".join(lines)

    for category, issues in result.grouped_by_category().items():
        lines.append("")
        lines.append(f"{category.label} ({len(issues)})")
        for issue in issues:
            lines.append(f"  {issue}")
            if issue.description:
                lines.append(f"      {issue.description}")
            if issue.suggestion:
                lines.append(f"      Suggestion: {issue.suggestion}")
            if issue.has_fixed_code:
                lines.append("      Fixed code:")
                lines.extend(f"        {code}" for code in issue.fixed_code.splitlines())

    return "\n".join(lines)


def run_review(args: argparse.Namespace) -> int:
    """Review every file named on the command line.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 if every file was reviewed, 1 otherwise)
    """
    from ai_code_reviewer.config.loader import load_settings
    from ai_code_reviewer.core import ResultStore, ReviewOrchestrator
    from ai_code_reviewer.models.provider import Provider, ProviderPreference
    from ai_code_reviewer.models.review import categories_from_names
    from ai_code_reviewer.utils.errors import ConfigurationError, ReviewError
    from ai_code_reviewer.utils.logging import configure_logging

    log.info("starting_ai_code_reviewer", version=__version__, files=len(args.files))

    try:
        settings = load_settings(args.config)
        categories = categories_from_names(args.only) if args.only else None
    except FileNotFoundError as e:
        log.error("settings_file_not_found", path=str(args.config), error=str(e))
        return 1
    except ValueError as e:
        log.error("settings_invalid", error=str(e))
        return 1

    if args.provider:
        settings = settings.model_copy(
            update={"provider": ProviderPreference(args.provider.upper())}
        )

    # Reconfigure logging from settings; --debug still wins
    configure_logging(
        level="DEBUG" if args.debug else settings.logging.level,
        log_format=args.format,
        file_path=settings.logging.file.path,
        file_enabled=settings.logging.file.enabled,
    )

    orchestrator = ReviewOrchestrator(settings)

    if args.dry_run:
        print(f"Provider: {orchestrator.provider_label}")
        return 0 if orchestrator.provider is not Provider.NONE else 1

    if not args.files:
        log.error("no_files_given")
        return 1

    failed = 0
    with ResultStore() as store:
        for path in args.files:
            try:
                source = read_source(path, settings.max_file_size_bytes)
                result = orchestrator.review(source, str(path), categories)
            except ConfigurationError as e:
                # No provider: every other file would fail the same way
                print(str(e), file=sys.stderr)
                return 1
            except ReviewError as e:
                print(f"{path}: {e}", file=sys.stderr)
                failed += 1
                continue
            except (OSError, UnicodeDecodeError) as e:
                log.error("source_file_unreadable", file_path=str(path), error=str(e))
                print(f"{path}: {e}", file=sys.stderr)
                failed += 1
                continue
            store.store(result)

        results = store.all_results()

    if args.output == "json":
        print(json.dumps([r.to_dict() for r in results], indent=2))
    else:
        print("\n\n".join(format_report(r) for r in results))

    return 1 if failed else 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Setup logging with CLI options
    setup_logging(
        debug=args.debug,
        log_format=args.format,
    )

    try:
        return run_review(args)
    except KeyboardInterrupt:
        log.info("interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
