"""Data models for review requests, issues and results."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class Severity(Enum):
    """Display priority of an issue."""

    CRITICAL = "CRITICAL"
    WARNING = "WARNING"
    SUGGESTION = "SUGGESTION"

    @property
    def icon(self) -> str:
        """Short textual marker used in reports."""
        return _SEVERITY_ICONS[self]

    @classmethod
    def parse(cls, value: str) -> "Severity":
        """Case-insensitive lookup; anything unknown is a suggestion."""
        upper = value.upper()
        if upper in ("CRITICAL", "WARNING"):
            return cls(upper)
        return cls.SUGGESTION


_SEVERITY_ICONS = {
    Severity.CRITICAL: "[!!]",
    Severity.WARNING: "[!]",
    Severity.SUGGESTION: "[i]",
}


class Category(Enum):
    """Review dimension. Declaration order is the prompt order."""

    BUG = "BUG"
    SPELL_CHECK = "SPELL_CHECK"
    NAMING = "NAMING"
    READABILITY = "READABILITY"
    JAVADOC = "JAVADOC"

    @property
    def label(self) -> str:
        """Human-readable label, e.g. ``[Spell Check]``."""
        return _CATEGORY_LABELS[self]

    @classmethod
    def parse(cls, value: str) -> "Category":
        """Case-insensitive lookup; anything unknown is readability."""
        upper = value.upper()
        if upper in ("BUG", "SPELL_CHECK", "NAMING", "JAVADOC"):
            return cls(upper)
        return cls.READABILITY


_CATEGORY_LABELS = {
    Category.BUG: "[Bug]",
    Category.SPELL_CHECK: "[Spell Check]",
    Category.NAMING: "[Naming]",
    Category.READABILITY: "[Readability]",
    Category.JAVADOC: "[Javadoc]",
}

ALL_CATEGORIES: frozenset[Category] = frozenset(Category)


@dataclass(frozen=True)
class ReviewRequest:
    """One review invocation: the file text and the categories to check."""

    source_text: str
    file_path: str
    enabled_categories: frozenset[Category] = ALL_CATEGORIES

    def __post_init__(self) -> None:
        # Accept any iterable of categories but always store a frozenset
        if not isinstance(self.enabled_categories, frozenset):
            object.__setattr__(self, "enabled_categories", frozenset(self.enabled_categories))

    @property
    def ordered_categories(self) -> tuple[Category, ...]:
        """Enabled categories in declaration order."""
        return tuple(c for c in Category if c in self.enabled_categories)


@dataclass(frozen=True)
class Issue:
    """A single finding reported against a line of the reviewed file.

    ``line`` is 1-based and is never checked against the file length;
    consumers must tolerate out-of-range values.
    """

    line: int
    severity: Severity
    category: Category
    title: str
    description: str = ""
    suggestion: str = ""
    fixed_code: str = ""  # Empty means absent

    @property
    def has_fixed_code(self) -> bool:
        """True when the model supplied a non-blank replacement snippet."""
        return bool(self.fixed_code and self.fixed_code.strip())

    @property
    def severity_icon(self) -> str:
        return self.severity.icon

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the same field names the model is asked to emit."""
        return {
            "line": self.line,
            "severity": self.severity.value,
            "category": self.category.value,
            "title": self.title,
            "description": self.description,
            "suggestion": self.suggestion,
            "fixedCode": self.fixed_code,
        }

    def __str__(self) -> str:
        return f"{self.severity.icon} {self.category.label} Line {self.line}: {self.title}"


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class ReviewResult:
    """All issues found in one file by one review.

    Issues keep the order the model returned them in. Counts and groupings
    are computed on demand; use :func:`dataclasses.replace` to derive an
    updated result.
    """

    file_path: str
    issues: tuple[Issue, ...] = ()
    reviewed_at: datetime = field(default_factory=_utcnow)
    provider: str | None = None  # Label of the backend that answered

    def __post_init__(self) -> None:
        if not isinstance(self.issues, tuple):
            object.__setattr__(self, "issues", tuple(self.issues))

    @property
    def critical_count(self) -> int:
        return self._count(Severity.CRITICAL)

    @property
    def warning_count(self) -> int:
        return self._count(Severity.WARNING)

    @property
    def suggestion_count(self) -> int:
        return self._count(Severity.SUGGESTION)

    @property
    def is_empty(self) -> bool:
        return not self.issues

    @property
    def summary(self) -> str:
        """One-line count summary for status bars and report headers."""
        return (
            f"[!!] {self.critical_count} Critical  "
            f"[!] {self.warning_count} Warnings  "
            f"[i] {self.suggestion_count} Suggestions"
        )

    def _count(self, severity: Severity) -> int:
        return sum(1 for issue in self.issues if issue.severity is severity)

    def issues_by_category(self, category: Category) -> list[Issue]:
        """Issues of one category, in model order."""
        return [issue for issue in self.issues if issue.category is category]

    def issues_for_line(self, line: int) -> list[Issue]:
        """Issues reported against ``line``."""
        return [issue for issue in self.issues if issue.line == line]

    def grouped_by_category(self) -> dict[Category, list[Issue]]:
        """Non-empty category groups in category declaration order."""
        groups: dict[Category, list[Issue]] = {}
        for category in Category:
            matching = self.issues_by_category(category)
            if matching:
                groups[category] = matching
        return groups

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "file_path": self.file_path,
            "provider": self.provider,
            "reviewed_at": self.reviewed_at.isoformat(),
            "summary": {
                "critical": self.critical_count,
                "warning": self.warning_count,
                "suggestion": self.suggestion_count,
            },
            "issues": [issue.to_dict() for issue in self.issues],
        }


def categories_from_names(names: Iterable[str]) -> frozenset[Category]:
    """Resolve exact category names (case-insensitive) into a set.

    Unlike :meth:`Category.parse` this does not fall back: an unknown name
    is a caller error.

    Raises:
        ValueError: If a name is not a category.
    """
    result = set()
    for name in names:
        try:
            result.add(Category(name.upper()))
        except ValueError:
            valid = ", ".join(c.value for c in Category)
            raise ValueError(f"Unknown category {name!r}. Expected one of: {valid}") from None
    return frozenset(result)
