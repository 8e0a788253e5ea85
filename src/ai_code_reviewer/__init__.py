"""AI Code Reviewer: LLM-backed code quality review for source files."""

from ai_code_reviewer.core import ResultStore, ReviewOrchestrator
from ai_code_reviewer.models import Category, Issue, ReviewRequest, ReviewResult, Severity

__all__ = [
    "Category",
    "Issue",
    "ResultStore",
    "ReviewOrchestrator",
    "ReviewRequest",
    "ReviewResult",
    "Severity",
]
