"""LLM review backends."""

from .base import BaseReviewClient, IssuePayload, WireRequest, parse_issues, strip_markdown_fences
from .claude import ClaudeReviewClient
from .gemini import GeminiReviewClient
from .groq import GroqReviewClient
from .prompt import build_prompt, category_instructions
from .registry import create_review_client, register_client, registered_providers

__all__ = [
    "BaseReviewClient",
    "ClaudeReviewClient",
    "GeminiReviewClient",
    "GroqReviewClient",
    "IssuePayload",
    "WireRequest",
    "build_prompt",
    "category_instructions",
    "create_review_client",
    "parse_issues",
    "register_client",
    "registered_providers",
    "strip_markdown_fences",
]
