"""Concrete implementations of provider interfaces."""

from .llm.claude import ClaudeReviewClient
from .llm.gemini import GeminiReviewClient
from .llm.groq import GroqReviewClient

__all__ = [
    "ClaudeReviewClient",
    "GeminiReviewClient",
    "GroqReviewClient",
]
