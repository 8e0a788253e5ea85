"""Protocol definitions for pluggable adapters."""

from .llm import ReviewProvider

__all__ = ["ReviewProvider"]
