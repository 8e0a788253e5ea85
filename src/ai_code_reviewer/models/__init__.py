"""Data models and transfer objects."""

from .provider import FALLBACK_ORDER, Provider, ProviderCredentials, ProviderPreference
from .review import (
    ALL_CATEGORIES,
    Category,
    Issue,
    ReviewRequest,
    ReviewResult,
    Severity,
    categories_from_names,
)

__all__ = [
    # Review models
    "ALL_CATEGORIES",
    "Category",
    "Issue",
    "ReviewRequest",
    "ReviewResult",
    "Severity",
    "categories_from_names",
    # Provider models
    "FALLBACK_ORDER",
    "Provider",
    "ProviderCredentials",
    "ProviderPreference",
]
