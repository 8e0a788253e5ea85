"""Core business logic components.

- ReviewOrchestrator: single entry point for a review
- ProviderSelector: picks the backend from credentials and preference
- ResultStore: latest result per file with asynchronous change notification
"""

from ai_code_reviewer.core.orchestrator import NOT_CONFIGURED_MESSAGE, ReviewOrchestrator
from ai_code_reviewer.core.result_store import ChangeKind, ResultStore, StoreChange
from ai_code_reviewer.core.selector import ProviderSelector, select_provider

__all__ = [
    "NOT_CONFIGURED_MESSAGE",
    "ChangeKind",
    "ProviderSelector",
    "ResultStore",
    "ReviewOrchestrator",
    "StoreChange",
    "select_provider",
]
