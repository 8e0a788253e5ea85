"""In-memory store of the latest review result per file.

The store is an explicit service object: construct one per process and
hand it to whatever needs it (CLI, editor integration, report writers).

Writes are last-writer-wins per file path and safe from any thread.
Listeners are never called inline with a write. Every mutation queues a
notification on a single worker thread, so listeners see changes in the
order they happened and a slow listener never blocks a writer.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import StrEnum
from types import TracebackType

import structlog

from ..models.review import ReviewResult
from ..utils.logging import LogEventNames

log = structlog.get_logger()


class ChangeKind(StrEnum):
    """What happened to the store."""

    STORED = "stored"
    CLEARED = "cleared"
    CLEARED_ALL = "cleared_all"


@dataclass(frozen=True)
class StoreChange:
    """Notification payload delivered to listeners."""

    kind: ChangeKind
    file_path: str | None = None  # None for CLEARED_ALL


ChangeListener = Callable[[StoreChange], None]


class ResultStore:
    """Thread-safe map of file path to latest :class:`ReviewResult`.

    Example:
        with ResultStore() as store:
            store.add_listener(lambda change: print(change.kind, change.file_path))
            store.store(result)
            store.flush()
    """

    def __init__(self) -> None:
        self._results: dict[str, ReviewResult] = {}
        self._listeners: list[ChangeListener] = []
        self._lock = threading.Lock()
        self._worker_ident: int | None = None
        self._executor = ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="result-store",
            initializer=self._remember_worker,
        )
        self._closed = False

    def store(self, result: ReviewResult) -> None:
        """Save ``result`` as the latest for its file, replacing any older one."""
        with self._lock:
            self._results[result.file_path] = result
            self._notify(StoreChange(ChangeKind.STORED, result.file_path))
        log.debug(LogEventNames.RESULT_STORED, file_path=result.file_path)

    def get(self, file_path: str) -> ReviewResult | None:
        with self._lock:
            return self._results.get(file_path)

    def has_results(self, file_path: str) -> bool:
        with self._lock:
            return file_path in self._results

    def all_results(self) -> list[ReviewResult]:
        """Snapshot of every stored result."""
        with self._lock:
            return list(self._results.values())

    def clear(self, file_path: str) -> None:
        """Forget the result for one file."""
        with self._lock:
            self._results.pop(file_path, None)
            self._notify(StoreChange(ChangeKind.CLEARED, file_path))
        log.debug(LogEventNames.RESULT_CLEARED, file_path=file_path)

    def clear_all(self) -> None:
        with self._lock:
            self._results.clear()
            self._notify(StoreChange(ChangeKind.CLEARED_ALL))
        log.debug(LogEventNames.RESULT_CLEARED, file_path=None)

    def add_listener(self, listener: ChangeListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def flush(self, timeout: float | None = None) -> None:
        """Block until every notification queued so far has been delivered.

        Called from a listener this returns at once: the listener runs on
        the delivery thread, so waiting there would never finish.
        """
        if self._on_worker():
            return
        with self._lock:
            if self._closed:
                return
            marker = self._executor.submit(lambda: None)
        marker.result(timeout=timeout)

    def close(self) -> None:
        """Deliver pending notifications and stop the worker thread.

        From a listener, queued notifications are still delivered but the
        call does not wait for them.
        """
        with self._lock:
            self._closed = True
        self._executor.shutdown(wait=not self._on_worker())

    def __enter__(self) -> ResultStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def _remember_worker(self) -> None:
        self._worker_ident = threading.get_ident()

    def _on_worker(self) -> bool:
        return threading.get_ident() == self._worker_ident

    def _notify(self, change: StoreChange) -> Future[None] | None:
        # Caller holds the lock, so queue order matches write order
        if self._closed:
            return None
        return self._executor.submit(self._deliver, list(self._listeners), change)

    @staticmethod
    def _deliver(listeners: list[ChangeListener], change: StoreChange) -> None:
        for listener in listeners:
            try:
                listener(change)
            except Exception as e:
                # Remaining listeners still get the change
                log.error(
                    LogEventNames.LISTENER_ERROR,
                    change=change.kind.value,
                    file_path=change.file_path,
                    error=str(e),
                )
