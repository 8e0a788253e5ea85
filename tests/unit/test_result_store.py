"""Tests for the in-memory result store."""

from __future__ import annotations

import threading
from collections.abc import Iterator

import pytest

from ai_code_reviewer.core.result_store import ChangeKind, ResultStore, StoreChange
from ai_code_reviewer.models.review import Category, Issue, ReviewResult, Severity


def make_result(file_path: str, *lines: int) -> ReviewResult:
    issues = tuple(
        Issue(line=n, severity=Severity.WARNING, category=Category.NAMING, title=f"issue {n}")
        for n in lines
    )
    return ReviewResult(file_path=file_path, issues=issues)


@pytest.fixture
def store() -> Iterator[ResultStore]:
    """A store that is closed after the test."""
    with ResultStore() as result_store:
        yield result_store


class TestResultStoreData:
    """Test storing and clearing results."""

    def test_store_and_get(self, store: ResultStore) -> None:
        """Test that a stored result can be read back."""
        result = make_result("A.java", 1)
        store.store(result)

        assert store.get("A.java") is result
        assert store.has_results("A.java")

    def test_missing_file(self, store: ResultStore) -> None:
        """Test lookups for a file never reviewed."""
        assert store.get("Nope.java") is None
        assert not store.has_results("Nope.java")

    def test_last_writer_wins(self, store: ResultStore) -> None:
        """Test that a newer result replaces the older one."""
        store.store(make_result("A.java", 1, 2))
        newer = make_result("A.java", 5)
        store.store(newer)

        assert store.get("A.java") is newer
        assert len(store.all_results()) == 1

    def test_clear_one(self, store: ResultStore) -> None:
        """Test forgetting a single file."""
        store.store(make_result("A.java"))
        store.store(make_result("B.java"))

        store.clear("A.java")

        assert not store.has_results("A.java")
        assert store.has_results("B.java")

    def test_clear_unknown_is_noop(self, store: ResultStore) -> None:
        """Test clearing a file that has no result."""
        store.clear("Nope.java")
        assert store.all_results() == []

    def test_clear_all(self, store: ResultStore) -> None:
        """Test forgetting every file."""
        store.store(make_result("A.java"))
        store.store(make_result("B.java"))

        store.clear_all()

        assert store.all_results() == []

    def test_all_results_is_snapshot(self, store: ResultStore) -> None:
        """Test that the returned list is detached from the store."""
        store.store(make_result("A.java"))
        snapshot = store.all_results()
        store.clear_all()
        assert len(snapshot) == 1

    def test_concurrent_writers(self, store: ResultStore) -> None:
        """Test that parallel writes to distinct files all land."""

        def write(index: int) -> None:
            store.store(make_result(f"File{index}.java", index))

        threads = [threading.Thread(target=write, args=(i,)) for i in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(store.all_results()) == 20


class TestResultStoreNotifications:
    """Test change notification delivery."""

    def test_listener_receives_changes_in_order(self, store: ResultStore) -> None:
        """Test that every mutation is announced in write order."""
        seen: list[StoreChange] = []
        store.add_listener(seen.append)

        store.store(make_result("A.java"))
        store.clear("A.java")
        store.clear_all()
        store.flush(timeout=5)

        assert seen == [
            StoreChange(ChangeKind.STORED, "A.java"),
            StoreChange(ChangeKind.CLEARED, "A.java"),
            StoreChange(ChangeKind.CLEARED_ALL, None),
        ]

    def test_listener_not_called_on_writer_thread(self, store: ResultStore) -> None:
        """Test that delivery happens off the calling thread."""
        threads: list[threading.Thread] = []
        store.add_listener(lambda change: threads.append(threading.current_thread()))

        store.store(make_result("A.java"))
        store.flush(timeout=5)

        assert threads and threads[0] is not threading.current_thread()

    def test_slow_listener_does_not_block_writer(self, store: ResultStore) -> None:
        """Test that a write returns while a listener is still running."""
        release = threading.Event()
        store.add_listener(lambda change: release.wait(timeout=5))

        store.store(make_result("A.java"))

        assert store.has_results("A.java")
        release.set()
        store.flush(timeout=5)

    def test_failing_listener_does_not_stop_others(self, store: ResultStore) -> None:
        """Test that one listener raising does not affect the rest."""
        seen: list[StoreChange] = []

        def broken(change: StoreChange) -> None:
            raise RuntimeError("listener bug")

        store.add_listener(broken)
        store.add_listener(seen.append)

        store.store(make_result("A.java"))
        store.flush(timeout=5)

        assert seen == [StoreChange(ChangeKind.STORED, "A.java")]
        assert store.has_results("A.java")

    def test_remove_listener(self, store: ResultStore) -> None:
        """Test that removed listeners get nothing further."""
        seen: list[StoreChange] = []
        store.add_listener(seen.append)
        store.store(make_result("A.java"))
        store.flush(timeout=5)

        store.remove_listener(seen.append)
        store.store(make_result("B.java"))
        store.flush(timeout=5)

        assert len(seen) == 1

    def test_remove_unknown_listener_is_noop(self, store: ResultStore) -> None:
        """Test removing a listener that was never added."""
        store.remove_listener(lambda change: None)

    def test_close_delivers_pending(self) -> None:
        """Test that closing waits for queued notifications."""
        seen: list[StoreChange] = []
        store = ResultStore()
        store.add_listener(seen.append)

        store.store(make_result("A.java"))
        store.close()

        assert len(seen) == 1

    def test_listener_may_flush(self, store: ResultStore) -> None:
        """Test that flushing from inside a listener returns immediately."""
        done = threading.Event()

        def flushing(change: StoreChange) -> None:
            store.flush(timeout=5)
            done.set()

        store.add_listener(flushing)
        store.store(make_result("A.java"))

        assert done.wait(timeout=2)
        store.flush(timeout=5)

    def test_listener_may_close(self) -> None:
        """Test that closing from inside a listener does not hang."""
        done = threading.Event()
        store = ResultStore()

        def closing(change: StoreChange) -> None:
            store.close()
            done.set()

        store.add_listener(closing)
        store.store(make_result("A.java"))

        assert done.wait(timeout=2)
        store.close()

    def test_writes_after_close(self) -> None:
        """Test that a closed store still holds data but stops notifying."""
        seen: list[StoreChange] = []
        store = ResultStore()
        store.add_listener(seen.append)
        store.close()

        store.store(make_result("A.java"))
        store.flush()

        assert store.has_results("A.java")
        assert seen == []
