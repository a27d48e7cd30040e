"""Tests for footprint.storage.results_store."""

from __future__ import annotations

import sqlite3

import pytest

from footprint.storage.results_store import ResultsStore


@pytest.fixture()
def store(tmp_path) -> ResultsStore:
    results = ResultsStore(tmp_path / "nested" / "results.db")
    results.init()
    return results


class TestResultsStore:
    """Tests for ResultsStore insert/list/delete."""

    def test_init_creates_file(self, tmp_path) -> None:
        path = tmp_path / "a" / "b.db"
        ResultsStore(path).init()
        assert path.exists()

    def test_init_is_idempotent(self, store: ResultsStore) -> None:
        store.init()
        assert store.list_for_user("nobody") == []

    def test_insert_and_list(self, store: ResultsStore) -> None:
        store.insert_summary("user-1", 72, 2, 1, "Found 2 data breaches")
        (row,) = store.list_for_user("user-1")
        assert row["user_id"] == "user-1"
        assert row["score"] == 72
        assert row["breach_count"] == 2
        assert row["platforms_found"] == "1"
        assert row["summary"] == "Found 2 data breaches"
        assert row["created_at"]

    def test_list_newest_first(self, store: ResultsStore) -> None:
        store.insert_summary("user-1", 10, 0, 0, "first")
        store.insert_summary("user-1", 20, 0, 0, "second")
        assert [r["summary"] for r in store.list_for_user("user-1")] == ["second", "first"]

    def test_delete_for_user(self, store: ResultsStore) -> None:
        store.insert_summary("user-1", 10, 0, 0, "a")
        store.insert_summary("user-1", 20, 0, 0, "b")
        store.insert_summary("user-2", 30, 0, 0, "c")
        assert store.delete_for_user("user-1") == 2
        assert store.list_for_user("user-1") == []
        assert len(store.list_for_user("user-2")) == 1

    def test_delete_unknown_user(self, store: ResultsStore) -> None:
        assert store.delete_for_user("ghost") == 0

    def test_uninitialised_store_raises(self, tmp_path) -> None:
        with pytest.raises(sqlite3.OperationalError):
            ResultsStore(tmp_path / "empty.db").insert_summary("u", 1, 0, 0, "s")
