"""Unit tests for the SQLite storage handle."""

from __future__ import annotations

from pathlib import Path

import pytest

from election_api.core.errors import StorageConstraintError, StorageError
from election_api.db.storage import RunResult, Storage


class TestLifecycle:
    """Opening, probing and closing the handle."""

    def test_open_existing_database(self, database_path: Path) -> None:
        store = Storage(str(database_path))
        assert store.is_open is False

        store.open()
        try:
            assert store.is_open is True
            assert store.ping() is True
        finally:
            store.close()
        assert store.is_open is False

    def test_open_missing_file_fails(self, tmp_path: Path) -> None:
        """Given a path that does not exist, open raises instead of creating a file."""
        missing = tmp_path / "nope" / "election.db"
        store = Storage(str(missing))

        with pytest.raises(StorageError, match="Could not open database"):
            store.open()

        assert store.is_open is False
        assert not missing.exists()

    def test_open_is_idempotent(self, storage: Storage) -> None:
        engine = storage.engine
        storage.open()
        assert storage.engine is engine

    def test_close_twice_is_safe(self, database_path: Path) -> None:
        store = Storage(str(database_path))
        store.open()
        store.close()
        store.close()
        assert store.is_open is False

    def test_queries_on_closed_handle_raise(self, database_path: Path) -> None:
        store = Storage(str(database_path))
        with pytest.raises(StorageError, match="not open"):
            store.all("SELECT * FROM parties")
        assert store.ping() is False


class TestQueries:
    """all / get / run against the seeded database."""

    def test_all_returns_dict_rows(self, storage: Storage) -> None:
        rows = storage.all("SELECT id, name FROM parties ORDER BY id")
        assert [r["name"] for r in rows] == [
            "JS Juggernauts",
            "Heroes of HTML",
            "Git Gurus",
        ]
        assert isinstance(rows[0], dict)

    def test_all_empty_result(self, storage: Storage) -> None:
        assert storage.all("SELECT * FROM parties WHERE id = :id", {"id": 999}) == []

    def test_get_row_and_absent(self, storage: Storage) -> None:
        row = storage.get("SELECT * FROM candidates WHERE id = :id", {"id": 2})
        assert row is not None
        assert row["first_name"] == "Virginia"
        assert storage.get("SELECT * FROM candidates WHERE id = :id", {"id": 999}) is None

    def test_run_insert_returns_last_id(self, storage: Storage) -> None:
        result = storage.run(
            "INSERT INTO candidates (first_name, last_name, industry_connected) "
            "VALUES (:f, :l, :i)",
            {"f": "Ann", "l": "Lee", "i": 1},
        )
        assert isinstance(result, RunResult)
        assert result.changes == 1
        assert result.last_id == 11

    def test_run_delete_without_match(self, storage: Storage) -> None:
        result = storage.run("DELETE FROM candidates WHERE id = :id", {"id": 999})
        assert result.changes == 0

    def test_bad_sql_raises_storage_error(self, storage: Storage) -> None:
        with pytest.raises(StorageError, match="no such table"):
            storage.all("SELECT * FROM voters")

    def test_foreign_keys_are_enforced(self, storage: Storage) -> None:
        with pytest.raises(StorageConstraintError, match="FOREIGN KEY"):
            storage.run(
                "UPDATE candidates SET party_id = :p WHERE id = :id",
                {"p": 999, "id": 1},
            )

    def test_party_delete_sets_candidates_party_to_null(self, storage: Storage) -> None:
        storage.run("DELETE FROM parties WHERE id = :id", {"id": 3})
        rows = storage.all("SELECT party_id FROM candidates WHERE id IN (6, 9)")
        assert [r["party_id"] for r in rows] == [None, None]
