"""Tests for the SQLite database layer."""

import pytest

from pushup_league.db import Database
from pushup_league.models import UserState
from pushup_league.store import log_workout


@pytest.fixture
def db(tmp_path):
    """Create a temporary database for testing."""
    database = Database(db_path=tmp_path / "test.db")
    yield database
    database.close()


class TestDatabaseCreation:
    def test_creates_parent_directories(self, tmp_path):
        db_path = tmp_path / "a" / "b" / "test.db"
        database = Database(db_path=db_path)
        assert db_path.exists()
        database.close()

    def test_tables_exist(self, db):
        cursor = db.conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        tables = {row["name"] for row in cursor.fetchall()}
        assert {"user_state", "day_locks"} <= tables

    def test_wal_mode_enabled(self, db):
        result = db.conn.execute("PRAGMA journal_mode").fetchone()
        assert result[0] == "wal"


class TestUserState:
    def test_empty_db_has_no_state(self, db):
        assert db.load_state() is None

    def test_load_or_create_persists(self, db):
        state = db.load_or_create_state()
        again = db.load_or_create_state()
        assert again.user_id == state.user_id

    def test_save_and_load_roundtrip(self, db):
        state = UserState.new(username="Ada")
        log_workout(state, 40, sets=2, today="2026-03-02", now="2026-03-02T08:00:00+00:00")
        db.save_state(state)
        loaded = db.load_state()
        assert loaded == state

    def test_save_overwrites(self, db):
        state = UserState.new()
        db.save_state(state)
        state.username = "Renamed"
        db.save_state(state)
        count = db.conn.execute("SELECT COUNT(*) FROM user_state").fetchone()[0]
        assert count == 1
        assert db.load_state().username == "Renamed"

    def test_state_survives_reopen(self, tmp_path):
        path = tmp_path / "test.db"
        first = Database(db_path=path)
        state = UserState.new()
        log_workout(state, 25, today="2026-03-02")
        first.save_state(state)
        first.close()

        second = Database(db_path=path)
        assert second.load_state().total_pushups == 25
        second.close()

    def test_reset(self, db):
        db.save_state(UserState.new())
        db.lock_day("2026-03-01")
        db.reset()
        assert db.load_state() is None
        assert db.get_locked_days() == []


class TestDayLocks:
    def test_unlocked_by_default(self, db):
        assert db.is_day_locked("2026-03-01") is False

    def test_lock_day(self, db):
        db.lock_day("2026-03-01")
        assert db.is_day_locked("2026-03-01") is True
        assert db.is_day_locked("2026-03-02") is False

    def test_relock_keeps_first_timestamp(self, db):
        db.lock_day("2026-03-01", "2026-03-01T20:00:00+00:00")
        db.lock_day("2026-03-01", "2026-03-01T23:00:00+00:00")
        row = db.conn.execute(
            "SELECT locked_at FROM day_locks WHERE date = ?", ("2026-03-01",)
        ).fetchone()
        assert row["locked_at"] == "2026-03-01T20:00:00+00:00"

    def test_locked_days_sorted(self, db):
        db.lock_day("2026-03-05")
        db.lock_day("2026-03-01")
        assert db.get_locked_days() == ["2026-03-01", "2026-03-05"]
