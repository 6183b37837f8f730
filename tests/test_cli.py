"""Tests for CLI commands."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from pushup_league.cli import (
    build_parser,
    do_achievements,
    do_claim,
    do_dashboard,
    do_export,
    do_freeze,
    do_history,
    do_lock,
    do_log,
    do_profile,
    do_quests,
    main,
)
from pushup_league.db import Database
from pushup_league.display import format_number


@pytest.fixture
def db(tmp_path):
    """Create a temporary database for testing."""
    database = Database(db_path=tmp_path / "test.db")
    yield database
    database.close()


@pytest.fixture(autouse=True)
def no_auto_lock():
    with patch("pushup_league.cli.get_auto_lock", return_value=False) as mock:
        yield mock


# ── build_parser ──────────────────────────────────────────────────────────────


class TestBuildParser:
    def test_no_args_defaults_to_none_command(self):
        args = build_parser().parse_args([])
        assert args.command is None
        assert args.verbose is False

    def test_log_command(self):
        args = build_parser().parse_args(["log", "25", "--sets", "3", "--challenge", "--date", "2026-03-02"])
        assert args.command == "log"
        assert args.pushups == 25
        assert args.sets == 3
        assert args.challenge is True
        assert args.date == "2026-03-02"

    def test_claim_command(self):
        args = build_parser().parse_args(["claim", "daily_goal_2026-03-02"])
        assert args.quest_id == "daily_goal_2026-03-02"

    def test_profile_rejects_unknown_proficiency(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["profile", "--proficiency", "legend"])

    def test_invalid_command_raises(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["nonexistent"])

    def test_pushups_must_be_int(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["log", "lots"])


# ── format_number ─────────────────────────────────────────────────────────────


class TestFormatNumber:
    def test_small_number(self):
        assert format_number(42) == "42"

    def test_number_with_commas(self):
        assert format_number(1200) == "1,200"

    def test_ten_thousand(self):
        assert format_number(10000) == "10.0K"

    def test_million(self):
        assert format_number(1234567) == "1.2M"


# ── do_log ────────────────────────────────────────────────────────────────────


class TestDoLog:
    def test_saves_state(self, db):
        result = do_log(db, 20, day="2026-03-02")
        assert result["success"] is True
        stored = db.load_state()
        assert stored.total_pushups == 20
        assert stored.workouts[0].date == "2026-03-02"

    def test_failure_not_saved(self, db):
        result = do_log(db, 0, day="2026-03-02")
        assert result["error"] == "validation"
        assert db.load_state().workouts == []

    def test_locked_day_refused(self, db):
        db.lock_day("2026-03-02")
        result = do_log(db, 20, day="2026-03-02")
        assert result == {
            "success": False,
            "error": "locked",
            "message": "2026-03-02 is locked. Workouts for that day can no longer be logged.",
        }
        assert db.load_state() is None

    def test_invalid_date(self, db):
        result = do_log(db, 20, day="yesterday")
        assert result["error"] == "validation"

    def test_auto_lock(self, db, no_auto_lock):
        no_auto_lock.return_value = True
        do_log(db, 20, day="2026-03-02")
        assert db.is_day_locked("2026-03-02") is True
        assert do_log(db, 20, day="2026-03-02")["error"] == "locked"

    def test_streak_across_runs(self, db):
        do_log(db, 20, day="2026-03-01")
        do_log(db, 20, day="2026-03-02")
        result = do_log(db, 20, day="2026-03-04")
        assert result["streak"] == {"days": 1, "broken": True, "freeze_used": False}


# ── do_claim / do_quests ──────────────────────────────────────────────────────


class TestQuests:
    def test_quests_listed(self, db):
        result = do_quests(db, today="2026-03-04")
        ids = {q["id"] for q in result["quests"]}
        assert "daily_goal_2026-03-04" in ids
        assert "weekly_consistency_2026-03-01" in ids

    def test_claim_saves_reward(self, db):
        do_log(db, 20, day="2026-03-04")
        result = do_claim(db, "daily_goal_2026-03-04", today="2026-03-04")
        assert result["success"] is True
        assert db.load_state().total_xp == 75

    def test_claim_twice(self, db):
        do_log(db, 20, day="2026-03-04")
        do_claim(db, "daily_goal_2026-03-04", today="2026-03-04")
        result = do_claim(db, "daily_goal_2026-03-04", today="2026-03-04")
        assert result["error"] == "already_claimed"
        assert db.load_state().total_xp == 75


# ── other commands ────────────────────────────────────────────────────────────


class TestOtherCommands:
    def test_dashboard_empty_db(self, db):
        assert do_dashboard(db)["success"] is False

    def test_dashboard_populated(self, db):
        do_log(db, 20, day="2026-03-02")
        result = do_dashboard(db, today="2026-03-02")
        assert result["success"] is True
        assert result["today_pushups"] == 20
        assert result["rank"]["title"] == "Initiate"
        assert result["recent_achievements"][0]["name"] == "First Step"

    def test_history_newest_first(self, db):
        do_log(db, 20, day="2026-03-01")
        do_log(db, 30, day="2026-03-02")
        result = do_history(db, limit=1)
        assert [w["pushups"] for w in result["workouts"]] == [30]
        assert result["count"] == 2

    def test_history_empty(self, db):
        assert do_history(db)["workouts"] == []

    def test_achievements(self, db):
        do_log(db, 20, day="2026-03-02")
        rows = do_achievements(db)["achievements"]
        first_step = next(r for r in rows if r["id"] == "sessions_1")
        assert first_step["unlocked"] is True

    def test_freeze_once(self, db):
        assert do_freeze(db)["success"] is True
        assert db.load_state().freeze_armed is True
        assert do_freeze(db)["success"] is False

    def test_lock(self, db):
        assert do_lock(db, day="2026-03-02") == {"success": True, "date": "2026-03-02"}
        assert db.is_day_locked("2026-03-02")

    def test_lock_invalid_date(self, db):
        assert do_lock(db, day="03-02")["error"] == "validation"
        assert db.get_locked_days() == []

    def test_profile_update(self, db):
        result = do_profile(db, username="Ada", proficiency="advanced")
        assert result["success"] is True
        stored = db.load_state()
        assert stored.username == "Ada"
        assert stored.proficiency == "advanced"

    def test_profile_show(self, db):
        result = do_profile(db)
        assert result["username"] == "Champion"
        assert "daily goal 10" in result["messages"][0]

    def test_export(self, db, tmp_path):
        do_log(db, 20, day="2026-03-02")
        db.lock_day("2026-03-02")
        output = tmp_path / "out" / "export.json"
        result = do_export(db, output=str(output))
        assert result["success"] is True
        payload = json.loads(output.read_text())
        assert payload["locked_days"] == ["2026-03-02"]
        assert payload["state"]["total_pushups"] == 20


class TestMain:
    def test_main_dispatches_and_closes(self, tmp_path):
        db_path = tmp_path / "main.db"
        with patch("pushup_league.cli.get_db_path", return_value=db_path):
            main(["log", "15", "--date", "2026-03-02"])
            main(["history"])
        database = Database(db_path=db_path)
        assert database.load_state().total_pushups == 15
        database.close()
