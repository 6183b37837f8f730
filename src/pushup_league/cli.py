"""CLI commands for pushup-league."""

from __future__ import annotations

import argparse
import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path

from pushup_league import store
from pushup_league.achievements import achievement_statuses, get_achievement, get_closest_achievements
from pushup_league.config import get_auto_lock, get_db_path
from pushup_league.db import Database
from pushup_league.display import (
    print_achievements,
    print_claim_result,
    print_dashboard,
    print_failure,
    print_history,
    print_log_result,
    print_message,
    print_no_data_message,
    print_quests,
)
from pushup_league.goals import PROFICIENCY_LEVELS
from pushup_league.ranks import MAX_RANK

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_PATH = "pushup-league-export.json"


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pushup-league",
        description="Track push-ups, earn XP and climb the ranks",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Print debug logging")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("dashboard", help="Show main dashboard")
    log_parser = subparsers.add_parser("log", help="Log a workout")
    log_parser.add_argument("pushups", type=int, help="Number of push-ups")
    log_parser.add_argument("--sets", "-s", type=int, default=None, help="Number of sets")
    log_parser.add_argument("--challenge", action="store_true", help="Daily challenge completed")
    log_parser.add_argument("--date", "-d", default=None, help="Workout date (YYYY-MM-DD)")
    history_parser = subparsers.add_parser("history", help="List logged workouts")
    history_parser.add_argument("--limit", "-n", type=int, default=20, help="Number of workouts to show")
    subparsers.add_parser("achievements", help="List all achievements")
    subparsers.add_parser("quests", help="Show daily and weekly quests")
    claim_parser = subparsers.add_parser("claim", help="Claim a completed quest")
    claim_parser.add_argument("quest_id", help="Quest ID as shown by 'quests'")
    subparsers.add_parser("freeze", help="Use a streak freeze to cover one missed day")
    lock_parser = subparsers.add_parser("lock", help="Lock a day against further logging")
    lock_parser.add_argument("--date", "-d", default=None, help="Day to lock (YYYY-MM-DD)")
    profile_parser = subparsers.add_parser("profile", help="Set username or proficiency")
    profile_parser.add_argument("--username", "-u", default=None, help="Display name")
    profile_parser.add_argument(
        "--proficiency", "-p", default=None, choices=list(PROFICIENCY_LEVELS), help="Proficiency level"
    )
    export_parser = subparsers.add_parser("export", help="Export all progress as JSON")
    export_parser.add_argument("--output", "-o", default=DEFAULT_EXPORT_PATH, help="Output file path")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    command = args.command or "dashboard"

    db = Database(get_db_path())

    try:
        if command == "dashboard":
            do_dashboard(db)
        elif command == "log":
            do_log(db, args.pushups, sets=args.sets, challenge=args.challenge, day=args.date)
        elif command == "history":
            do_history(db, limit=args.limit)
        elif command == "achievements":
            do_achievements(db)
        elif command == "quests":
            do_quests(db)
        elif command == "claim":
            do_claim(db, args.quest_id)
        elif command == "freeze":
            do_freeze(db)
        elif command == "lock":
            do_lock(db, day=args.date)
        elif command == "profile":
            do_profile(db, username=args.username, proficiency=args.proficiency)
        elif command == "export":
            do_export(db, output=args.output)
    finally:
        db.close()


def _achievement_rows(state) -> list[dict]:
    rows: list[dict] = []
    for status in achievement_statuses(state):
        achdef = status.definition
        rows.append({
            "id": achdef.id,
            "name": achdef.name,
            "description": achdef.description,
            "category": achdef.category.value,
            "rarity": achdef.rarity.value,
            "progress": status.progress,
            "unlocked": status.unlocked,
            "unlocked_at": status.unlocked_at,
        })
    return rows


def _fail(result: dict) -> dict:
    print_failure(result)
    return result


def _resolve_day(day: str | None) -> str | None:
    """Normalize a YYYY-MM-DD date, defaulting to today. None if invalid."""
    if day is None:
        return date.today().isoformat()
    try:
        return date.fromisoformat(day).isoformat()
    except ValueError:
        return None


def _invalid_day(day: str | None) -> dict:
    return _fail({
        "success": False,
        "error": "validation",
        "message": f"Invalid date: {day!r} (expected YYYY-MM-DD)",
    })


def do_dashboard(db: Database, today: str | None = None) -> dict:
    """Show main dashboard with rank, XP, streak, goal and achievements."""
    state = db.load_state()
    if state is None or not state.workouts:
        print_no_data_message()
        return {"success": False, "reason": "no_data"}

    today = today or date.today().isoformat()
    rank = store.get_rank_info(state)

    recent = sorted(state.achievements, key=lambda a: a.unlocked_at, reverse=True)[:3]
    recent_achievements = []
    for unlocked in recent:
        achdef = get_achievement(unlocked.id)
        if achdef:
            recent_achievements.append({"name": achdef.name, "description": achdef.description})

    closest_achievements = [
        {"name": s.definition.name, "description": s.definition.description, "progress": s.progress}
        for s in get_closest_achievements(achievement_statuses(state))
    ]

    data = {
        "username": state.username,
        "rank": rank,
        "max_rank": rank["rank"] >= MAX_RANK,
        "progress": store.get_next_rank_progress(state),
        "total_xp": store.get_total_xp(state),
        "coins": store.get_coins(state),
        "streak": store.get_streak_status(state, today),
        "streak_freezes": state.streak_freezes,
        "freeze_armed": state.freeze_armed,
        "today_pushups": sum(w.pushups for w in store.get_today_workouts(state, today)),
        "daily_goal": store.get_daily_goal(state),
        "total_pushups": state.total_pushups,
        "personal_best": state.personal_best,
        "recent_achievements": recent_achievements,
        "closest_achievements": closest_achievements,
    }
    print_dashboard(data)
    return {"success": True, **data}


def do_log(
    db: Database,
    pushups: int,
    sets: int | None = None,
    challenge: bool = False,
    day: str | None = None,
) -> dict:
    """Log a workout, refusing locked days."""
    resolved = _resolve_day(day)
    if resolved is None:
        return _invalid_day(day)
    day = resolved
    if db.is_day_locked(day):
        return _fail({
            "success": False,
            "error": "locked",
            "message": f"{day} is locked. Workouts for that day can no longer be logged.",
        })

    state = db.load_or_create_state()
    result = store.log_workout(state, pushups, sets=sets, challenge_bonus=challenge, today=day)
    if not result["success"]:
        return _fail(result)

    db.save_state(state)
    if get_auto_lock():
        db.lock_day(day)
        logger.debug("auto-locked %s", day)

    names = [get_achievement(aid).name for aid in result["new_achievements"]]
    print_log_result({**result, "workout": result["workout"].to_dict(), "new_achievements": names})
    return result


def do_history(db: Database, limit: int = 20) -> dict:
    """Show the most recent workouts."""
    state = db.load_state()
    workouts = store.get_workout_history(state) if state else []
    recent = [w.to_dict() for w in reversed(workouts)][:max(limit, 0)]
    print_history(recent)
    return {"success": True, "workouts": recent, "count": len(workouts)}


def do_achievements(db: Database) -> dict:
    """Show all achievements with progress."""
    state = db.load_or_create_state()
    rows = _achievement_rows(state)
    print_achievements(rows)
    return {"success": True, "achievements": rows}


def do_quests(db: Database, today: str | None = None) -> dict:
    """Show the quests active today."""
    state = db.load_or_create_state()
    quests = [q.to_dict() for q in store.get_active_quests(state, today)]
    print_quests(quests)
    return {"success": True, "quests": quests}


def do_claim(db: Database, quest_id: str, today: str | None = None) -> dict:
    """Claim a completed quest's reward."""
    state = db.load_or_create_state()
    result = store.claim_quest_reward(state, quest_id, today=today)
    if not result["success"]:
        return _fail(result)

    db.save_state(state)
    names = [get_achievement(aid).name for aid in result["new_achievements"]]
    print_claim_result({**result, "quest": result["quest"].to_dict(), "new_achievements": names})
    return result


def do_freeze(db: Database) -> dict:
    """Arm a streak freeze."""
    state = db.load_or_create_state()
    result = store.use_streak_freeze(state)
    if not result["success"]:
        return _fail(result)

    db.save_state(state)
    print_message(f"{result['message']} ({result['freezes_left']} left)", title="Streak Freeze")
    return result


def do_lock(db: Database, day: str | None = None) -> dict:
    """Lock a day so no more workouts can be logged for it."""
    resolved = _resolve_day(day)
    if resolved is None:
        return _invalid_day(day)
    day = resolved

    db.lock_day(day)
    print_message(f"{day} is locked.", title="Day Locked")
    return {"success": True, "date": day}


def do_profile(db: Database, username: str | None = None, proficiency: str | None = None) -> dict:
    """Update username and/or proficiency, or show the current profile."""
    state = db.load_or_create_state()
    messages: list[str] = []
    for value, setter in ((username, store.set_username), (proficiency, store.set_proficiency)):
        if value is None:
            continue
        result = setter(state, value)
        if not result["success"]:
            return _fail(result)
        messages.append(result["message"])

    if messages:
        db.save_state(state)
    else:
        label = PROFICIENCY_LEVELS.get(state.proficiency, {}).get("label", state.proficiency)
        messages.append(f"{state.username} ({label}), daily goal {store.get_daily_goal(state)} push-ups")

    print_message("\n  ".join(messages), title="Profile")
    return {
        "success": True,
        "username": state.username,
        "proficiency": state.proficiency,
        "messages": messages,
    }


def do_export(db: Database, output: str = DEFAULT_EXPORT_PATH) -> dict:
    """Write the full progress record to a JSON file."""
    state = db.load_or_create_state()
    payload = {
        "exported_at": datetime.now(tz=timezone.utc).isoformat(),
        "locked_days": db.get_locked_days(),
        "state": state.to_dict(),
    }
    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    print_message(f"Progress exported to [bold]{output_path}[/]", title="Export")
    return {"success": True, "output": str(output_path)}
