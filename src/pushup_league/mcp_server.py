"""MCP server for pushup-league.

Exposes rank, streak, quests and workout logging as MCP tools so an
assistant can read and update progress mid-conversation.
Run via: python3 -m pushup_league.mcp_server
"""
from __future__ import annotations

from datetime import date
from typing import Any

from mcp.server.fastmcp import FastMCP

mcp = FastMCP(name="pushup-league")


def _get_db():
    from pushup_league.config import get_db_path
    from pushup_league.db import Database
    return Database(get_db_path())


def _public(result: dict) -> dict[str, Any]:
    """Replace record objects in a store result with plain dicts."""
    data = dict(result)
    for key in ("workout", "quest"):
        if key in data and hasattr(data[key], "to_dict"):
            data[key] = data[key].to_dict()
    return data


@mcp.tool()
def get_rank() -> dict[str, Any]:
    """Get current rank: title, color, total XP, coins and progress to the next rank."""
    from pushup_league import store

    db = _get_db()
    try:
        state = db.load_or_create_state()
        rank = store.get_rank_info(state)
        return {
            "rank": rank["rank"],
            "title": rank["title"],
            "color": rank["color"],
            "total_xp": store.get_total_xp(state),
            "coins": store.get_coins(state),
            "progress": store.get_next_rank_progress(state),
        }
    finally:
        db.close()


@mcp.tool()
def get_streak() -> dict[str, Any]:
    """Get the current streak, whether it is broken, and today's goal."""
    from pushup_league import store
    from pushup_league.streaks import get_streak_multiplier

    db = _get_db()
    try:
        state = db.load_or_create_state()
        status = store.get_streak_status(state)
        today_total = sum(w.pushups for w in store.get_today_workouts(state))
        return {
            **status,
            "longest_streak": state.longest_streak,
            "multiplier": get_streak_multiplier(status["days"]),
            "streak_freezes": state.streak_freezes,
            "freeze_armed": state.freeze_armed,
            "daily_goal": store.get_daily_goal(state),
            "today_pushups": today_total,
        }
    finally:
        db.close()


@mcp.tool()
def get_achievements() -> dict[str, Any]:
    """Get all achievements with unlock status and progress."""
    from pushup_league.achievements import achievement_statuses

    db = _get_db()
    try:
        state = db.load_or_create_state()
    finally:
        db.close()

    achievements = []
    for status in achievement_statuses(state):
        achdef = status.definition
        achievements.append({
            "id": achdef.id,
            "name": achdef.name,
            "description": achdef.description,
            "category": achdef.category.value,
            "rarity": achdef.rarity.value,
            "progress": round(status.progress, 4),
            "progress_pct": int(status.progress * 100),
            "target": int(achdef.target),
            "unlocked": status.unlocked,
            "unlocked_at": status.unlocked_at,
        })
    unlocked_count = sum(1 for a in achievements if a["unlocked"])
    return {
        "achievements": achievements,
        "total_count": len(achievements),
        "unlocked_count": unlocked_count,
    }


@mcp.tool()
def get_quests() -> dict[str, Any]:
    """Get today's daily quests and this week's weekly quests."""
    from pushup_league import store

    db = _get_db()
    try:
        state = db.load_or_create_state()
    finally:
        db.close()

    quests = []
    for quest in store.get_active_quests(state):
        data = quest.to_dict()
        data["completed"] = quest.completed
        quests.append(data)
    return {"quests": quests, "claimable": [q["id"] for q in quests if q["completed"] and not q["claimed"]]}


@mcp.tool()
def get_history(limit: int = 10) -> dict[str, Any]:
    """Get the most recent workouts, newest first.

    Args:
        limit: Maximum number of workouts to return.
    """
    from pushup_league import store

    db = _get_db()
    try:
        state = db.load_or_create_state()
    finally:
        db.close()

    workouts = store.get_workout_history(state)
    recent = [w.to_dict() for w in reversed(workouts)][:max(limit, 0)]
    return {"workouts": recent, "count": len(workouts)}


@mcp.tool()
def log_workout(pushups: int, sets: int | None = None, challenge: bool = False, day: str = "") -> dict[str, Any]:
    """Log a push-up workout and return XP, coins, streak and any unlocks.

    Args:
        pushups: Number of push-ups done.
        sets: Number of sets, if known.
        challenge: Whether the daily challenge was completed.
        day: Workout date as YYYY-MM-DD. Empty means today.
    """
    from pushup_league import store
    from pushup_league.config import get_auto_lock

    try:
        day = date.fromisoformat(day).isoformat() if day else date.today().isoformat()
    except ValueError:
        return {
            "success": False,
            "error": "validation",
            "message": f"Invalid date: {day!r} (expected YYYY-MM-DD)",
        }
    db = _get_db()
    try:
        if db.is_day_locked(day):
            return {"success": False, "error": "locked", "message": f"{day} is locked."}
        state = db.load_or_create_state()
        result = store.log_workout(state, pushups, sets=sets, challenge_bonus=challenge, today=day)
        if result["success"]:
            db.save_state(state)
            if get_auto_lock():
                db.lock_day(day)
        return _public(result)
    finally:
        db.close()


@mcp.tool()
def claim_quest(quest_id: str) -> dict[str, Any]:
    """Claim the reward for a completed quest.

    Args:
        quest_id: Quest ID as returned by get_quests.
    """
    from pushup_league import store

    db = _get_db()
    try:
        state = db.load_or_create_state()
        result = store.claim_quest_reward(state, quest_id)
        if result["success"]:
            db.save_state(state)
        return _public(result)
    finally:
        db.close()


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
