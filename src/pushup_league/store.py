"""Workout logging and the other state transitions of pushup-league.

Every operation takes the caller-owned UserState explicitly. Transitions
build a complete candidate state first and copy it onto the caller's
object in one step, so a failure never leaves a partial update. Expected
rule violations come back as {"success": False, "error": code, ...}
dicts instead of exceptions.

Day locking is the caller's job: check the lock for the target date
before calling log_workout.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import fields, replace
from datetime import date, datetime, timezone

from pushup_league.achievements import evaluate, get_achievement
from pushup_league.errors import PushupLeagueError, ValidationError
from pushup_league.goals import PROFICIENCY_LEVELS, calculate_daily_goal
from pushup_league.integrity import check_integrity
from pushup_league.models import UnlockedAchievement, UserState, Workout
from pushup_league.quests import Quest, claim_quest, record_workout, refresh_quests
from pushup_league.ranks import get_rank, rank_progress, resolve_rank
from pushup_league.streaks import advance_streak, streak_status
from pushup_league.xp import calculate_reward

logger = logging.getLogger(__name__)


def _today(today: str | None) -> str:
    if today is None:
        return date.today().isoformat()
    try:
        return date.fromisoformat(today).isoformat()
    except ValueError:
        raise ValidationError(f"Invalid date: {today!r} (expected YYYY-MM-DD)") from None


def _now(now: str | None) -> str:
    return now or datetime.now(tz=timezone.utc).isoformat()


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _commit(state: UserState, candidate: UserState) -> None:
    """Copy every field of candidate onto state."""
    for f in fields(UserState):
        setattr(state, f.name, getattr(candidate, f.name))


def _unlock(candidate: UserState, now: str) -> tuple[list[str], int, int]:
    """Record new unlocks on candidate and credit their XP and coin rewards.

    Runs again after each credit, since reward XP can raise the rank and
    satisfy a rank achievement. Returns (ids, xp credited, coins credited).
    """
    unlocked: list[str] = []
    xp_total = coin_total = 0
    new_ids = evaluate(candidate)
    while new_ids:
        definitions = [get_achievement(aid) for aid in new_ids]
        xp = sum(d.xp_reward for d in definitions)
        coins = sum(d.coin_reward for d in definitions)
        candidate.achievements = [
            *candidate.achievements,
            *(UnlockedAchievement(id=aid, unlocked_at=now) for aid in new_ids),
        ]
        candidate.total_xp += xp
        candidate.coins += coins
        candidate.current_rank = resolve_rank(candidate.total_xp)["rank"]
        for definition in definitions:
            logger.info(
                "achievement unlocked: %s (+%d XP, +%d coins)",
                definition.id, definition.xp_reward, definition.coin_reward,
            )
        unlocked.extend(new_ids)
        xp_total += xp
        coin_total += coins
        new_ids = evaluate(candidate)
    return unlocked, xp_total, coin_total


def _quest_anchor(state: UserState, day: str) -> str:
    """Latest date the stored workouts and quest periods have reached.

    Quest periods never move backwards.
    """
    dates = [day, *(q.start_date for q in state.quests)]
    if state.last_workout_date is not None:
        dates.append(state.last_workout_date)
    return max(dates)


def get_daily_goal(state: UserState) -> int:
    """Push-up goal for the current day."""
    return calculate_daily_goal(state.proficiency, state.current_streak, state.personal_best)


def log_workout(
    state: UserState,
    pushups: int,
    sets: int | None = None,
    challenge_bonus: bool = False,
    today: str | None = None,
    now: str | None = None,
) -> dict:
    """Log a workout and update every derived field together.

    today: calendar date of the workout (YYYY-MM-DD), defaults to the local date.
        A back-dated workout only advances quests active on its own date, and
        its daily goal is computed from the current streak and personal best.
    now: unlock timestamp for achievements, defaults to the current UTC time.

    Returns {"success": True, "workout", "warnings", "streak", "xp_earned",
    "coins_earned", "rank", "rank_up", "new_achievements",
    "achievement_xp", "achievement_coins", ...} or a
    failure dict with error "validation".
    """
    try:
        return _log_workout(state, pushups, sets, challenge_bonus, today, now)
    except PushupLeagueError as exc:
        logger.info("workout rejected: %s", exc.message)
        return exc.to_result()


def _log_workout(
    state: UserState,
    pushups: int,
    sets: int | None,
    challenge_bonus: bool,
    today: str | None,
    now: str | None,
) -> dict:
    if not _is_positive_int(pushups):
        raise ValidationError("Push-ups must be a positive whole number.")
    if sets is not None and not _is_positive_int(sets):
        raise ValidationError("Sets must be at least 1.")
    day = _today(today)

    integrity = check_integrity(state.proficiency, pushups, [w.pushups for w in state.workouts])
    if not integrity.is_valid:
        raise ValidationError(
            "Workout rejected: integrity check failed.", warnings=integrity.warnings
        )

    streak = advance_streak(
        state.last_workout_date, day, state.current_streak, use_freeze=state.freeze_armed
    )
    reward = calculate_reward(pushups, streak.length, sets, challenge_bonus)
    total_xp = state.total_xp + reward.xp
    old_rank = state.current_rank

    earlier_today = [w for w in state.workouts if w.date == day]
    daily_goal = get_daily_goal(state)
    goal_already_met = any(w.goal_completed for w in earlier_today)
    goal_completed = goal_already_met or sum(w.pushups for w in earlier_today) + pushups >= daily_goal

    workout = Workout(
        id=uuid.uuid4().hex,
        date=day,
        pushups=pushups,
        sets=sets,
        xp_earned=reward.xp,
        coins_earned=reward.coins,
        streak_multiplier=reward.streak_multiplier,
        challenge_bonus=bool(challenge_bonus),
        goal_completed=goal_completed,
    )

    quests = refresh_quests(state.quests, _quest_anchor(state, day))
    quests = record_workout(
        quests,
        pushups,
        sets,
        first_of_day=not earlier_today,
        goal_reached=goal_completed and not goal_already_met,
        day=day,
    )

    last_date = day
    if state.last_workout_date is not None and state.last_workout_date > day:
        # a back-dated entry does not move the streak anchor backwards
        last_date = state.last_workout_date

    candidate = replace(
        state,
        total_xp=total_xp,
        coins=state.coins + reward.coins,
        current_rank=resolve_rank(total_xp)["rank"],
        current_streak=streak.length,
        longest_streak=max(state.longest_streak, streak.length),
        last_workout_date=last_date,
        freeze_armed=state.freeze_armed and not streak.freeze_used,
        personal_best=max(state.personal_best, pushups),
        total_pushups=state.total_pushups + pushups,
        workouts=[*state.workouts, workout],
        quests=quests,
    )
    new_achievements, achievement_xp, achievement_coins = _unlock(candidate, _now(now))
    _commit(state, candidate)

    rank = get_rank(state.current_rank)
    if rank["rank"] > old_rank:
        logger.info("rank up: %d -> %d (%s)", old_rank, rank["rank"], rank["title"])

    return {
        "success": True,
        "message": "Workout logged successfully!",
        "workout": workout,
        "warnings": list(integrity.warnings),
        "world_record_territory": integrity.world_record_territory,
        "streak": {
            "days": streak.length,
            "broken": streak.broken,
            "freeze_used": streak.freeze_used,
        },
        "xp_earned": reward.xp,
        "coins_earned": reward.coins,
        "capped": reward.capped,
        "rank": rank,
        "rank_up": rank["rank"] > old_rank,
        "daily_goal": daily_goal,
        "goal_completed": goal_completed,
        "new_achievements": new_achievements,
        "achievement_xp": achievement_xp,
        "achievement_coins": achievement_coins,
    }


def claim_quest_reward(
    state: UserState,
    quest_id: str,
    today: str | None = None,
    now: str | None = None,
) -> dict:
    """Pay out a completed quest exactly once.

    Returns {"success": True, "message", "xp_awarded", "coins_awarded",
    "quest", "new_achievements"} or a failure dict with error
    not_found / already_claimed / not_completed.
    """
    try:
        quests = refresh_quests(state.quests, _quest_anchor(state, _today(today)))
        quests, quest = claim_quest(quests, quest_id)
    except PushupLeagueError as exc:
        return exc.to_result()

    total_xp = state.total_xp + quest.xp_reward
    candidate = replace(
        state,
        quests=quests,
        total_xp=total_xp,
        coins=state.coins + quest.coin_reward,
        current_rank=resolve_rank(total_xp)["rank"],
    )
    new_achievements, achievement_xp, achievement_coins = _unlock(candidate, _now(now))
    _commit(state, candidate)
    logger.info("quest claimed: %s (+%d XP, +%d coins)", quest.id, quest.xp_reward, quest.coin_reward)

    return {
        "success": True,
        "message": f"Claimed {quest.coin_reward} coins and {quest.xp_reward} XP!",
        "xp_awarded": quest.xp_reward,
        "coins_awarded": quest.coin_reward,
        "quest": quest,
        "new_achievements": new_achievements,
        "achievement_xp": achievement_xp,
        "achievement_coins": achievement_coins,
    }


def use_streak_freeze(state: UserState) -> dict:
    """Spend a freeze token so the next workout may bridge one missed day."""
    if state.freeze_armed:
        return ValidationError("A streak freeze is already active.").to_result()
    if state.streak_freezes <= 0:
        return ValidationError("No streak freezes left!").to_result()

    state.streak_freezes -= 1
    state.freeze_armed = True
    logger.info("streak freeze armed, %d left", state.streak_freezes)
    return {
        "success": True,
        "message": "Streak freeze active: your next workout can cover one missed day.",
        "freezes_left": state.streak_freezes,
    }


def set_username(state: UserState, username: str) -> dict:
    name = (username or "").strip()
    if not name:
        return ValidationError("Username cannot be empty.").to_result()
    state.username = name
    return {"success": True, "message": f"Username set to {name}."}


def set_proficiency(state: UserState, proficiency: str) -> dict:
    if proficiency not in PROFICIENCY_LEVELS:
        choices = ", ".join(PROFICIENCY_LEVELS)
        return ValidationError(f"Unknown proficiency {proficiency!r}. Choose one of: {choices}").to_result()
    state.proficiency = proficiency
    return {"success": True, "message": f"Proficiency set to {PROFICIENCY_LEVELS[proficiency]['label']}."}


# ── Read accessors ────────────────────────────────────────────────────────────


def get_streak_status(state: UserState, today: str | None = None) -> dict:
    """{days, broken, active_today} as of `today`."""
    status = streak_status(
        state.last_workout_date, state.current_streak, _today(today), state.freeze_armed
    )
    return {"days": status.days, "broken": status.broken, "active_today": status.active_today}


def get_next_rank_progress(state: UserState) -> dict:
    """{current, required, percent} toward the next rank."""
    return rank_progress(state.total_xp)


def get_rank_info(state: UserState) -> dict:
    return get_rank(state.current_rank)


def get_total_xp(state: UserState) -> int:
    return state.total_xp


def get_coins(state: UserState) -> int:
    return state.coins


def get_achievements(state: UserState) -> list[UnlockedAchievement]:
    return list(state.achievements)


def get_workout_history(state: UserState) -> list[Workout]:
    """All workouts, oldest first."""
    return list(state.workouts)


def get_today_workouts(state: UserState, today: str | None = None) -> list[Workout]:
    day = _today(today)
    return [w for w in state.workouts if w.date == day]


def get_active_quests(state: UserState, today: str | None = None) -> list[Quest]:
    """Quests for the current day and week, without touching state."""
    return refresh_quests(state.quests, _quest_anchor(state, _today(today)))
