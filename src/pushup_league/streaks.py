"""Streak tracking, streak freezes and streak multipliers for pushup-league."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

logger = logging.getLogger(__name__)

# Streak multipliers (minimum streak days -> multiplier)
STREAK_MULTIPLIERS: dict[int, float] = {
    4: 1.1,
    8: 1.25,
    15: 1.5,
    31: 1.75,
    61: 2.0,
}

# A freeze bridges exactly one missed day.
FREEZE_BRIDGE_DAYS = 2


@dataclass
class StreakResult:
    length: int
    broken: bool
    freeze_used: bool = False


@dataclass
class StreakStatus:
    days: int
    broken: bool
    active_today: bool


def _parse_date(d: str) -> date:
    """Parse a YYYY-MM-DD string to a date object."""
    return date.fromisoformat(d)


def days_between(last: str, today: str) -> int:
    """Calendar-day difference between two YYYY-MM-DD dates (today - last)."""
    return (_parse_date(today) - _parse_date(last)).days


def get_streak_multiplier(streak_days: int) -> float:
    """Return the multiplier for a streak length.

    Uses the highest applicable tier, 1.0 below the first one.
    E.g., streak_days=5 -> 1.1, streak_days=14 -> 1.25, streak_days=61 -> 2.0.
    """
    multiplier = 1.0
    for threshold in sorted(STREAK_MULTIPLIERS.keys()):
        if streak_days >= threshold:
            multiplier = STREAK_MULTIPLIERS[threshold]
    return multiplier


def advance_streak(
    last_workout_date: str | None,
    today: str,
    prior_streak: int,
    use_freeze: bool = False,
) -> StreakResult:
    """Work out the streak after logging a workout on `today`.

    Rules:
    - No previous workout: streak starts at 1, nothing broken
    - Same calendar day: streak unchanged (at least 1)
    - Next calendar day: streak + 1
    - Larger gap: streak resets to 1 and is flagged broken
    - With use_freeze, a gap of exactly 2 days counts as the next day
    """
    if last_workout_date is None:
        return StreakResult(length=1, broken=False)

    gap = days_between(last_workout_date, today)
    freeze_used = False
    if use_freeze and gap == FREEZE_BRIDGE_DAYS:
        gap = 1
        freeze_used = True

    if gap <= 0:
        result = StreakResult(length=max(prior_streak, 1), broken=False)
    elif gap == 1:
        result = StreakResult(length=prior_streak + 1, broken=False, freeze_used=freeze_used)
    else:
        result = StreakResult(length=1, broken=True)

    logger.debug(
        "streak %d -> %d (gap=%d, broken=%s, freeze_used=%s)",
        prior_streak, result.length, gap, result.broken, result.freeze_used,
    )
    return result


def streak_status(
    last_workout_date: str | None,
    current_streak: int,
    today: str,
    freeze_armed: bool = False,
) -> StreakStatus:
    """Report the streak as seen on `today` without logging anything.

    broken is True when the next workout would reset the streak, i.e. the
    last workout is more than one day old (two with an armed freeze).
    """
    if last_workout_date is None:
        return StreakStatus(days=0, broken=False, active_today=False)

    gap = days_between(last_workout_date, today)
    allowed_gap = FREEZE_BRIDGE_DAYS if freeze_armed else 1
    return StreakStatus(
        days=current_streak,
        broken=gap > allowed_gap,
        active_today=gap <= 0,
    )

