"""XP and coin reward engine for pushup-league.

Pure functions that convert a logged push-up workout into XP and coins.
All results are integers (math.floor for rounding). Input validation
happens in the store before these are called.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from pushup_league.streaks import get_streak_multiplier

# Damping so raw reps do not map 1:1 to XP
EARNING_SCALE = 0.25

# Hard cap per logged workout
XP_CAP = 500

# Bonuses
SET_BONUS = 0.05  # +5% per set
CHALLENGE_BONUS = 1.25

# Coins
BASE_COINS = 10
COINS_PER_SET = 2
MIN_COINS = 1


@dataclass
class Reward:
    """XP and coin breakdown for a single workout."""

    base_xp: float
    streak_multiplier: float
    multiplier: float
    xp: int
    coins: int
    capped: bool


def _set_multiplier(sets: int | None) -> float:
    if not sets:
        return 1.0
    return 1 + sets * SET_BONUS


def _uncapped_xp(
    pushups: int,
    streak_days: int,
    sets: int | None = None,
    challenge_bonus: bool = False,
) -> float:
    xp = pushups * EARNING_SCALE
    xp *= get_streak_multiplier(streak_days)
    xp *= _set_multiplier(sets)
    if challenge_bonus:
        xp *= CHALLENGE_BONUS
    return xp


def compute_xp(
    pushups: int,
    streak_days: int,
    sets: int | None = None,
    challenge_bonus: bool = False,
) -> int:
    """Calculate XP for one workout.

    1. Base = pushups * EARNING_SCALE.
    2. Multiply by the streak multiplier for streak_days.
    3. If sets given: multiply by (1 + sets * SET_BONUS).
    4. If the daily challenge was completed: multiply by CHALLENGE_BONUS.
    5. Floor, then cap at XP_CAP.
    """
    xp = _uncapped_xp(pushups, streak_days, sets, challenge_bonus)
    return min(math.floor(xp), XP_CAP)


def compute_coins(sets: int | None = None) -> int:
    """Coins for one workout: floor(max(1, (10 + sets * 2) * EARNING_SCALE))."""
    raw = (BASE_COINS + (sets or 0) * COINS_PER_SET) * EARNING_SCALE
    return math.floor(max(MIN_COINS, raw))


def calculate_reward(
    pushups: int,
    streak_days: int,
    sets: int | None = None,
    challenge_bonus: bool = False,
) -> Reward:
    """Full reward breakdown for one workout."""
    streak_multiplier = get_streak_multiplier(streak_days)
    multiplier = streak_multiplier * _set_multiplier(sets)
    if challenge_bonus:
        multiplier *= CHALLENGE_BONUS

    uncapped = math.floor(_uncapped_xp(pushups, streak_days, sets, challenge_bonus))
    xp = min(uncapped, XP_CAP)

    return Reward(
        base_xp=pushups * EARNING_SCALE,
        streak_multiplier=streak_multiplier,
        multiplier=multiplier,
        xp=xp,
        coins=compute_coins(sets),
        capped=uncapped > XP_CAP,
    )
