"""Proficiency levels and the daily push-up goal."""

from __future__ import annotations

import math

DEFAULT_PROFICIENCY = "beginner"

# Streak adds 2% to the goal per day
GOAL_STREAK_STEP = 0.02
PERSONAL_BEST_FACTOR = 0.8

PROFICIENCY_LEVELS: dict[str, dict] = {
    "beginner": {
        "label": "Beginner",
        "description": "Just starting out (1-20 push-ups in one set)",
        "daily_capacity": (10, 100),
    },
    "intermediate": {
        "label": "Intermediate",
        "description": "Regular training (21-50 push-ups in one set)",
        "daily_capacity": (100, 500),
    },
    "advanced": {
        "label": "Advanced",
        "description": "Experienced athlete (51-100 push-ups in one set)",
        "daily_capacity": (500, 2000),
    },
    "elite": {
        "label": "Elite",
        "description": "Competitive level (100-200 push-ups in one set)",
        "daily_capacity": (2000, 10000),
    },
    "world-class": {
        "label": "World-Class",
        "description": "World record contender (200+ push-ups in one set)",
        "daily_capacity": (10000, 50000),
    },
}


def get_proficiency(proficiency: str) -> dict:
    """Return proficiency data, falling back to beginner for unknown names."""
    return PROFICIENCY_LEVELS.get(proficiency, PROFICIENCY_LEVELS[DEFAULT_PROFICIENCY])


def calculate_daily_goal(proficiency: str, current_streak: int, personal_best: int) -> int:
    """Daily push-up goal.

    Starts from the level's minimum daily capacity (or 80% of the personal
    best, capped at the level's maximum, when that is higher), grows 2% per
    streak day, and never exceeds the level's maximum daily capacity.
    """
    low, high = get_proficiency(proficiency)["daily_capacity"]
    if personal_best > 0:
        pb_goal = min(personal_best * PERSONAL_BEST_FACTOR, high)
    else:
        pb_goal = low
    goal = math.floor(max(low, pb_goal) * (1 + max(current_streak, 0) * GOAL_STREAK_STEP))
    return min(goal, high)
