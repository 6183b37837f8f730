"""Achievement definitions and checking for pushup-league."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from pushup_league.ranks import RANKS

if TYPE_CHECKING:
    from pushup_league.models import UserState


class Rarity(str, Enum):
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class AchievementType(str, Enum):
    STREAK = "streak"
    VOLUME = "volume"
    CONSISTENCY = "consistency"
    COMEBACK = "comeback"
    SESSIONS = "sessions"
    RANK = "rank"


@dataclass
class AchievementDef:
    id: str
    name: str
    description: str
    category: AchievementType
    rarity: Rarity
    target: float
    check_field: str
    xp_reward: int = 0
    coin_reward: int = 0
    # extra minimums that must also hold, e.g. {"longest_streak": 14}
    also_requires: dict[str, float] = field(default_factory=dict)


@dataclass
class AchievementStatus:
    definition: AchievementDef
    progress: float  # 0.0 to 1.0
    unlocked: bool
    unlocked_at: str | None  # ISO timestamp or None


# (target, name, rarity, xp reward, coin reward)
_STREAKS = [
    (3, "Getting Started", Rarity.COMMON, 50, 10),
    (7, "Week Warrior", Rarity.COMMON, 100, 20),
    (14, "Two Week Champion", Rarity.RARE, 200, 40),
    (21, "Habit Former", Rarity.RARE, 250, 50),
    (30, "Monthly Master", Rarity.EPIC, 300, 60),
    (60, "Unstoppable", Rarity.EPIC, 400, 80),
    (100, "Century of Discipline", Rarity.LEGENDARY, 600, 120),
    (365, "Year of Excellence", Rarity.LEGENDARY, 1500, 300),
]

_VOLUME = [
    (100, "First Hundred", Rarity.COMMON, 25, 5),
    (500, "Half Thousand", Rarity.COMMON, 50, 10),
    (1000, "First Thousand", Rarity.COMMON, 75, 15),
    (5000, "Five Thousand Strong", Rarity.RARE, 150, 30),
    (10000, "Ten Thousand Club", Rarity.RARE, 200, 40),
    (50000, "Fifty Thousand Hero", Rarity.EPIC, 500, 100),
    (100000, "Hundred Thousand Legend", Rarity.LEGENDARY, 1000, 200),
]

_GOALS = [
    (5, "Goal Getter", Rarity.COMMON, 50, 10),
    (10, "On Target", Rarity.COMMON, 75, 15),
    (25, "Quarter Century", Rarity.RARE, 100, 20),
    (50, "Fifty Goals", Rarity.RARE, 150, 30),
    (100, "Century of Goals", Rarity.EPIC, 200, 40),
]

# (rebuilt streak, longest streak needed, name, rarity, xp reward, coin reward)
_COMEBACKS = [
    (7, 14, "Phoenix Rising", Rarity.RARE, 100, 20),
    (14, 28, "Second Chance Champion", Rarity.EPIC, 200, 40),
    (30, 60, "Resilience King", Rarity.LEGENDARY, 300, 60),
]

_SESSIONS = [
    (1, "First Step", Rarity.COMMON, 20, 5),
    (10, "Ten Sessions", Rarity.COMMON, 50, 10),
    (50, "Fifty Sessions", Rarity.RARE, 100, 20),
    (100, "Century Sessions", Rarity.EPIC, 150, 30),
    (500, "Five Hundred Sessions", Rarity.LEGENDARY, 400, 80),
]

_RANK_RARITY = {2: Rarity.COMMON, 3: Rarity.COMMON, 4: Rarity.RARE, 5: Rarity.RARE,
                6: Rarity.EPIC, 7: Rarity.EPIC, 8: Rarity.LEGENDARY}

# Rank achievements pay coins only, so their reward cannot lift the rank again
RANK_COINS_PER_STEP = 25


def _build_catalog() -> list[AchievementDef]:
    catalog: list[AchievementDef] = []
    for days, name, rarity, xp, coins in _STREAKS:
        catalog.append(AchievementDef(
            id=f"streak_{days}", name=name,
            description=f"Complete workouts for {days} days in a row",
            category=AchievementType.STREAK, rarity=rarity,
            target=days, check_field="current_streak",
            xp_reward=xp, coin_reward=coins,
        ))
    for total, name, rarity, xp, coins in _VOLUME:
        catalog.append(AchievementDef(
            id=f"volume_{total}", name=name,
            description=f"Complete {total:,} total push-ups",
            category=AchievementType.VOLUME, rarity=rarity,
            target=total, check_field="total_pushups",
            xp_reward=xp, coin_reward=coins,
        ))
    for count, name, rarity, xp, coins in _GOALS:
        catalog.append(AchievementDef(
            id=f"consistency_{count}", name=name,
            description=f"Meet your daily goal {count} times",
            category=AchievementType.CONSISTENCY, rarity=rarity,
            target=count, check_field="goals_completed",
            xp_reward=xp, coin_reward=coins,
        ))
    for days, longest, name, rarity, xp, coins in _COMEBACKS:
        catalog.append(AchievementDef(
            id=f"comeback_{days}", name=name,
            description=f"Rebuild a {days} day streak after breaking it",
            category=AchievementType.COMEBACK, rarity=rarity,
            target=days, check_field="current_streak",
            xp_reward=xp, coin_reward=coins,
            also_requires={"longest_streak": longest},
        ))
    for count, name, rarity, xp, coins in _SESSIONS:
        catalog.append(AchievementDef(
            id=f"sessions_{count}", name=name,
            description="Complete your very first workout" if count == 1
            else f"Complete {count} total workouts",
            category=AchievementType.SESSIONS, rarity=rarity,
            target=count, check_field="total_workouts",
            xp_reward=xp, coin_reward=coins,
        ))
    for rank in RANKS[1:]:
        catalog.append(AchievementDef(
            id=f"rank_{rank['rank']}", name=rank["title"],
            description=f"Reach rank {rank['rank']}: {rank['title']}",
            category=AchievementType.RANK, rarity=_RANK_RARITY[rank["rank"]],
            target=rank["rank"], check_field="current_rank",
            coin_reward=RANK_COINS_PER_STEP * (rank["rank"] - 1),
        ))
    return catalog


ACHIEVEMENTS: list[AchievementDef] = _build_catalog()

_BY_ID: dict[str, AchievementDef] = {a.id: a for a in ACHIEVEMENTS}


def get_achievement(achievement_id: str) -> AchievementDef | None:
    return _BY_ID.get(achievement_id)


def build_stats(state: UserState) -> dict:
    """Build the stats dict achievement predicates read from a UserState.

    Keys match check_field values:
    - current_streak / longest_streak: int
    - total_pushups: lifetime push-ups
    - total_workouts: number of logged workouts
    - goals_completed: days on which the daily goal was reached
    - current_rank: rank number
    - personal_best: most push-ups in one workout
    - total_xp: int
    """
    return {
        "current_streak": state.current_streak,
        "longest_streak": state.longest_streak,
        "total_pushups": state.total_pushups,
        "total_workouts": len(state.workouts),
        "goals_completed": len({w.date for w in state.workouts if w.goal_completed}),
        "current_rank": state.current_rank,
        "personal_best": state.personal_best,
        "total_xp": state.total_xp,
    }


def _progress(achievement: AchievementDef, stats: dict) -> float:
    requirements = {achievement.check_field: achievement.target, **achievement.also_requires}
    ratios = [
        min(stats.get(key, 0) / target, 1.0) if target > 0 else 0.0
        for key, target in requirements.items()
    ]
    return max(0.0, min(ratios))


def check_achievements(stats: dict) -> list[AchievementStatus]:
    """Check all achievements against current stats.

    Progress is min(current/target, 1.0), taking the weakest requirement
    when an achievement has several.
    """
    results: list[AchievementStatus] = []
    for achievement in ACHIEVEMENTS:
        progress = _progress(achievement, stats)
        results.append(
            AchievementStatus(
                definition=achievement,
                progress=progress,
                unlocked=progress >= 1.0,
                unlocked_at=None,
            )
        )
    return results


def evaluate(state: UserState) -> list[str]:
    """Return ids of achievements satisfied by `state` but not yet unlocked.

    Evaluates the whole catalog every call; ids already in
    state.achievements are never returned again.
    """
    unlocked = {a.id for a in state.achievements}
    return [
        status.definition.id
        for status in check_achievements(build_stats(state))
        if status.unlocked and status.definition.id not in unlocked
    ]


def achievement_statuses(state: UserState) -> list[AchievementStatus]:
    """Statuses for display: stored unlocks win over the live predicate."""
    unlocked_at = {a.id: a.unlocked_at for a in state.achievements}
    statuses = check_achievements(build_stats(state))
    for status in statuses:
        when = unlocked_at.get(status.definition.id)
        if when is not None:
            status.unlocked = True
            status.progress = 1.0
            status.unlocked_at = when
        else:
            # A predicate that holds but has no stored unlock stays pending
            # until the next workout records it.
            status.unlocked = False
    return statuses


def get_closest_achievements(statuses: list[AchievementStatus], n: int = 3) -> list[AchievementStatus]:
    """Return the N achievements closest to being unlocked (highest progress < 1.0)."""
    in_progress = [s for s in statuses if not s.unlocked and s.progress < 1.0]
    in_progress.sort(key=lambda s: s.progress, reverse=True)
    return in_progress[:n]
