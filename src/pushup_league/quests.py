"""Daily and weekly quests for pushup-league.

Quests are regenerated lazily: the first operation in a new day or week
drops the expired ones and creates the current period's set with zero
progress. Functions here return new lists and never mutate their input.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from datetime import date, timedelta
from enum import Enum

from pushup_league.errors import AlreadyClaimedError, NotCompletedError, NotFoundError

logger = logging.getLogger(__name__)

MULTI_SET_MINIMUM = 2


class QuestType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"


class QuestObjective(str, Enum):
    COMPLETE_DAYS = "complete_days"
    HIT_GOAL = "hit_goal"
    TOTAL_PUSHUPS = "total_pushups"
    MULTI_SET_WORKOUTS = "multi_set_workouts"


@dataclass
class Quest:
    id: str
    type: QuestType
    name: str
    description: str
    objective: QuestObjective
    target: int
    xp_reward: int
    coin_reward: int
    start_date: str  # YYYY-MM-DD, inclusive
    end_date: str  # YYYY-MM-DD, exclusive
    progress: int = 0
    claimed: bool = False

    @property
    def completed(self) -> bool:
        return self.progress >= self.target

    def is_active(self, today: str) -> bool:
        return self.start_date <= today < self.end_date

    def to_dict(self) -> dict:
        data = asdict(self)
        data["type"] = self.type.value
        data["objective"] = self.objective.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Quest:
        return cls(
            id=data["id"],
            type=QuestType(data["type"]),
            name=data["name"],
            description=data.get("description", ""),
            objective=QuestObjective(data["objective"]),
            target=int(data["target"]),
            xp_reward=int(data["xp_reward"]),
            coin_reward=int(data["coin_reward"]),
            start_date=data["start_date"],
            end_date=data["end_date"],
            progress=int(data.get("progress", 0)),
            claimed=bool(data.get("claimed", False)),
        )


def _shift(day: str, days: int) -> str:
    return (date.fromisoformat(day) + timedelta(days=days)).isoformat()


def week_start(day: str) -> str:
    """Return the Sunday on or before `day` (weeks start Sunday 00:00 local)."""
    d = date.fromisoformat(day)
    # date.weekday(): Monday=0 .. Sunday=6
    return (d - timedelta(days=(d.weekday() + 1) % 7)).isoformat()


def generate_daily_quests(day: str) -> list[Quest]:
    """Quests for a single calendar day."""
    end = _shift(day, 1)
    return [
        Quest(
            id=f"daily_goal_{day}",
            type=QuestType.DAILY,
            name="Goal Crusher",
            description="Complete your daily goal",
            objective=QuestObjective.HIT_GOAL,
            target=1,
            xp_reward=50,
            coin_reward=15,
            start_date=day,
            end_date=end,
        ),
        Quest(
            id=f"daily_sets_{day}",
            type=QuestType.DAILY,
            name="Set Builder",
            description=f"Log a workout with at least {MULTI_SET_MINIMUM} sets",
            objective=QuestObjective.MULTI_SET_WORKOUTS,
            target=1,
            xp_reward=30,
            coin_reward=10,
            start_date=day,
            end_date=end,
        ),
    ]


def generate_weekly_quests(start: str) -> list[Quest]:
    """Quests for the week beginning on `start` (a Sunday)."""
    end = _shift(start, 7)
    return [
        Quest(
            id=f"weekly_consistency_{start}",
            type=QuestType.WEEKLY,
            name="Consistent Warrior",
            description="Complete 5 logged days this week",
            objective=QuestObjective.COMPLETE_DAYS,
            target=5,
            xp_reward=200,
            coin_reward=50,
            start_date=start,
            end_date=end,
        ),
        Quest(
            id=f"weekly_volume_{start}",
            type=QuestType.WEEKLY,
            name="Volume Beast",
            description="Complete 300 total push-ups this week",
            objective=QuestObjective.TOTAL_PUSHUPS,
            target=300,
            xp_reward=250,
            coin_reward=60,
            start_date=start,
            end_date=end,
        ),
        Quest(
            id=f"weekly_multiset_{start}",
            type=QuestType.WEEKLY,
            name="Set Specialist",
            description=f"Log 3 workouts with at least {MULTI_SET_MINIMUM} sets each",
            objective=QuestObjective.MULTI_SET_WORKOUTS,
            target=3,
            xp_reward=150,
            coin_reward=40,
            start_date=start,
            end_date=end,
        ),
    ]


def refresh_quests(quests: list[Quest], today: str) -> list[Quest]:
    """Drop quests whose period is over and add the current period's quests."""
    active = [q for q in quests if q.is_active(today)]
    expired = len(quests) - len(active)
    if expired:
        logger.debug("dropped %d expired quests", expired)

    known = {q.id for q in active}
    for quest in generate_daily_quests(today) + generate_weekly_quests(week_start(today)):
        if quest.id not in known:
            active.append(quest)
    return active


def _increment(quest: Quest, pushups: int, sets: int | None, first_of_day: bool, goal_reached: bool) -> int:
    if quest.objective is QuestObjective.COMPLETE_DAYS:
        return 1 if first_of_day else 0
    if quest.objective is QuestObjective.HIT_GOAL:
        return 1 if goal_reached else 0
    if quest.objective is QuestObjective.TOTAL_PUSHUPS:
        return pushups
    if quest.objective is QuestObjective.MULTI_SET_WORKOUTS:
        return 1 if sets is not None and sets >= MULTI_SET_MINIMUM else 0
    return 0


def record_workout(
    quests: list[Quest],
    pushups: int,
    sets: int | None = None,
    first_of_day: bool = False,
    goal_reached: bool = False,
    day: str | None = None,
) -> list[Quest]:
    """Advance quest progress for one logged workout.

    first_of_day: this is the first workout on its date.
    goal_reached: this workout took the day's total over the daily goal.
    day: the workout's date; quests whose period does not contain it are
    left alone. None advances every quest.
    Claimed quests are left as they are.
    """
    updated: list[Quest] = []
    for quest in quests:
        counts = not quest.claimed and (day is None or quest.is_active(day))
        step = _increment(quest, pushups, sets, first_of_day, goal_reached) if counts else 0
        updated.append(replace(quest, progress=quest.progress + step) if step else quest)
    return updated


def claim_quest(quests: list[Quest], quest_id: str) -> tuple[list[Quest], Quest]:
    """Mark a completed quest as claimed.

    Returns the new quest list and the claimed quest. Raises NotFoundError,
    AlreadyClaimedError or NotCompletedError; the input list is unchanged
    either way.
    """
    quest = next((q for q in quests if q.id == quest_id), None)
    if quest is None:
        raise NotFoundError("Quest not found!")
    if quest.claimed:
        raise AlreadyClaimedError("Reward already claimed!")
    if not quest.completed:
        raise NotCompletedError(
            f"Quest not completed yet! ({quest.progress}/{quest.target})"
        )

    claimed = replace(quest, claimed=True)
    return [claimed if q.id == quest_id else q for q in quests], claimed
