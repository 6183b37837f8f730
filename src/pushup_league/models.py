"""Progression aggregate and its records.

Everything here serializes to a flat JSON-compatible dict: dates as
YYYY-MM-DD strings, timestamps as ISO strings, numbers as ints/floats.
"""

from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field

from pushup_league.goals import DEFAULT_PROFICIENCY
from pushup_league.quests import Quest

DEFAULT_USERNAME = "Champion"
STARTING_STREAK_FREEZES = 1


@dataclass(frozen=True)
class Workout:
    """One logged session. Never mutated after creation."""

    id: str
    date: str  # YYYY-MM-DD
    pushups: int
    sets: int | None
    xp_earned: int
    coins_earned: int
    streak_multiplier: float
    challenge_bonus: bool
    goal_completed: bool = False

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> Workout:
        sets = data.get("sets")
        return cls(
            id=data["id"],
            date=data["date"],
            pushups=int(data["pushups"]),
            sets=int(sets) if sets is not None else None,
            xp_earned=int(data["xp_earned"]),
            coins_earned=int(data.get("coins_earned", 0)),
            streak_multiplier=float(data.get("streak_multiplier", 1.0)),
            challenge_bonus=bool(data.get("challenge_bonus", False)),
            goal_completed=bool(data.get("goal_completed", False)),
        )


@dataclass(frozen=True)
class UnlockedAchievement:
    id: str
    unlocked_at: str  # ISO timestamp

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> UnlockedAchievement:
        return cls(id=data["id"], unlocked_at=data["unlocked_at"])


@dataclass
class UserState:
    """Progression aggregate for one user.

    current_rank is derived from total_xp and is only written by the store.
    """

    user_id: str
    username: str = DEFAULT_USERNAME
    proficiency: str = DEFAULT_PROFICIENCY
    total_xp: int = 0
    coins: int = 0
    current_rank: int = 1
    current_streak: int = 0
    longest_streak: int = 0
    last_workout_date: str | None = None
    streak_freezes: int = STARTING_STREAK_FREEZES
    freeze_armed: bool = False
    personal_best: int = 0
    total_pushups: int = 0
    workouts: list[Workout] = field(default_factory=list)
    achievements: list[UnlockedAchievement] = field(default_factory=list)
    quests: list[Quest] = field(default_factory=list)

    @classmethod
    def new(cls, username: str = DEFAULT_USERNAME, proficiency: str = DEFAULT_PROFICIENCY) -> UserState:
        """Fresh aggregate with zero progress."""
        return cls(user_id=uuid.uuid4().hex, username=username, proficiency=proficiency)

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "username": self.username,
            "proficiency": self.proficiency,
            "total_xp": self.total_xp,
            "coins": self.coins,
            "current_rank": self.current_rank,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "last_workout_date": self.last_workout_date,
            "streak_freezes": self.streak_freezes,
            "freeze_armed": self.freeze_armed,
            "personal_best": self.personal_best,
            "total_pushups": self.total_pushups,
            "workouts": [w.to_dict() for w in self.workouts],
            "achievements": [a.to_dict() for a in self.achievements],
            "quests": [q.to_dict() for q in self.quests],
        }

    @classmethod
    def from_dict(cls, data: dict) -> UserState:
        return cls(
            user_id=data["user_id"],
            username=data.get("username", DEFAULT_USERNAME),
            proficiency=data.get("proficiency", DEFAULT_PROFICIENCY),
            total_xp=int(data.get("total_xp", 0)),
            coins=int(data.get("coins", 0)),
            current_rank=int(data.get("current_rank", 1)),
            current_streak=int(data.get("current_streak", 0)),
            longest_streak=int(data.get("longest_streak", 0)),
            last_workout_date=data.get("last_workout_date"),
            streak_freezes=int(data.get("streak_freezes", STARTING_STREAK_FREEZES)),
            freeze_armed=bool(data.get("freeze_armed", False)),
            personal_best=int(data.get("personal_best", 0)),
            total_pushups=int(data.get("total_pushups", 0)),
            workouts=[Workout.from_dict(w) for w in data.get("workouts", [])],
            achievements=[UnlockedAchievement.from_dict(a) for a in data.get("achievements", [])],
            quests=[Quest.from_dict(q) for q in data.get("quests", [])],
        )
