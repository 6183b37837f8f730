"""Plausibility checks for logged workouts.

Anomalous workouts are still accepted but carry human-readable warnings.
Only a workout beyond the 24-hour world record is rejected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pushup_league.goals import get_proficiency

MOST_IN_24_HOURS = 46001
SPIKE_FACTOR = 3
EXTREME_SPIKE_FACTOR = 5
# Spike detection needs more than a week of history
SPIKE_HISTORY = 7


class Suspicion(str, Enum):
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    EXTREME = "extreme"


@dataclass
class IntegrityCheck:
    suspicion: Suspicion = Suspicion.NONE
    warnings: list[str] = field(default_factory=list)
    world_record_territory: bool = False

    @property
    def is_valid(self) -> bool:
        return self.suspicion is not Suspicion.EXTREME


def check_integrity(proficiency: str, pushups: int, history: list[int]) -> IntegrityCheck:
    """Check one workout against the user's level, world records and history.

    history holds push-up counts of previous workouts, oldest first.
    """
    level = get_proficiency(proficiency)
    _, capacity = level["daily_capacity"]
    check = IntegrityCheck()

    if pushups > capacity * 2:
        check.warnings.append(
            f"Daily volume ({pushups}) far exceeds expected capacity for {level['label']} level"
        )
        check.suspicion = Suspicion.HIGH
    elif pushups > capacity:
        check.warnings.append(f"Daily volume is above typical {level['label']} capacity")
        check.suspicion = Suspicion.LOW

    if pushups > MOST_IN_24_HOURS * 0.5:
        check.warnings.append("Approaching 50% of 24-hour world record")
        check.world_record_territory = True
        check.suspicion = Suspicion.HIGH

    if pushups > MOST_IN_24_HOURS:
        check.warnings.append("Exceeds the 24-hour world record")
        check.suspicion = Suspicion.EXTREME

    if len(history) > SPIKE_HISTORY:
        recent = history[-SPIKE_HISTORY:]
        average = sum(recent) / len(recent)
        if average > 0 and pushups > average * SPIKE_FACTOR:
            check.warnings.append(f"Unusual spike: {SPIKE_FACTOR}x your recent average")
            if check.suspicion is Suspicion.NONE:
                check.suspicion = Suspicion.MEDIUM
        if average > 0 and pushups > average * EXTREME_SPIKE_FACTOR:
            check.warnings.append(f"Extreme spike: {EXTREME_SPIKE_FACTOR}x your recent average")
            if check.suspicion is not Suspicion.EXTREME:
                check.suspicion = Suspicion.HIGH

    return check
