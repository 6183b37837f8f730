"""Rank ladder and rank progression. Pure functions, no side effects."""

import math

MAX_RANK = 8

RANKS: list[dict] = [
    {"rank": 1, "title": "Initiate", "xp_required": 500, "cumulative_xp": 500, "color": "bronze"},
    {"rank": 2, "title": "Iron Hand", "xp_required": 1500, "cumulative_xp": 2000, "color": "silver"},
    {"rank": 3, "title": "Vanguard", "xp_required": 3000, "cumulative_xp": 5000, "color": "gold"},
    {"rank": 4, "title": "Centurion", "xp_required": 5000, "cumulative_xp": 10000, "color": "teal"},
    {"rank": 5, "title": "Titan", "xp_required": 8000, "cumulative_xp": 18000, "color": "diamond"},
    {"rank": 6, "title": "Ascendant", "xp_required": 12000, "cumulative_xp": 30000, "color": "purple"},
    {"rank": 7, "title": "Mythic", "xp_required": 18000, "cumulative_xp": 48000, "color": "crimson"},
    {"rank": 8, "title": "Immortal", "xp_required": 25000, "cumulative_xp": 73000, "color": "legendary"},
]


def get_rank(rank: int) -> dict:
    """Return the ladder entry for a rank number, clamped to 1..MAX_RANK."""
    rank = max(1, min(rank, MAX_RANK))
    return RANKS[rank - 1]


def resolve_rank(total_xp: int) -> dict:
    """Return the highest rank whose cumulative threshold is <= total_xp.

    Tier 1 is returned for anything below the first threshold.
    """
    current = RANKS[0]
    for rank in RANKS:
        if total_xp >= rank["cumulative_xp"]:
            current = rank
    return current


def rank_progress(total_xp: int) -> dict:
    """Return {current, required, percent} toward the next rank.

    current is XP earned past the previous rank's cumulative threshold and
    required is the next rank's xp_required. At the final rank both equal
    its xp_required and percent is 100.
    """
    rank = resolve_rank(total_xp)["rank"]
    if rank >= MAX_RANK:
        final = RANKS[-1]["xp_required"]
        return {"current": final, "required": final, "percent": 100}

    previous_xp = RANKS[rank - 2]["cumulative_xp"] if rank > 1 else 0
    current = total_xp - previous_xp
    required = RANKS[rank]["xp_required"]
    percent = max(0, min(100, math.floor(current / required * 100)))
    return {"current": current, "required": required, "percent": percent}


def xp_to_next_rank(total_xp: int) -> int:
    """XP still needed to cross the next rank's cumulative threshold (0 at max)."""
    rank = resolve_rank(total_xp)["rank"]
    if rank >= MAX_RANK:
        return 0
    return max(0, RANKS[rank]["cumulative_xp"] - total_xp)
