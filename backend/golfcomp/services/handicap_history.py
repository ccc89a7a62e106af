"""Simplified handicap index from a player's recent rounds.

This is not the official USGA calculation: the differential is just gross
minus par, without course rating or slope.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional

from ..schemas import Round
from .summary import is_complete

MIN_ROUNDS = 5
RECENT_ROUNDS = 20
MAX_COUNTING = 8
BONUS_FACTOR = 0.96


def recent_rounds(
    rounds: Iterable[Round], player_id: str, limit: int = RECENT_ROUNDS
) -> List[Round]:
    """The player's completed rounds, newest first, capped at ``limit``."""
    played = [r for r in rounds if is_complete(r.scores.get(player_id))]
    played.sort(key=lambda r: r.playedAt, reverse=True)
    return played[:limit]


def differential(round_: Round, player_id: str) -> int:
    sheet = round_.scores[player_id]
    total = sum(h.strokes or 0 for h in sheet)
    par = sum(h.par for h in sheet)
    return total - par


def estimate_handicap_index(rounds: Iterable[Round], player_id: str) -> Optional[float]:
    """Average of the best differentials, scaled by 0.96 and floored to 0.1.

    Returns ``None`` with fewer than five rounds on record.
    """
    recent = recent_rounds(rounds, player_id)
    if len(recent) < MIN_ROUNDS:
        return None
    diffs = sorted(differential(r, player_id) for r in recent)
    counting = min(MAX_COUNTING, math.floor(len(diffs) / 2.5))
    if counting < 1:
        return None
    best = diffs[:counting]
    average = sum(best) / len(best)
    # Trim float noise before flooring.
    return math.floor(round(average * BONUS_FACTOR * 10, 9)) / 10


def format_handicap_index(value: Optional[float]) -> str:
    """``"N/A"``, ``"12.4"``, or ``"+2.0"`` for a plus (negative) index."""
    if value is None:
        return "N/A"
    if value < 0:
        return f"+{-value:.1f}"
    return f"{value:.1f}"
