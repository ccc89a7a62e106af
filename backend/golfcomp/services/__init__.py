"""Internal application services (pure helpers, no I/O)."""

from .validation import (
    ValidationError,
    unassigned_players,
    validate_strokes,
    validate_team_assignment,
)
from .summary import format_to_par, summarize_round, skins_summary
from .leaderboard import build_competition_leaderboard
from .handicap_history import estimate_handicap_index, format_handicap_index

__all__ = [
    "ValidationError",
    "unassigned_players",
    "validate_strokes",
    "validate_team_assignment",
    "format_to_par",
    "summarize_round",
    "skins_summary",
    "build_competition_leaderboard",
    "estimate_handicap_index",
    "format_handicap_index",
]
