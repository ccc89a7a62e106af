from typing import Any, Dict, List, Optional, Sequence

from ..schemas import HOLES, Player, Team


class ValidationError(Exception):
    """Raised when submitted score data is invalid."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


def validate_hole_index(hole_index: Any) -> int:
    if isinstance(hole_index, bool) or not isinstance(hole_index, int):
        raise ValidationError("Hole index must be an integer.")
    if not 0 <= hole_index < HOLES:
        raise ValidationError(f"Hole index must be between 0 and {HOLES - 1}.")
    return hole_index


def validate_strokes(
    strokes: Any,
    *,
    max_strokes: Optional[int] = None,
) -> Optional[int]:
    """Validate a stroke entry; ``None`` clears the hole.

    Rules:
    - ``None`` is accepted and means "not yet entered"
    - Values must be integers (booleans are rejected)
    - Values must be >= 1 and, if ``max_strokes`` is set, <= ``max_strokes``
    """

    if strokes is None:
        return None

    # Reject booleans explicitly (bool is a subclass of int in Python)
    if isinstance(strokes, bool):
        raise ValidationError("Strokes must be an integer (not a boolean).")
    if not isinstance(strokes, int):
        raise ValidationError("Strokes must be an integer.")

    if strokes < 1:
        raise ValidationError("Strokes must be a positive integer.")
    if max_strokes is not None and strokes > max_strokes:
        raise ValidationError(f"Strokes must be <= {max_strokes}.")
    return strokes


def unassigned_players(players: Sequence[Player], teams: Sequence[Team]) -> List[str]:
    """Ids of players that are not on any team, in roster order."""
    assigned = {pid for team in teams for pid in team.playerIds}
    return [p.id for p in players if p.id not in assigned]


def validate_team_assignment(players: Sequence[Player], teams: Sequence[Team]) -> None:
    """Every player must be on exactly one team and every member must be known."""

    if not teams:
        raise ValidationError("Team formats require at least one team.")

    known = {p.id for p in players}
    seen_team_ids: set[str] = set()
    membership: Dict[str, str] = {}
    for team in teams:
        if team.id in seen_team_ids:
            raise ValidationError(f"Duplicate team id '{team.id}'.")
        seen_team_ids.add(team.id)
        if not team.playerIds:
            raise ValidationError(f"Team '{team.name}' has no players.")
        for pid in team.playerIds:
            if pid not in known:
                raise ValidationError(f"Team '{team.name}' lists unknown player '{pid}'.")
            if pid in membership:
                raise ValidationError(
                    f"Player '{pid}' is on more than one team "
                    f"('{membership[pid]}' and '{team.id}')."
                )
            membership[pid] = team.id
        if team.id in known:
            raise ValidationError(f"Team id '{team.id}' collides with a player id.")

    missing = unassigned_players(players, teams)
    if missing:
        raise ValidationError(
            "Players must be assigned to a team before the round starts: "
            + ", ".join(missing)
        )


def validate_match_sides(teams: Sequence[Team]) -> None:
    if len(teams) != 2:
        raise ValidationError("Match play requires exactly two sides.")
