"""Match play status derived from the per-hole ``matchResult`` map."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from ..schemas import HOLES, TIE, Round, Team


@dataclass
class MatchTally:
    team_a: Team
    team_b: Team
    wins: Dict[str, int] = field(default_factory=dict)
    ties: int = 0
    holes_played: int = 0
    # Set when one side led by more than the holes left to play.
    decided_margin: Optional[int] = None
    decided_remaining: Optional[int] = None
    decided_leader: Optional[Team] = None

    @property
    def holes_remaining(self) -> int:
        return HOLES - self.holes_played

    @property
    def margin(self) -> int:
        return abs(self.wins[self.team_a.id] - self.wins[self.team_b.id])

    @property
    def leader(self) -> Optional[Team]:
        a, b = self.wins[self.team_a.id], self.wins[self.team_b.id]
        if a > b:
            return self.team_a
        if b > a:
            return self.team_b
        return None

    @property
    def decided_early(self) -> bool:
        return self.decided_leader is not None


def match_tally(round_: Round) -> Optional[MatchTally]:
    """Count hole wins for a two-sided match, walking holes in order.

    Returns ``None`` when the round does not have exactly two sides.
    """
    if len(round_.teams) != 2:
        return None
    team_a, team_b = round_.teams
    tally = MatchTally(team_a=team_a, team_b=team_b, wins={team_a.id: 0, team_b.id: 0})
    for hole_index in sorted(round_.matchResult):
        winner = round_.matchResult[hole_index]
        if winner == TIE:
            tally.ties += 1
        elif winner in tally.wins:
            tally.wins[winner] += 1
        else:
            continue
        tally.holes_played += 1
        if (
            not tally.decided_early
            and tally.holes_remaining > 0
            and tally.margin > tally.holes_remaining
        ):
            tally.decided_leader = tally.leader
            tally.decided_margin = tally.margin
            tally.decided_remaining = tally.holes_remaining
    return tally


def _decided_text(tally: MatchTally) -> str:
    return (
        f"{tally.decided_leader.name} won "
        f"{tally.decided_margin}&{tally.decided_remaining}"
    )


def match_status(round_: Round) -> str:
    """Live status line, e.g. ``"Team A 2 UP"`` or ``"All Square"``."""
    tally = match_tally(round_)
    if tally is None:
        return "Match Play"
    if tally.decided_early:
        return _decided_text(tally)
    leader = tally.leader
    if leader is None:
        return "All Square"
    return f"{leader.name} {tally.margin} UP"


def relative_status(round_: Round, team_id: str) -> str:
    """Status from one side's point of view: ``"2 UP"``, ``"1 DOWN"`` or ``"AS"``."""
    tally = match_tally(round_)
    if tally is None or team_id not in tally.wins:
        return "AS"
    other = tally.team_b.id if team_id == tally.team_a.id else tally.team_a.id
    diff = tally.wins[team_id] - tally.wins[other]
    if diff > 0:
        return f"{diff} UP"
    if diff < 0:
        return f"{-diff} DOWN"
    return "AS"


def final_match_text(round_: Round) -> str:
    tally = match_tally(round_)
    if tally is None:
        return "Match Incomplete"
    if tally.decided_early:
        return _decided_text(tally)
    if tally.holes_played == HOLES:
        leader = tally.leader
        if leader is None:
            return "Match Tied"
        return f"{leader.name} won {tally.margin} UP"
    return "Match Incomplete"
