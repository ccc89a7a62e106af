"""Competition leaderboards folded from many rounds."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from ..schemas import (
    HOLES,
    CompetitionLeaderboardOut,
    Course,
    GameFormat,
    LeaderboardEntryOut,
    MatchStandingOut,
    Player,
    Round,
    Team,
)
from ..scoring.formats import id_sort_key
from ..scoring.match_play import match_tally
from .summary import format_to_par, shared_ranks, stroke_play_results, team_results


def _default_stats() -> dict[str, int]:
    return {"rounds_played": 0, "total_to_par": 0}


def _default_match_stats() -> dict[str, int]:
    return {"matches_played": 0, "wins": 0, "losses": 0, "halves": 0}


def _leaders(
    stats: Dict[str, dict[str, int]], names: Dict[str, str]
) -> List[LeaderboardEntryOut]:
    ordered = sorted(
        stats, key=lambda eid: (stats[eid]["total_to_par"], id_sort_key(eid))
    )
    ranks = shared_ranks([stats[eid]["total_to_par"] for eid in ordered])
    return [
        LeaderboardEntryOut(
            rank=rank,
            entityId=eid,
            name=names.get(eid) or eid,
            roundsPlayed=stats[eid]["rounds_played"],
            totalToPar=stats[eid]["total_to_par"],
            toParDisplay=format_to_par(stats[eid]["total_to_par"]),
        )
        for rank, eid in zip(ranks, ordered)
    ]


def stroke_play_leaderboard(
    rounds: Iterable[Round],
    courses: Sequence[Course],
    participant_ids: Sequence[str],
    players: Sequence[Player] = (),
) -> List[LeaderboardEntryOut]:
    """Rank players by total net-to-par over their completed rounds."""
    rounds = list(rounds)
    names = {p.id: p.name for p in players}
    ids = list(participant_ids) or sorted(
        {p.id for r in rounds for p in r.players}, key=id_sort_key
    )
    stats = {pid: _default_stats() for pid in ids}
    for round_ in rounds:
        for player in round_.players:
            names.setdefault(player.id, player.name)
        for entry in stroke_play_results(round_, courses):
            if entry.entityId not in stats:
                continue
            stats[entry.entityId]["total_to_par"] += entry.toPar
            stats[entry.entityId]["rounds_played"] += 1
    return _leaders(stats, names)


def team_leaderboard(
    rounds: Iterable[Round],
    courses: Sequence[Course],
    teams: Sequence[Team] = (),
) -> List[LeaderboardEntryOut]:
    """Rank teams by total composite score-to-par over their completed rounds."""
    rounds = list(rounds)
    names = {t.id: t.name for t in teams}
    ids = [t.id for t in teams] or sorted(
        {t.id for r in rounds for t in r.teams}, key=id_sort_key
    )
    stats = {tid: _default_stats() for tid in ids}
    for round_ in rounds:
        for team in round_.teams:
            names.setdefault(team.id, team.name)
        for entry in team_results(round_, courses):
            if entry.entityId not in stats:
                continue
            stats[entry.entityId]["total_to_par"] += entry.toPar
            stats[entry.entityId]["rounds_played"] += 1
    return _leaders(stats, names)


def match_play_standings(
    rounds: Iterable[Round], teams: Sequence[Team] = ()
) -> List[MatchStandingOut]:
    """Win/loss/halve standings from completed matches (1 point a win, 0.5 a half)."""
    names = {t.id: t.name for t in teams}
    stats: Dict[str, dict[str, int]] = {t.id: _default_match_stats() for t in teams}
    for round_ in rounds:
        tally = match_tally(round_)
        if tally is None:
            continue
        if not (tally.decided_early or tally.holes_played == HOLES):
            continue
        leader = tally.decided_leader if tally.decided_early else tally.leader
        for side in (tally.team_a, tally.team_b):
            names.setdefault(side.id, side.name)
            side_stats = stats.setdefault(side.id, _default_match_stats())
            side_stats["matches_played"] += 1
            if leader is None:
                side_stats["halves"] += 1
            elif leader.id == side.id:
                side_stats["wins"] += 1
            else:
                side_stats["losses"] += 1

    def points(tid: str) -> float:
        return stats[tid]["wins"] + 0.5 * stats[tid]["halves"]

    ordered = sorted(stats, key=lambda tid: (-points(tid), id_sort_key(tid)))
    ranks = shared_ranks([-points(tid) for tid in ordered])
    return [
        MatchStandingOut(
            rank=rank,
            teamId=tid,
            name=names.get(tid) or tid,
            matchesPlayed=stats[tid]["matches_played"],
            wins=stats[tid]["wins"],
            losses=stats[tid]["losses"],
            halves=stats[tid]["halves"],
            points=points(tid),
        )
        for rank, tid in zip(ranks, ordered)
    ]


def build_competition_leaderboard(
    game_format: GameFormat,
    rounds: Iterable[Round],
    courses: Sequence[Course],
    *,
    participant_ids: Sequence[str] = (),
    players: Sequence[Player] = (),
    teams: Sequence[Team] = (),
    competition_id: Optional[str] = None,
) -> CompetitionLeaderboardOut:
    rounds = [
        r
        for r in rounds
        if r.gameFormat == game_format
        and (competition_id is None or r.competitionId == competition_id)
    ]
    if game_format == GameFormat.MATCH_PLAY:
        standings = match_play_standings(rounds, teams)
        return CompetitionLeaderboardOut(
            gameFormat=game_format, standings=standings, total=len(standings)
        )
    if game_format == GameFormat.STROKE_PLAY:
        leaders = stroke_play_leaderboard(rounds, courses, participant_ids, players)
    else:
        leaders = team_leaderboard(rounds, courses, teams)
    return CompetitionLeaderboardOut(
        gameFormat=game_format, leaders=leaders, total=len(leaders)
    )
