"""Round-end summaries: rankings, winners, match result text and skins totals."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from ..schemas import (
    HOLES,
    RESULT_UNIT,
    Course,
    GameFormat,
    HoleScore,
    RankingEntryOut,
    Round,
    RoundSummaryOut,
    ScoringUnit,
    SkinsSummaryEntryOut,
    SkinsSummaryOut,
)
from ..scoring.formats import courses_by_id, id_sort_key, player_course, team_course
from ..scoring.handicap import player_course_handicap, strokes_for_hole, team_course_handicap
from ..scoring.match_play import final_match_text, match_tally
from ..scoring.skins import skins_participants

logger = logging.getLogger(__name__)


def format_to_par(value: int) -> str:
    if value == 0:
        return "E"
    return f"+{value}" if value > 0 else str(value)


def shared_ranks(values: Sequence[float]) -> List[int]:
    """Standard competition ranking over ascending ``values`` (1, 1, 3)."""
    ranks: List[int] = []
    for i, value in enumerate(values):
        if i and value == values[i - 1]:
            ranks.append(ranks[-1])
        else:
            ranks.append(i + 1)
    return ranks


def is_complete(sheet: Optional[Sequence[HoleScore]]) -> bool:
    return bool(sheet) and len(sheet) == HOLES and all(h.strokes is not None for h in sheet)


def _ranked(entries: List[dict]) -> List[RankingEntryOut]:
    entries.sort(key=lambda e: (e["toPar"], id_sort_key(e["entityId"])))
    ranks = shared_ranks([e["toPar"] for e in entries])
    return [
        RankingEntryOut(rank=rank, toParDisplay=format_to_par(e["toPar"]), **e)
        for rank, e in zip(ranks, entries)
    ]


def stroke_play_results(round_: Round, courses: Iterable[Course]) -> List[RankingEntryOut]:
    """Net-to-par ranking of players with a complete 18-hole sheet."""
    lookup = courses_by_id(courses)
    entries: List[dict] = []
    for player in round_.players:
        sheet = round_.scores.get(player.id)
        if not is_complete(sheet):
            continue
        course = player_course(round_, player, lookup)
        if course is None:
            logger.warning(
                "Course %r missing; leaving player %s out of the ranking",
                round_.course_id_for(player),
                player.id,
            )
            continue
        course_hcp = player_course_handicap(player, course)
        total_gross = sum(h.strokes for h in sheet)
        allowance = sum(strokes_for_hole(course_hcp, idx) for idx in course.handicapIndices)
        total_net = total_gross - allowance
        total_par = sum(h.par for h in sheet)
        entries.append(
            {
                "entityId": player.id,
                "name": player.name or player.id,
                "courseName": course.name,
                "totalGross": total_gross,
                "totalNet": total_net,
                "toPar": total_net - total_par,
            }
        )
    return _ranked(entries)


def team_results(round_: Round, courses: Iterable[Course]) -> List[RankingEntryOut]:
    """Composite-score ranking for Scramble, Best Ball and Shamble teams."""
    lookup = courses_by_id(courses)
    primary = lookup.get(round_.courseId)
    entries: List[dict] = []
    for team in round_.teams:
        sheet = round_.scores.get(team.id)
        if not is_complete(sheet):
            continue
        course = team_course(round_, team, lookup) or primary
        total_gross = sum(h.strokes for h in sheet)
        total_par = sum(h.par for h in sheet)
        if round_.gameFormat == GameFormat.SCRAMBLE:
            members = [p for p in (round_.player(pid) for pid in team.playerIds) if p]
            team_hcp = team_course_handicap(members, lookup, primary)
            if team_hcp is None or course is None:
                logger.warning("Cannot net scramble team %s; using gross", team.id)
                total_net = total_gross
            else:
                total_net = total_gross - sum(
                    strokes_for_hole(team_hcp, idx) for idx in course.handicapIndices
                )
            to_par = total_net - total_par
        else:
            # The best-net selection already applied the handicap.
            total_net = sum(
                h.netStrokes if h.netStrokes is not None else h.strokes for h in sheet
            )
            to_par = total_gross - total_par
        entries.append(
            {
                "entityId": team.id,
                "name": team.name,
                "courseName": course.name if course else "",
                "totalGross": total_gross,
                "totalNet": total_net,
                "toPar": to_par,
            }
        )
    return _ranked(entries)


def round_ranking(round_: Round, courses: Iterable[Course]) -> List[RankingEntryOut]:
    if round_.gameFormat == GameFormat.MATCH_PLAY:
        return []
    if RESULT_UNIT[round_.gameFormat] == ScoringUnit.TEAM and round_.teams:
        return team_results(round_, courses)
    return stroke_play_results(round_, courses)


def round_winners(round_: Round, ranking: Sequence[RankingEntryOut]) -> List[str]:
    """Entities tied for the best result, or the match winner."""
    if round_.gameFormat == GameFormat.MATCH_PLAY:
        tally = match_tally(round_)
        if tally is None or tally.leader is None:
            return []
        if tally.decided_early or tally.holes_played == HOLES:
            return [tally.leader.id]
        return []
    return [entry.entityId for entry in ranking if entry.rank == 1]


def _participant_name(round_: Round, entity_id: str) -> str:
    team = round_.team(entity_id)
    if team is not None:
        return team.name
    player = round_.player(entity_id)
    return (player.name if player else "") or entity_id


def skins_summary(round_: Round) -> Optional[SkinsSummaryOut]:
    """Total pot value and skins count per skins winner, richest first."""
    if not round_.skins_enabled:
        return None
    participants = skins_participants(round_)
    totals: Dict[str, float] = {pid: 0.0 for pid in participants}
    counts: Dict[str, int] = {pid: 0 for pid in participants}
    for result in round_.skinsResult:
        if result.winnerId and result.winnerId in totals:
            totals[result.winnerId] += result.value
            counts[result.winnerId] += 1

    winners = [pid for pid in participants if counts[pid]]
    ordered = sorted(winners, key=lambda pid: -totals[pid])
    ledger = round_.skinsResult
    final_carryover = ledger[-1].value if len(ledger) == HOLES and ledger[-1].carriedOver else 0.0
    return SkinsSummaryOut(
        entries=[
            SkinsSummaryEntryOut(
                entityId=pid,
                name=_participant_name(round_, pid),
                totalValue=totals[pid],
                skinsCount=counts[pid],
            )
            for pid in ordered
        ],
        finalCarryover=final_carryover,
    )


def summarize_round(round_: Round, courses: Iterable[Course]) -> RoundSummaryOut:
    courses = list(courses)
    ranking = round_ranking(round_, courses)
    return RoundSummaryOut(
        roundId=round_.id,
        gameFormat=round_.gameFormat,
        ranking=ranking,
        winnerIds=round_winners(round_, ranking),
        matchResultText=(
            final_match_text(round_) if round_.gameFormat == GameFormat.MATCH_PLAY else None
        ),
        skins=skins_summary(round_),
    )
