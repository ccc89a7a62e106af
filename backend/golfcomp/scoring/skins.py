"""Skins ledger with carryover.

The ledger is always rebuilt from the full score set, so corrected or
backfilled holes re-flow through the carryover chain.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from ..schemas import (
    BEST_BALL_FORMATS,
    HOLES,
    SKINS_TEAM_FORMATS,
    Course,
    GameFormat,
    Round,
    SkinResult,
    ScoringUnit,
)
from .formats import (
    MemberScore,
    best_member,
    courses_by_id,
    player_course,
    posted_strokes,
    team_course,
)
from .handicap import net_strokes, strokes_for_hole, team_course_handicap

logger = logging.getLogger(__name__)


def skins_unit(round_: Round) -> ScoringUnit:
    if round_.gameFormat in SKINS_TEAM_FORMATS and round_.teams:
        return ScoringUnit.TEAM
    return ScoringUnit.PLAYER


def skins_participants(round_: Round) -> List[str]:
    if skins_unit(round_) == ScoringUnit.TEAM:
        return [t.id for t in round_.teams]
    return [p.id for p in round_.players]


def initial_ledger(skin_value: float) -> List[SkinResult]:
    return [
        SkinResult(holeIndex=i, winnerId=None, value=skin_value, carriedOver=False)
        for i in range(HOLES)
    ]


def _participant_course_id(round_: Round, participant_id: str) -> str:
    if skins_unit(round_) == ScoringUnit.TEAM:
        team = round_.team(participant_id)
        first = round_.player(team.playerIds[0]) if team and team.playerIds else None
    else:
        first = round_.player(participant_id)
    return round_.course_id_for(first) if first else round_.courseId


def group_by_course(round_: Round, participant_ids: Iterable[str]) -> Dict[str, List[str]]:
    """Map course id to the participants competing for skins on that course."""
    groups: Dict[str, List[str]] = {}
    for pid in participant_ids:
        groups.setdefault(_participant_course_id(round_, pid), []).append(pid)
    return groups


def _player_value(
    round_: Round, player_id: str, hole_index: int, courses: Dict[str, Course], net: bool
) -> Optional[int]:
    gross = posted_strokes(round_, player_id, hole_index)
    if gross is None or not net:
        return gross
    player = round_.player(player_id)
    course = player_course(round_, player, courses) if player else None
    if player is None or course is None:
        logger.warning(
            "Net skins for %r in round %s fall back to gross; reference data missing",
            player_id,
            round_.id,
        )
        return gross
    return net_strokes(gross, player, course, hole_index)


def _scramble_value(
    round_: Round,
    team_id: str,
    hole_index: int,
    courses: Dict[str, Course],
    primary: Course,
    net: bool,
) -> Optional[int]:
    gross = posted_strokes(round_, team_id, hole_index)
    if gross is None or not net:
        return gross
    team = round_.team(team_id)
    members = [p for p in (round_.player(pid) for pid in team.playerIds) if p] if team else []
    team_hcp = team_course_handicap(members, courses, primary)
    if team_hcp is None:
        return gross
    course = (team_course(round_, team, courses) if team else None) or primary
    return gross - strokes_for_hole(team_hcp, course.handicapIndices[hole_index])


def _best_ball_value(
    round_: Round, team_id: str, hole_index: int, courses: Dict[str, Course], net: bool
) -> Optional[int]:
    team = round_.team(team_id)
    if team is None:
        return None
    scores: List[MemberScore] = []
    for pid in team.playerIds:
        gross = posted_strokes(round_, pid, hole_index)
        if gross is None:
            continue
        member_net = _player_value(round_, pid, hole_index, courses, net=True)
        scores.append(MemberScore(pid, gross, member_net))
    best = best_member(scores)
    if best is None:
        return None
    return best.net if net else best.gross


def hole_value(
    round_: Round,
    participant_id: str,
    hole_index: int,
    courses: Dict[str, Course],
    primary: Course,
) -> Optional[int]:
    """The score a participant competes with for one hole's skin."""
    net = round_.skinsScoringType == "net"
    if skins_unit(round_) == ScoringUnit.TEAM:
        if round_.gameFormat == GameFormat.SCRAMBLE:
            return _scramble_value(round_, participant_id, hole_index, courses, primary, net)
        if round_.gameFormat in BEST_BALL_FORMATS:
            return _best_ball_value(round_, participant_id, hole_index, courses, net)
    return _player_value(round_, participant_id, hole_index, courses, net)


def compute_skins(round_: Round, courses: Iterable[Course]) -> List[SkinResult]:
    """Rebuild the 18-hole skins ledger for ``round_``.

    Returns an empty list when skins are disabled. When the round's primary
    course is unknown the previous ledger is returned unchanged.
    """
    if not round_.skins_enabled:
        return []

    lookup = courses_by_id(courses)
    primary = lookup.get(round_.courseId)
    if primary is None:
        logger.warning(
            "Primary course %r missing for round %s; keeping skins ledger",
            round_.courseId,
            round_.id,
        )
        return [r.model_copy() for r in round_.skinsResult]

    base = round_.skinValue or 0
    participants = skins_participants(round_)
    groups = group_by_course(round_, participants)

    ledger: List[SkinResult] = []
    carryover = 0.0
    for hole_index in range(HOLES):
        pot = base + carryover
        values = {
            pid: hole_value(round_, pid, hole_index, lookup, primary)
            for pid in participants
        }

        if any(v is None for v in values.values()):
            # Hole not finished yet: everything from here on is unresolved.
            ledger.append(
                SkinResult(holeIndex=hole_index, winnerId=None, value=pot, carriedOver=False)
            )
            ledger.extend(
                SkinResult(holeIndex=i, winnerId=None, value=base, carriedOver=False)
                for i in range(hole_index + 1, HOLES)
            )
            return ledger

        winners: List[str] = []
        any_tied = False
        for members in groups.values():
            low = min(values[pid] for pid in members)
            at_low = [pid for pid in members if values[pid] == low]
            if len(at_low) == 1:
                winners.append(at_low[0])
            else:
                any_tied = True

        if len(winners) == 1 and not any_tied:
            ledger.append(
                SkinResult(holeIndex=hole_index, winnerId=winners[0], value=pot, carriedOver=False)
            )
            carryover = 0.0
        else:
            ledger.append(
                SkinResult(holeIndex=hole_index, winnerId=None, value=pot, carriedOver=True)
            )
            carryover = pot
    return ledger
