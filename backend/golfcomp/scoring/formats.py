"""Per-format derivation of net strokes, team composites and match holes.

Every function here recomputes the whole round. A single edited hole can
change a team composite or a match result, so nothing is patched
incrementally.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

from ..schemas import (
    BEST_BALL_FORMATS,
    HOLES,
    TIE,
    Course,
    GameFormat,
    HoleScore,
    Player,
    Round,
    Team,
)
from .handicap import net_strokes

logger = logging.getLogger(__name__)


class MemberScore(NamedTuple):
    player_id: str
    gross: int
    net: int


def courses_by_id(courses: Iterable[Course]) -> Dict[str, Course]:
    return {c.id: c for c in courses}


def id_sort_key(entity_id: str) -> Tuple[int, int, str]:
    """Natural order for ids: numeric ids by value, then everything else."""
    if entity_id.isdigit():
        return (0, int(entity_id), "")
    return (1, 0, entity_id)


def player_course(
    round_: Round, player: Player, courses: Dict[str, Course]
) -> Optional[Course]:
    return courses.get(round_.course_id_for(player))


def team_course(
    round_: Round, team: Team, courses: Dict[str, Course]
) -> Optional[Course]:
    """A team plays the course of its first listed member."""
    first = round_.player(team.playerIds[0]) if team.playerIds else None
    if first is None:
        return courses.get(round_.courseId)
    return player_course(round_, first, courses)


def posted_strokes(round_: Round, entity_id: str, hole_index: int) -> Optional[int]:
    sheet = round_.scores.get(entity_id)
    if not sheet:
        return None
    return sheet[hole_index].strokes


def empty_sheet(course: Course) -> List[HoleScore]:
    return [
        HoleScore(hole=i + 1, par=par, strokes=None)
        for i, par in enumerate(course.pars)
    ]


def member_scores(
    round_: Round, team: Team, hole_index: int, courses: Dict[str, Course]
) -> Optional[List[MemberScore]]:
    """Gross and net scores of the team members who have posted on a hole.

    Returns ``None`` when a member who posted cannot be resolved to a player
    and course; callers then keep whatever they derived before.
    """
    scores: List[MemberScore] = []
    for pid in team.playerIds:
        gross = posted_strokes(round_, pid, hole_index)
        if gross is None:
            continue
        player = round_.player(pid)
        course = player_course(round_, player, courses) if player else None
        if player is None or course is None:
            logger.warning(
                "Cannot resolve player %r or their course in round %s", pid, round_.id
            )
            return None
        scores.append(
            MemberScore(pid, gross, net_strokes(gross, player, course, hole_index))
        )
    return scores


def best_member(scores: Iterable[MemberScore]) -> Optional[MemberScore]:
    """Lowest net score; ties go to the lowest player id."""
    ordered = sorted(scores, key=lambda s: (s.net, id_sort_key(s.player_id)))
    return ordered[0] if ordered else None


def _recompute_stroke_play(round_: Round, courses: Dict[str, Course]) -> None:
    for player in round_.players:
        sheet = round_.scores.get(player.id)
        if not sheet:
            continue
        course = player_course(round_, player, courses)
        if course is None:
            logger.warning(
                "Course %r not found for player %s; keeping net strokes",
                round_.course_id_for(player),
                player.id,
            )
            continue
        for index, hole in enumerate(sheet):
            if hole.strokes is None:
                hole.netStrokes = None
            else:
                hole.netStrokes = net_strokes(hole.strokes, player, course, index)


def _recompute_best_ball(round_: Round, courses: Dict[str, Course]) -> None:
    for team in round_.teams:
        sheet = round_.scores.get(team.id)
        if sheet is None:
            course = team_course(round_, team, courses)
            if course is None:
                logger.warning("No course for team %s; skipping composite", team.id)
                continue
            sheet = round_.scores[team.id] = empty_sheet(course)
        for index in range(HOLES):
            scores = member_scores(round_, team, index, courses)
            if scores is None:
                continue
            best = best_member(scores)
            sheet[index].strokes = best.gross if best else None
            sheet[index].netStrokes = best.net if best else None


def _recompute_match_play(round_: Round, courses: Dict[str, Course]) -> None:
    if len(round_.teams) != 2:
        logger.debug(
            "Match play round %s has %d sides; skipping hole results",
            round_.id,
            len(round_.teams),
        )
        return
    team_a, team_b = round_.teams
    for index in range(HOLES):
        scores_a = member_scores(round_, team_a, index, courses)
        scores_b = member_scores(round_, team_b, index, courses)
        if scores_a is None or scores_b is None:
            continue
        best_a = best_member(scores_a)
        best_b = best_member(scores_b)
        if best_a is None or best_b is None:
            round_.matchResult.pop(index, None)
            continue
        if best_a.net < best_b.net:
            round_.matchResult[index] = team_a.id
        elif best_b.net < best_a.net:
            round_.matchResult[index] = team_b.id
        else:
            round_.matchResult[index] = TIE


def recompute(round_: Round, courses: Iterable[Course]) -> None:
    """Re-derive every dependent per-hole field of ``round_`` in place."""
    lookup = courses_by_id(courses)
    fmt = round_.gameFormat
    if fmt == GameFormat.STROKE_PLAY:
        _recompute_stroke_play(round_, lookup)
    elif fmt in BEST_BALL_FORMATS:
        _recompute_best_ball(round_, lookup)
    elif fmt == GameFormat.MATCH_PLAY:
        _recompute_match_play(round_, lookup)
    # Scramble team sheets are entered directly and need no derivation.
