"""Score sheets and the stroke-entry reducer.

Every operation takes a ``Round`` and returns a new one; the caller's round is
never mutated.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence

from ..exceptions import InvalidScoreEntry, InvalidTeamAssignment, RoundLocked
from ..schemas import (
    BEST_BALL_FORMATS,
    ENTRY_UNIT,
    RESULT_UNIT,
    Course,
    GameFormat,
    HoleScore,
    Player,
    Round,
    ScoringUnit,
    SkinsScoringType,
    Team,
)
from ..services.validation import (
    ValidationError,
    validate_hole_index,
    validate_match_sides,
    validate_strokes,
    validate_team_assignment,
)
from . import formats, skins

logger = logging.getLogger(__name__)


def _sheet_holders(game_format: GameFormat, has_teams: bool) -> set[ScoringUnit]:
    if not has_teams:
        return {ScoringUnit.PLAYER}
    holders = {ENTRY_UNIT[game_format]}
    if game_format in BEST_BALL_FORMATS:
        holders.add(RESULT_UNIT[game_format])
    return holders


def create_round(
    *,
    course_id: str,
    game_format: GameFormat,
    players: Sequence[Player],
    courses: Iterable[Course],
    teams: Sequence[Team] = (),
    round_id: Optional[str] = None,
    played_at: Optional[datetime] = None,
    competition_id: Optional[str] = None,
    skin_value: Optional[float] = None,
    skins_scoring_type: SkinsScoringType = "gross",
) -> Round:
    """Start a round with empty score sheets and a zero-state skins ledger."""
    lookup = formats.courses_by_id(courses)
    primary = lookup.get(course_id)
    if primary is None:
        raise InvalidScoreEntry(f"course '{course_id}' not found")

    try:
        if game_format == GameFormat.MATCH_PLAY:
            validate_match_sides(teams)
        if game_format != GameFormat.STROKE_PLAY and teams:
            validate_team_assignment(players, teams)
    except ValidationError as exc:
        raise InvalidTeamAssignment(exc.detail) from exc

    round_ = Round(
        id=round_id or f"round-{uuid.uuid4().hex}",
        courseId=primary.id,
        courseName=primary.name,
        playedAt=played_at or datetime.now(timezone.utc),
        gameFormat=game_format,
        players=list(players),
        teams=list(teams) if game_format != GameFormat.STROKE_PLAY else [],
        competitionId=competition_id,
        skinValue=skin_value or None,
        skinsScoringType=skins_scoring_type,
    )

    holders = _sheet_holders(game_format, bool(round_.teams))
    if ScoringUnit.PLAYER in holders:
        for player in round_.players:
            course = formats.player_course(round_, player, lookup)
            if course is None:
                logger.warning(
                    "Course %r for player %s not found; using %s",
                    player.courseId,
                    player.id,
                    primary.id,
                )
                course = primary
            round_.scores[player.id] = formats.empty_sheet(course)
    if ScoringUnit.TEAM in holders:
        for team in round_.teams:
            course = formats.team_course(round_, team, lookup) or primary
            round_.scores[team.id] = formats.empty_sheet(course)

    if round_.skins_enabled:
        round_.skinsResult = skins.initial_ledger(round_.skinValue)

    logger.info(
        "Created %s round %s with %d player(s) and %d team(s)",
        game_format.value,
        round_.id,
        len(round_.players),
        len(round_.teams),
    )
    return round_


def recompute_round(round_: Round, courses: Iterable[Course]) -> Round:
    """Return a copy of ``round_`` with every derived field rebuilt."""
    courses = list(courses)
    updated = round_.model_copy(deep=True)
    formats.recompute(updated, courses)
    updated.skinsResult = skins.compute_skins(updated, courses)
    return updated


def _validated_entry(round_: Round, entity_id: str, hole_index: int, strokes) -> Optional[int]:
    if round_.is_posted:
        raise RoundLocked(round_.id)
    try:
        validate_hole_index(hole_index)
        value = validate_strokes(strokes)
    except ValidationError as exc:
        raise InvalidScoreEntry(exc.detail) from exc
    if entity_id not in round_.scores:
        raise InvalidScoreEntry(f"no score sheet for '{entity_id}'")
    if round_.gameFormat in BEST_BALL_FORMATS and round_.team(entity_id) is not None:
        raise InvalidScoreEntry(
            f"{round_.gameFormat.value} team scores are derived from player scores"
        )
    return value


def set_strokes(
    round_: Round,
    courses: Iterable[Course],
    entity_id: str,
    hole_index: int,
    strokes: Optional[int],
) -> Round:
    """Record a gross score (or clear it with ``None``) and recompute the round.

    Invalid input raises ``InvalidScoreEntry`` before anything changes.
    """
    value = _validated_entry(round_, entity_id, hole_index, strokes)
    updated = round_.model_copy(deep=True)
    updated.scores[entity_id][hole_index].strokes = value
    return recompute_round(updated, courses)


def media_target(round_: Round, player_id: str) -> str:
    """Sheet that a player's media belongs to; Scramble media goes to the team."""
    if round_.gameFormat == GameFormat.SCRAMBLE:
        team = round_.team_for_player(player_id)
        if team is not None:
            return team.id
    return player_id


def attach_media(
    round_: Round,
    player_id: str,
    hole_index: int,
    *,
    photo_url: Optional[str] = None,
    video_url: Optional[str] = None,
) -> Round:
    if round_.is_posted:
        raise RoundLocked(round_.id)
    try:
        validate_hole_index(hole_index)
    except ValidationError as exc:
        raise InvalidScoreEntry(exc.detail) from exc
    target = media_target(round_, player_id)
    if target not in round_.scores:
        raise InvalidScoreEntry(f"no score sheet for '{target}'")

    updated = round_.model_copy(deep=True)
    hole: HoleScore = updated.scores[target][hole_index]
    if photo_url:
        hole.photoUrl = photo_url
    if video_url:
        hole.videoUrl = video_url
    return updated


def post_round(
    round_: Round, summary_text: str, posted_at: Optional[datetime] = None
) -> Round:
    """Attach the summary text and freeze the round."""
    if round_.is_posted:
        raise RoundLocked(round_.id)
    updated = round_.model_copy(deep=True)
    updated.summaryText = summary_text
    updated.postedAt = posted_at or datetime.now(timezone.utc)
    logger.info("Posted round %s", updated.id)
    return updated