# backend/golfcomp/routers/rounds.py
from fastapi import APIRouter, Depends

from ..config import DEFAULT_SKINS_SCORING
from ..schemas import (
    MatchStatusOut,
    MediaIn,
    PostRoundIn,
    Round,
    RoundCreate,
    RoundSummaryOut,
    RoundUpdateOut,
    StrokeEntryIn,
)
from ..scoring import match_play, scorecard
from ..services.summary import summarize_round
from ..store import RoundStore, round_store
from ..exceptions import http_problem

# Resource-only prefix; versioning is added in main.py
router = APIRouter(prefix="/rounds", tags=["rounds"])


def get_store() -> RoundStore:
    return round_store


# POST /api/v0/rounds
@router.post("", response_model=RoundUpdateOut, status_code=201)
async def start_round(body: RoundCreate, store: RoundStore = Depends(get_store)):
    round_ = scorecard.create_round(
        course_id=body.courseId,
        game_format=body.gameFormat,
        players=body.players,
        teams=body.teams,
        courses=body.courses,
        round_id=body.id,
        played_at=body.playedAt,
        competition_id=body.competitionId,
        skin_value=body.skinValue,
        skins_scoring_type=body.skinsScoringType or DEFAULT_SKINS_SCORING,
    )
    warning = await store.add(round_, body.courses)
    return RoundUpdateOut(round=round_, persistWarning=warning)


# GET /api/v0/rounds/{round_id}
@router.get("/{round_id}", response_model=Round)
async def get_round(round_id: str, store: RoundStore = Depends(get_store)):
    record = await store.get(round_id)
    return record.round


# PUT /api/v0/rounds/{round_id}/scores
@router.put("/{round_id}/scores", response_model=RoundUpdateOut)
async def set_strokes(
    round_id: str, body: StrokeEntryIn, store: RoundStore = Depends(get_store)
):
    record = await store.get(round_id)
    updated = scorecard.set_strokes(
        record.round, record.courses, body.entityId, body.holeIndex, body.strokes
    )
    warning = await store.save(updated)
    return RoundUpdateOut(round=updated, persistWarning=warning)


# PUT /api/v0/rounds/{round_id}/media
@router.put("/{round_id}/media", response_model=RoundUpdateOut)
async def attach_media(round_id: str, body: MediaIn, store: RoundStore = Depends(get_store)):
    record = await store.get(round_id)
    updated = scorecard.attach_media(
        record.round,
        body.playerId,
        body.holeIndex,
        photo_url=body.photoUrl,
        video_url=body.videoUrl,
    )
    warning = await store.save(updated)
    return RoundUpdateOut(round=updated, persistWarning=warning)


# GET /api/v0/rounds/{round_id}/summary
@router.get("/{round_id}/summary", response_model=RoundSummaryOut)
async def round_summary(round_id: str, store: RoundStore = Depends(get_store)):
    record = await store.get(round_id)
    return summarize_round(record.round, record.courses)


# GET /api/v0/rounds/{round_id}/match-status
@router.get("/{round_id}/match-status", response_model=MatchStatusOut)
async def match_status(round_id: str, store: RoundStore = Depends(get_store)):
    record = await store.get(round_id)
    round_ = record.round
    tally = match_play.match_tally(round_)
    if tally is None:
        raise http_problem(
            status_code=400,
            detail="round is not a two-sided match",
            code="round_not_match_play",
        )
    return MatchStatusOut(
        status=match_play.match_status(round_),
        finalText=match_play.final_match_text(round_),
        wins=tally.wins,
        ties=tally.ties,
        holesPlayed=tally.holes_played,
        holesRemaining=tally.holes_remaining,
        relative={
            team.id: match_play.relative_status(round_, team.id) for team in round_.teams
        },
    )


# POST /api/v0/rounds/{round_id}/post
@router.post("/{round_id}/post", response_model=RoundUpdateOut)
async def post_round(round_id: str, body: PostRoundIn, store: RoundStore = Depends(get_store)):
    record = await store.get(round_id)
    updated = scorecard.post_round(record.round, body.summaryText)
    warning = await store.save(updated)
    return RoundUpdateOut(round=updated, persistWarning=warning)
