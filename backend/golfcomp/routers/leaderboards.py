from fastapi import APIRouter

from ..schemas import (
    CompetitionLeaderboardIn,
    CompetitionLeaderboardOut,
    HandicapEstimateIn,
    HandicapEstimateOut,
)
from ..services.handicap_history import (
    estimate_handicap_index,
    format_handicap_index,
    recent_rounds,
)
from ..services.leaderboard import build_competition_leaderboard

# Resource-only prefix; no /api or /api/v0 here
router = APIRouter(prefix="/leaderboards", tags=["leaderboards"])
handicaps_router = APIRouter(prefix="/handicaps", tags=["handicaps"])


# POST /api/v0/leaderboards/competition
@router.post("/competition", response_model=CompetitionLeaderboardOut)
async def competition_leaderboard(body: CompetitionLeaderboardIn):
    """Fold the supplied rounds into competition standings.

    The caller supplies round, course, player and team snapshots; nothing is
    read from the round store so finished competitions can be ranked from
    their persisted rounds.
    """
    return build_competition_leaderboard(
        body.gameFormat,
        body.rounds,
        body.courses,
        participant_ids=body.participantIds,
        players=body.players,
        teams=body.teams,
        competition_id=body.competitionId,
    )


# POST /api/v0/handicaps/estimate
@handicaps_router.post("/estimate", response_model=HandicapEstimateOut)
async def estimate_handicap(body: HandicapEstimateIn):
    index = estimate_handicap_index(body.rounds, body.playerId)
    return HandicapEstimateOut(
        playerId=body.playerId,
        handicapIndex=index,
        display=format_handicap_index(index),
        roundsConsidered=len(recent_rounds(body.rounds, body.playerId)),
    )
