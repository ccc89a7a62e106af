from enum import Enum
from typing import Any, Dict, List, Literal, Optional
from datetime import datetime, timezone
from pydantic import BaseModel, Field, StrictInt, model_validator, field_validator, ConfigDict

HOLES = 18
SLOPE_BASELINE = 113
TIE = "TIE"


class GameFormat(str, Enum):
    STROKE_PLAY = "Stroke Play"
    MATCH_PLAY = "Match Play"
    SCRAMBLE = "Scramble"
    BEST_BALL = "Best Ball"
    SHAMBLE = "Shamble"


class ScoringUnit(str, Enum):
    """Which kind of entity owns a score sheet."""

    PLAYER = "player"
    TEAM = "team"


# Entry unit: who types strokes in. Result unit: who results are compared for.
ENTRY_UNIT: Dict[GameFormat, ScoringUnit] = {
    GameFormat.STROKE_PLAY: ScoringUnit.PLAYER,
    GameFormat.MATCH_PLAY: ScoringUnit.PLAYER,
    GameFormat.SCRAMBLE: ScoringUnit.TEAM,
    GameFormat.BEST_BALL: ScoringUnit.PLAYER,
    GameFormat.SHAMBLE: ScoringUnit.PLAYER,
}

RESULT_UNIT: Dict[GameFormat, ScoringUnit] = {
    GameFormat.STROKE_PLAY: ScoringUnit.PLAYER,
    GameFormat.MATCH_PLAY: ScoringUnit.TEAM,
    GameFormat.SCRAMBLE: ScoringUnit.TEAM,
    GameFormat.BEST_BALL: ScoringUnit.TEAM,
    GameFormat.SHAMBLE: ScoringUnit.TEAM,
}

BEST_BALL_FORMATS = frozenset({GameFormat.BEST_BALL, GameFormat.SHAMBLE})
SKINS_TEAM_FORMATS = frozenset(
    {GameFormat.SCRAMBLE, GameFormat.BEST_BALL, GameFormat.SHAMBLE}
)

SkinsScoringType = Literal["gross", "net"]


def _utc(value: Optional[datetime], field_name: str) -> Optional[datetime]:
    """Round timestamps must carry an offset; they are stored in UTC."""
    if value is None:
        return None
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"{field_name} must include a timezone offset")
    return value.astimezone(timezone.utc)


def _coerce_id(value: Any) -> str:
    if isinstance(value, bool):
        raise TypeError("id must be a string or integer")
    if isinstance(value, int):
        return str(value)
    if not isinstance(value, str):
        raise TypeError("id must be a string or integer")
    trimmed = value.strip()
    if not trimmed:
        raise ValueError("id must not be empty")
    return trimmed


class Player(BaseModel):
    id: str
    name: str = ""
    handicapIndex: float = 0.0
    courseId: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _validate_id(cls, value: Any) -> str:
        return _coerce_id(value)

    @field_validator("courseId", mode="before")
    @classmethod
    def _validate_course_id(cls, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        return _coerce_id(value)


class Course(BaseModel):
    id: str
    name: str = ""
    pars: List[int]
    handicapIndices: List[int]
    slope: float = SLOPE_BASELINE
    rating: float = 72.0

    @field_validator("id", mode="before")
    @classmethod
    def _validate_id(cls, value: Any) -> str:
        return _coerce_id(value)

    @field_validator("pars")
    @classmethod
    def _validate_pars(cls, value: List[int]) -> List[int]:
        if len(value) != HOLES:
            raise ValueError(f"pars must have exactly {HOLES} entries")
        if any(p <= 0 for p in value):
            raise ValueError("pars must be positive")
        return value

    @field_validator("handicapIndices")
    @classmethod
    def _validate_handicap_indices(cls, value: List[int]) -> List[int]:
        if len(value) != HOLES:
            raise ValueError(f"handicapIndices must have exactly {HOLES} entries")
        if sorted(value) != list(range(1, HOLES + 1)):
            raise ValueError("handicapIndices must be a permutation of 1..18")
        return value

    @field_validator("slope")
    @classmethod
    def _validate_slope(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("slope must be positive")
        return value


class Team(BaseModel):
    id: str
    name: str
    playerIds: List[str] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _validate_id(cls, value: Any) -> str:
        return _coerce_id(value)

    @field_validator("playerIds", mode="before")
    @classmethod
    def _validate_player_ids(cls, value: Any) -> List[str]:
        if value is None:
            return []
        return [_coerce_id(v) for v in value]


class HoleScore(BaseModel):
    hole: int = Field(..., ge=1, le=HOLES)
    par: int
    strokes: Optional[int] = None
    netStrokes: Optional[int] = None
    photoUrl: Optional[str] = None
    videoUrl: Optional[str] = None


class SkinResult(BaseModel):
    holeIndex: int = Field(..., ge=0, lt=HOLES)
    winnerId: Optional[str] = None
    value: float
    carriedOver: bool = False


class Round(BaseModel):
    id: str
    courseId: str
    courseName: str = ""
    playedAt: datetime
    gameFormat: GameFormat
    players: List[Player] = Field(default_factory=list)
    teams: List[Team] = Field(default_factory=list)
    scores: Dict[str, List[HoleScore]] = Field(default_factory=dict)
    matchResult: Dict[int, str] = Field(default_factory=dict)
    competitionId: Optional[str] = None
    skinValue: Optional[float] = None
    skinsScoringType: SkinsScoringType = "gross"
    skinsResult: List[SkinResult] = Field(default_factory=list)
    summaryText: Optional[str] = None
    postedAt: Optional[datetime] = None

    @field_validator("courseId", mode="before")
    @classmethod
    def _validate_course_id(cls, value: Any) -> str:
        return _coerce_id(value)

    @field_validator("playedAt", "postedAt")
    @classmethod
    def _validate_timestamps(cls, value: Optional[datetime], info) -> Optional[datetime]:
        return _utc(value, info.field_name)

    @field_validator("scores")
    @classmethod
    def _validate_sheets(cls, value: Dict[str, List[HoleScore]]) -> Dict[str, List[HoleScore]]:
        for entity_id, sheet in value.items():
            if len(sheet) != HOLES:
                raise ValueError(
                    f"score sheet for {entity_id!r} must have exactly {HOLES} holes"
                )
        return value

    @property
    def skins_enabled(self) -> bool:
        return bool(self.skinValue)

    @property
    def is_posted(self) -> bool:
        return self.postedAt is not None

    def player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def team(self, team_id: str) -> Optional[Team]:
        return next((t for t in self.teams if t.id == team_id), None)

    def team_for_player(self, player_id: str) -> Optional[Team]:
        return next((t for t in self.teams if player_id in t.playerIds), None)

    def course_id_for(self, player: Player) -> str:
        return player.courseId or self.courseId


# -----------------------------------------------------------------------------
# API payloads
# -----------------------------------------------------------------------------
class RoundCreate(BaseModel):
    id: Optional[str] = None
    courseId: str
    gameFormat: GameFormat
    players: List[Player] = Field(..., min_length=1)
    teams: List[Team] = Field(default_factory=list)
    courses: List[Course] = Field(..., min_length=1)
    playedAt: Optional[datetime] = None
    competitionId: Optional[str] = None
    skinValue: Optional[float] = Field(default=None, ge=0)
    skinsScoringType: Optional[SkinsScoringType] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("courseId", mode="before")
    @classmethod
    def _validate_course_id(cls, value: Any) -> str:
        return _coerce_id(value)

    @field_validator("playedAt")
    @classmethod
    def _validate_played_at(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _utc(value, "playedAt")

    @model_validator(mode="after")
    def _validate_course_snapshots(self) -> "RoundCreate":
        known = {c.id for c in self.courses}
        if self.courseId not in known:
            raise ValueError(f"course '{self.courseId}' missing from courses")
        for player in self.players:
            if player.courseId and player.courseId not in known:
                raise ValueError(
                    f"course '{player.courseId}' for player '{player.id}' missing from courses"
                )
        return self


class StrokeEntryIn(BaseModel):
    entityId: str
    holeIndex: StrictInt
    strokes: Optional[StrictInt] = None

    @field_validator("entityId", mode="before")
    @classmethod
    def _validate_entity_id(cls, value: Any) -> str:
        return _coerce_id(value)


class MediaIn(BaseModel):
    playerId: str
    holeIndex: int
    photoUrl: Optional[str] = None
    videoUrl: Optional[str] = None

    @field_validator("playerId", mode="before")
    @classmethod
    def _validate_player_id(cls, value: Any) -> str:
        return _coerce_id(value)

    @model_validator(mode="after")
    def _require_media(self) -> "MediaIn":
        if not self.photoUrl and not self.videoUrl:
            raise ValueError("photoUrl or videoUrl is required")
        return self


class PostRoundIn(BaseModel):
    summaryText: str = Field(..., min_length=1, max_length=5000)


class RoundUpdateOut(BaseModel):
    round: Round
    persistWarning: Optional[str] = None


class MatchStatusOut(BaseModel):
    status: str
    finalText: str
    wins: Dict[str, int]
    ties: int
    holesPlayed: int
    holesRemaining: int
    relative: Dict[str, str]


class RankingEntryOut(BaseModel):
    rank: int
    entityId: str
    name: str
    courseName: str = ""
    totalGross: int
    totalNet: int
    toPar: int
    toParDisplay: str


class SkinsSummaryEntryOut(BaseModel):
    entityId: str
    name: str
    totalValue: float
    skinsCount: int


class SkinsSummaryOut(BaseModel):
    entries: List[SkinsSummaryEntryOut]
    finalCarryover: float


class RoundSummaryOut(BaseModel):
    roundId: str
    gameFormat: GameFormat
    ranking: List[RankingEntryOut] = Field(default_factory=list)
    winnerIds: List[str] = Field(default_factory=list)
    matchResultText: Optional[str] = None
    skins: Optional[SkinsSummaryOut] = None


class CompetitionLeaderboardIn(BaseModel):
    gameFormat: GameFormat
    competitionId: Optional[str] = None
    participantIds: List[str] = Field(default_factory=list)
    teams: List[Team] = Field(default_factory=list)
    players: List[Player] = Field(default_factory=list)
    courses: List[Course] = Field(default_factory=list)
    rounds: List[Round] = Field(default_factory=list)

    @field_validator("participantIds", mode="before")
    @classmethod
    def _validate_participant_ids(cls, value: Any) -> List[str]:
        if value is None:
            return []
        return [_coerce_id(v) for v in value]


class LeaderboardEntryOut(BaseModel):
    rank: int
    entityId: str
    name: str
    roundsPlayed: int
    totalToPar: int
    toParDisplay: str


class MatchStandingOut(BaseModel):
    rank: int
    teamId: str
    name: str
    matchesPlayed: int
    wins: int
    losses: int
    halves: int
    points: float


class CompetitionLeaderboardOut(BaseModel):
    gameFormat: GameFormat
    leaders: List[LeaderboardEntryOut] = Field(default_factory=list)
    standings: List[MatchStandingOut] = Field(default_factory=list)
    total: int


class HandicapEstimateIn(BaseModel):
    playerId: str
    rounds: List[Round] = Field(default_factory=list)

    @field_validator("playerId", mode="before")
    @classmethod
    def _validate_player_id(cls, value: Any) -> str:
        return _coerce_id(value)


class HandicapEstimateOut(BaseModel):
    playerId: str
    handicapIndex: Optional[float] = None
    display: str
    roundsConsidered: int
