import os
import sys
from datetime import timedelta

from fastapi import FastAPI
from fastapi.testclient import TestClient

# Ensure backend golfcomp modules can be imported
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from golfcomp.routers import leaderboards  # noqa: E402
from golfcomp.schemas import TIE, GameFormat, Player, Team  # noqa: E402
from golfcomp.services.leaderboard import (  # noqa: E402
    build_competition_leaderboard,
    match_play_standings,
)

from conftest import PLAYED_AT, make_course, play, start  # noqa: E402

app = FastAPI()
app.include_router(leaderboards.router)
app.include_router(leaderboards.handicaps_router)

COURSES = [make_course()]
PLAYERS = [
    Player(id="1", name="Ann", handicapIndex=0),
    Player(id="2", name="Bob", handicapIndex=0),
    Player(id="3", name="Cat", handicapIndex=0),
]
SIDES = [
    Team(id="A", name="TeamA", playerIds=["1"]),
    Team(id="B", name="TeamB", playerIds=["2"]),
]


def _stroke_round(round_id, scores, competition_id="spring"):
    round_ = start(GameFormat.STROKE_PLAY, PLAYERS, COURSES, round_id=round_id)
    round_ = round_.model_copy(update={"competitionId": competition_id})
    for pid, strokes in scores.items():
        round_ = play(round_, COURSES, pid, strokes)
    return round_


def _match(round_id, results):
    round_ = start(GameFormat.MATCH_PLAY, PLAYERS[:2], COURSES, teams=SIDES, round_id=round_id)
    return round_.model_copy(update={"matchResult": dict(enumerate(results))})


def test_stroke_play_totals_across_rounds():
    rounds = [
        _stroke_round("r1", {"1": [4] * 18, "2": [3] + [4] * 17}),
        _stroke_round("r2", {"1": [3] * 2 + [4] * 16, "2": [5] + [4] * 17}),
        _stroke_round("r3", {"3": [4] * 18}, competition_id="autumn"),
    ]
    board = build_competition_leaderboard(
        GameFormat.STROKE_PLAY,
        rounds,
        COURSES,
        participant_ids=["1", "2", "3"],
        players=PLAYERS,
        competition_id="spring",
    )
    assert [(e.entityId, e.rank, e.totalToPar, e.roundsPlayed) for e in board.leaders] == [
        ("1", 1, -2, 2),
        ("2", 2, 0, 2),
        ("3", 2, 0, 0),
    ]
    assert board.leaders[0].toParDisplay == "-2"
    assert board.total == 3


def test_incomplete_rounds_do_not_count():
    rounds = [_stroke_round("r1", {"1": [4] * 17, "2": [4] * 18})]
    board = build_competition_leaderboard(GameFormat.STROKE_PLAY, rounds, COURSES)
    by_id = {e.entityId: e for e in board.leaders}
    assert by_id["1"].roundsPlayed == 0
    assert by_id["2"].roundsPlayed == 1


def test_rounds_of_other_formats_are_ignored():
    rounds = [_stroke_round("r1", {"1": [4] * 18}), _match("m1", ["A"] * 18)]
    board = build_competition_leaderboard(
        GameFormat.MATCH_PLAY, rounds, COURSES, teams=SIDES
    )
    assert [(s.teamId, s.wins, s.losses) for s in board.standings] == [
        ("A", 1, 0),
        ("B", 0, 1),
    ]
    assert board.leaders == []


def test_team_leaderboard_ranks_scramble_teams():
    players = PLAYERS + [Player(id="4", name="Dan")]
    teams = [
        Team(id="A", name="TeamA", playerIds=["1", "2"]),
        Team(id="B", name="TeamB", playerIds=["3", "4"]),
    ]
    round_ = start(GameFormat.SCRAMBLE, players, COURSES, teams=teams)
    round_ = play(round_, COURSES, "A", [4] * 18)
    round_ = play(round_, COURSES, "B", [3] + [4] * 17)
    board = build_competition_leaderboard(GameFormat.SCRAMBLE, [round_], COURSES, teams=teams)
    assert [(e.entityId, e.name, e.totalToPar) for e in board.leaders] == [
        ("B", "TeamB", -1),
        ("A", "TeamA", 0),
    ]


def test_match_standings_count_wins_and_halves():
    rounds = [
        _match("m1", ["A"] * 10),
        _match("m2", [TIE] * 18),
        _match("m3", ["B"] * 3),
    ]
    standings = match_play_standings(rounds, SIDES)
    assert [(s.teamId, s.rank, s.matchesPlayed, s.wins, s.halves, s.points) for s in standings] == [
        ("A", 1, 2, 1, 1, 1.5),
        ("B", 2, 2, 0, 1, 0.5),
    ]


def test_competition_endpoint():
    rounds = [_stroke_round("r1", {"1": [4] * 18, "2": [5] * 18})]
    client = TestClient(app)
    resp = client.post(
        "/leaderboards/competition",
        json={
            "gameFormat": "Stroke Play",
            "participantIds": ["1", "2"],
            "players": [p.model_dump(mode="json") for p in PLAYERS],
            "courses": [c.model_dump(mode="json") for c in COURSES],
            "rounds": [r.model_dump(mode="json") for r in rounds],
        },
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 2
    assert [e["toParDisplay"] for e in data["leaders"]] == ["E", "+18"]


def test_handicap_estimate_endpoint():
    rounds = [
        _stroke_round(f"r{i}", {"1": [5] * 18}).model_copy(
            update={"playedAt": PLAYED_AT + timedelta(days=i)}
        )
        for i in range(5)
    ]
    client = TestClient(app)
    resp = client.post(
        "/handicaps/estimate",
        json={"playerId": "1", "rounds": [r.model_dump(mode="json") for r in rounds]},
    )
    assert resp.status_code == 200
    assert resp.json() == {
        "playerId": "1",
        "handicapIndex": 17.2,
        "display": "17.2",
        "roundsConsidered": 5,
    }
