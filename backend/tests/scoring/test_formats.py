import os, sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))
from golfcomp.schemas import TIE, GameFormat, Player, Team
from golfcomp.scoring import formats, scorecard

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from conftest import make_course, play, start


def test_stroke_play_net_strokes_follow_entries(courses):
    players = [Player(id="1", name="Ann", handicapIndex=18)]
    round_ = start(GameFormat.STROKE_PLAY, players, courses)
    round_ = play(round_, courses, "1", [5, 4])
    sheet = round_.scores["1"]
    assert [h.netStrokes for h in sheet[:3]] == [4, 3, None]

    round_ = scorecard.set_strokes(round_, courses, "1", 0, None)
    assert round_.scores["1"][0].strokes is None
    assert round_.scores["1"][0].netStrokes is None


def test_stroke_play_keeps_net_when_course_is_missing(courses):
    players = [Player(id="1", handicapIndex=18)]
    round_ = start(GameFormat.STROKE_PLAY, players, courses)
    round_ = play(round_, courses, "1", [5])
    round_ = scorecard.set_strokes(round_, [], "1", 1, 6)
    assert round_.scores["1"][0].netStrokes == 4
    assert round_.scores["1"][1].strokes == 6
    assert round_.scores["1"][1].netStrokes is None


def test_best_ball_composite_is_gross_of_best_net_member(courses):
    players = [
        Player(id="1", name="Ann", handicapIndex=1),
        Player(id="2", name="Bob", handicapIndex=0),
    ]
    teams = [Team(id="A", name="TeamA", playerIds=["1", "2"])]
    round_ = start(GameFormat.BEST_BALL, players, courses, teams=teams)
    round_ = scorecard.set_strokes(round_, courses, "1", 0, 4)
    round_ = scorecard.set_strokes(round_, courses, "2", 0, 5)

    hole = round_.scores["A"][0]
    assert hole.strokes == 4
    assert hole.netStrokes == 3


def test_best_ball_net_tie_goes_to_lowest_player_id(courses):
    players = [
        Player(id="10", handicapIndex=0),
        Player(id="2", handicapIndex=1),
    ]
    teams = [Team(id="A", name="TeamA", playerIds=["10", "2"])]
    round_ = start(GameFormat.SHAMBLE, players, courses, teams=teams)
    # Both net 4: player 10 with gross 4, player 2 with gross 5 less a stroke.
    round_ = scorecard.set_strokes(round_, courses, "10", 0, 4)
    round_ = scorecard.set_strokes(round_, courses, "2", 0, 5)
    assert round_.scores["A"][0].strokes == 5


def test_best_ball_composite_clears_when_no_member_posted(courses):
    players = [Player(id="1"), Player(id="2")]
    teams = [Team(id="A", name="TeamA", playerIds=["1", "2"])]
    round_ = start(GameFormat.BEST_BALL, players, courses, teams=teams)
    round_ = scorecard.set_strokes(round_, courses, "2", 3, 6)
    assert round_.scores["A"][3].strokes == 6
    round_ = scorecard.set_strokes(round_, courses, "2", 3, None)
    assert round_.scores["A"][3].strokes is None
    assert round_.scores["A"][3].netStrokes is None


def test_best_ball_keeps_composite_when_member_course_is_missing(courses):
    players = [Player(id="1"), Player(id="2")]
    teams = [Team(id="A", name="TeamA", playerIds=["1", "2"])]
    round_ = start(GameFormat.BEST_BALL, players, courses, teams=teams)
    round_ = scorecard.set_strokes(round_, courses, "1", 0, 5)
    round_ = scorecard.set_strokes(round_, [], "2", 0, 3)
    assert round_.scores["A"][0].strokes == 5


def test_match_play_hole_goes_to_lower_net(courses, two_players, two_sides):
    round_ = start(GameFormat.MATCH_PLAY, two_players, courses, teams=two_sides)
    round_ = scorecard.set_strokes(round_, courses, "1", 0, 4)
    assert 0 not in round_.matchResult
    round_ = scorecard.set_strokes(round_, courses, "2", 0, 5)
    assert round_.matchResult[0] == "A"

    round_ = scorecard.set_strokes(round_, courses, "1", 1, 4)
    round_ = scorecard.set_strokes(round_, courses, "2", 1, 4)
    assert round_.matchResult[1] == TIE


def test_match_play_uses_net_scores():
    course = make_course(indices=[1] + list(range(2, 19)))
    courses = [course]
    players = [
        Player(id="1", handicapIndex=1),
        Player(id="2", handicapIndex=0),
    ]
    teams = [
        Team(id="A", name="TeamA", playerIds=["1"]),
        Team(id="B", name="TeamB", playerIds=["2"]),
    ]
    round_ = start(GameFormat.MATCH_PLAY, players, courses, teams=teams)
    round_ = scorecard.set_strokes(round_, courses, "1", 0, 5)
    round_ = scorecard.set_strokes(round_, courses, "2", 0, 4)
    assert round_.matchResult[0] == TIE


def test_match_play_clearing_a_score_removes_the_result(courses, two_players, two_sides):
    round_ = start(GameFormat.MATCH_PLAY, two_players, courses, teams=two_sides)
    round_ = scorecard.set_strokes(round_, courses, "1", 0, 3)
    round_ = scorecard.set_strokes(round_, courses, "2", 0, 5)
    round_ = scorecard.set_strokes(round_, courses, "2", 0, None)
    assert 0 not in round_.matchResult


def test_match_play_side_uses_best_member():
    courses = [make_course()]
    players = [Player(id=str(i)) for i in range(1, 5)]
    teams = [
        Team(id="A", name="TeamA", playerIds=["1", "2"]),
        Team(id="B", name="TeamB", playerIds=["3", "4"]),
    ]
    round_ = start(GameFormat.MATCH_PLAY, players, courses, teams=teams)
    for pid, strokes in (("1", 6), ("2", 3), ("3", 4)):
        round_ = scorecard.set_strokes(round_, courses, pid, 0, strokes)
    assert round_.matchResult[0] == "A"


def test_id_sort_key_orders_numeric_ids_naturally():
    assert sorted(["10", "b", "2", "a"], key=formats.id_sort_key) == ["2", "10", "a", "b"]


def test_team_course_follows_first_member():
    home = make_course("home")
    away = make_course("away")
    players = [Player(id="1", courseId="away"), Player(id="2")]
    teams = [Team(id="A", name="TeamA", playerIds=["1", "2"])]
    round_ = start(GameFormat.SCRAMBLE, players, [home, away], teams=teams)
    lookup = formats.courses_by_id([home, away])
    assert formats.team_course(round_, teams[0], lookup).id == "away"
