import os, sys
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))
from golfcomp.schemas import TIE, GameFormat
from golfcomp.scoring import match_play

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from conftest import play, start


@pytest.fixture
def match(courses, two_players, two_sides):
    return start(GameFormat.MATCH_PLAY, two_players, courses, teams=two_sides)


def _with_results(round_, winners):
    return round_.model_copy(update={"matchResult": dict(enumerate(winners))})


def test_full_match_won_by_two(match, courses):
    # Alternate for 16 holes, then A takes the last two.
    ann = [3, 5] * 8 + [3, 3]
    bob = [4, 4] * 8 + [4, 4]
    round_ = play(match, courses, "1", ann)
    round_ = play(round_, courses, "2", bob)

    tally = match_play.match_tally(round_)
    assert tally.wins == {"A": 10, "B": 8}
    assert tally.holes_played == 18
    assert not tally.decided_early
    assert match_play.final_match_text(round_) == "TeamA won 2 UP"
    assert match_play.match_status(round_) == "TeamA 2 UP"


def test_match_decided_when_lead_exceeds_holes_left(match):
    round_ = _with_results(match, ["A"] * 5 + [TIE] * 9)
    assert match_play.match_status(round_) == "TeamA won 5&4"
    assert match_play.final_match_text(round_) == "TeamA won 5&4"


def test_decided_result_stands_after_further_holes(match):
    round_ = _with_results(match, ["B"] * 10 + ["A"] * 8)
    assert match_play.final_match_text(round_) == "TeamB won 10&8"


def test_lead_equal_to_holes_left_is_dormie_not_decided(match):
    round_ = _with_results(match, ["A"] * 3 + [TIE] * 12)
    tally = match_play.match_tally(round_)
    assert tally.holes_remaining == 3
    assert not tally.decided_early
    assert match_play.match_status(round_) == "TeamA 3 UP"
    assert match_play.final_match_text(round_) == "Match Incomplete"


def test_all_square_and_tied(match):
    assert match_play.match_status(match) == "All Square"
    round_ = _with_results(match, [TIE] * 18)
    assert match_play.final_match_text(round_) == "Match Tied"


def test_relative_status_for_each_side(match):
    round_ = _with_results(match, ["A", "A", "B", "A"])
    assert match_play.relative_status(round_, "A") == "2 UP"
    assert match_play.relative_status(round_, "B") == "2 DOWN"
    assert match_play.relative_status(match, "A") == "AS"
    assert match_play.relative_status(round_, "nobody") == "AS"


def test_holes_walked_in_order_with_gaps(match):
    round_ = match.model_copy(update={"matchResult": {4: "A", 0: "B", 2: TIE}})
    tally = match_play.match_tally(round_)
    assert tally.holes_played == 3
    assert tally.ties == 1
    assert tally.leader is None


def test_not_a_two_sided_match(courses, two_players):
    round_ = start(GameFormat.STROKE_PLAY, two_players, courses)
    assert match_play.match_tally(round_) is None
    assert match_play.match_status(round_) == "Match Play"
    assert match_play.final_match_text(round_) == "Match Incomplete"
