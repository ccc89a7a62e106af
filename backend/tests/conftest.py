import os
import sys
from datetime import datetime, timezone

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Avoid startup validation errors when importing the app
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:3000")
os.environ.setdefault("ALLOW_CREDENTIALS", "false")

from golfcomp.schemas import Course, Player, Team  # noqa: E402
from golfcomp.scoring import scorecard  # noqa: E402

PLAYED_AT = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_course(course_id="c1", *, pars=None, indices=None, slope=113, name=None):
    return Course(
        id=course_id,
        name=name or f"Course {course_id}",
        pars=pars or [4] * 18,
        handicapIndices=indices or list(range(1, 19)),
        slope=slope,
        rating=72.0,
    )


def start(
    game_format,
    players,
    courses,
    *,
    teams=(),
    skin_value=None,
    skins_scoring_type="gross",
    course_id=None,
    round_id="r1",
    played_at=PLAYED_AT,
):
    """Start a round on the first course unless ``course_id`` says otherwise."""
    return scorecard.create_round(
        course_id=course_id or courses[0].id,
        game_format=game_format,
        players=players,
        teams=teams,
        courses=courses,
        round_id=round_id,
        played_at=played_at,
        skin_value=skin_value,
        skins_scoring_type=skins_scoring_type,
    )


def play(round_, courses, entity_id, strokes_by_hole):
    """Enter strokes for consecutive holes starting at hole index 0."""
    for hole_index, strokes in enumerate(strokes_by_hole):
        round_ = scorecard.set_strokes(round_, courses, entity_id, hole_index, strokes)
    return round_


@pytest.fixture
def course():
    return make_course()


@pytest.fixture
def courses(course):
    return [course]


@pytest.fixture
def two_players():
    return [
        Player(id="1", name="Ann", handicapIndex=0),
        Player(id="2", name="Bob", handicapIndex=0),
    ]


@pytest.fixture
def two_sides():
    return [
        Team(id="A", name="TeamA", playerIds=["1"]),
        Team(id="B", name="TeamB", playerIds=["2"]),
    ]
