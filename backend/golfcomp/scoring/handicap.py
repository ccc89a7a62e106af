"""Course handicap and per-hole stroke allocation."""
import math
from typing import Dict, Iterable, Optional

from ..schemas import HOLES, SLOPE_BASELINE, Course, Player


def round_half_up(value: float) -> int:
    """Round ``.5`` toward positive infinity (``-2.5 -> -2``, ``2.5 -> 3``)."""
    return int(math.floor(value + 0.5))


def course_handicap(handicap_index: float, slope: float) -> int:
    """Scale a handicap index to a course's slope.

    The sign is preserved: a plus-handicap index (negative) yields a negative
    course handicap.
    """
    return round_half_up(handicap_index * slope / SLOPE_BASELINE)


def strokes_for_hole(course_hcp: int, hole_handicap_index: int) -> int:
    """Return the handicap strokes a player receives on a hole.

    ``hole_handicap_index`` is 1 for the hardest hole and 18 for the easiest.
    A negative result means the player gives strokes back. Summing over
    every hole gives back ``course_hcp`` exactly.
    """
    if not 1 <= hole_handicap_index <= HOLES:
        raise ValueError("hole handicap index must be between 1 and 18")
    if course_hcp >= 0:
        base, extra = divmod(course_hcp, HOLES)
        return base + (1 if hole_handicap_index <= extra else 0)
    # Plus handicap: give back on the easiest holes first.
    base, extra = divmod(-course_hcp, HOLES)
    return -(base + (1 if hole_handicap_index > HOLES - extra else 0))


def player_course_handicap(player: Player, course: Course) -> int:
    return course_handicap(player.handicapIndex, course.slope)


def net_strokes(gross: int, player: Player, course: Course, hole_index: int) -> int:
    """Net score for ``gross`` on the zero-based ``hole_index`` of ``course``."""
    allowance = strokes_for_hole(
        player_course_handicap(player, course), course.handicapIndices[hole_index]
    )
    return gross - allowance


def team_course_handicap(
    players: Iterable[Player],
    courses: Dict[str, Course],
    fallback_course: Optional[Course] = None,
) -> Optional[int]:
    """Average of the members' course handicaps, rounded half-up.

    Members whose course cannot be resolved use ``fallback_course``; if that
    is missing too they are left out. Returns ``None`` when nobody remains.
    """
    handicaps = []
    for player in players:
        course = courses.get(player.courseId or "") or fallback_course
        if course is None:
            continue
        handicaps.append(player_course_handicap(player, course))
    if not handicaps:
        return None
    return round_half_up(sum(handicaps) / len(handicaps))
