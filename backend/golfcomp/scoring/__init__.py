"""Scoring engine for golf rounds."""

from . import formats, handicap, match_play, scorecard, skins

__all__ = [
    "formats",
    "handicap",
    "match_play",
    "scorecard",
    "skins",
]
