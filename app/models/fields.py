"""
Contains enums and PyDantic field types shared across the league models.
"""
from enum import Enum
from typing import Annotated

from pydantic import Field as PydField


class Movement(str, Enum):
    up = "up"
    down = "down"
    flat = "flat"

    @property
    def glyph(self) -> str:
        return {
            "up": "▴",
            "down": "▾",
            "flat": "▸",
        }[self.value]


class FormResult(str, Enum):
    """Outcome marker used in a team's recent-form strip."""

    win = "W"
    draw = "D"
    loss = "L"
    pending = "P"


class ErrorCode(str, Enum):
    """Validation failures reported back to callers."""

    needs_at_least_two_teams = "NEEDS_AT_LEAST_TWO_TEAMS"
    score_required = "SCORE_REQUIRED"
    score_not_nonnegative_integer = "SCORE_NOT_NONNEGATIVE_INTEGER"
    range_invalid = "RANGE_INVALID"
    range_exceeds_team_count = "RANGE_EXCEEDS_TEAM_COUNT"
    min_team_count = "MIN_TEAM_COUNT"
    min_division_count = "MIN_DIVISION_COUNT"
    min_season_count = "MIN_SEASON_COUNT"
    min_league_count = "MIN_LEAGUE_COUNT"
    name_required = "NAME_REQUIRED"


GOALS = Annotated[int, PydField(..., ge=0)]
RANK = Annotated[int, PydField(..., ge=1)]
