"""Score input and fixture views for a division's schedule."""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

from app.models.entities import Match, Score
from app.models.fields import ErrorCode
from app.services.context import LeagueContext
from app.services.errors import LeagueValidationError

logger = logging.getLogger(__name__)

ScoreInput = Union[int, float, str, None]

DEFAULT_RESULTS_LIMIT = 8


def _parse_goals(value: ScoreInput, field: str) -> int:
    if value is None:
        raise LeagueValidationError(ErrorCode.score_required, field)
    if isinstance(value, bool):
        raise LeagueValidationError(ErrorCode.score_not_nonnegative_integer, field)
    if isinstance(value, int):
        goals = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise LeagueValidationError(ErrorCode.score_not_nonnegative_integer, field)
        goals = int(value)
    else:
        text = str(value).strip()
        if not text:
            raise LeagueValidationError(ErrorCode.score_required, field)
        try:
            goals = int(text)
        except ValueError:
            raise LeagueValidationError(
                ErrorCode.score_not_nonnegative_integer, field
            ) from None
    if goals < 0:
        raise LeagueValidationError(ErrorCode.score_not_nonnegative_integer, field)
    return goals


def parse_score_input(home: ScoreInput, away: ScoreInput) -> Score:
    """Validate raw score input from a form or request body.

    Raises:
        LeagueValidationError: SCORE_REQUIRED for blank input,
            SCORE_NOT_NONNEGATIVE_INTEGER for anything else that is not a
            whole number >= 0
    """
    home_goals = _parse_goals(home, "home_score")
    away_goals = _parse_goals(away, "away_score")
    return Score(home=home_goals, away=away_goals)


def record_score(
    ctx: LeagueContext, match_id: str, home: ScoreInput, away: ScoreInput
) -> Optional[Match]:
    """Record a result. Unknown match ids are ignored and return None."""
    score = parse_score_input(home, away)
    found = ctx.find_match(match_id)
    if found is None:
        logger.debug(f"record_score: unknown match {match_id}")
        return None
    _, match = found
    match.score = score
    return match


def clear_score(ctx: LeagueContext, match_id: str) -> Optional[Match]:
    """Return a match to the unplayed state."""
    found = ctx.find_match(match_id)
    if found is None:
        logger.debug(f"clear_score: unknown match {match_id}")
        return None
    _, match = found
    match.score = None
    return match


def max_round(fixtures: Sequence[Match]) -> int:
    return max((m.round for m in fixtures), default=1)


def set_schedule_round(
    ctx: LeagueContext, round_no: int, division_id: Optional[str] = None
) -> int:
    """Move the active round, clamped to the division's schedule length."""
    division = (
        ctx.find_division(division_id) if division_id else ctx.active_division()
    )
    fixtures = ctx.active_season().fixtures(division.id) if division else []
    clamped = min(max(1, round_no), max_round(fixtures))
    ctx.graph.view.schedule_round = clamped
    return clamped


def step_schedule_round(ctx: LeagueContext, delta: int) -> int:
    return set_schedule_round(ctx, ctx.graph.view.schedule_round + delta)


def round_fixtures(
    ctx: LeagueContext, division_id: str, round_no: Optional[int] = None
) -> list[Match]:
    """Fixtures for one round in insertion order (active round by default)."""
    if round_no is None:
        round_no = ctx.graph.view.schedule_round
    fixtures = ctx.active_season().fixtures(division_id)
    return sorted(
        (m for m in fixtures if m.round == round_no), key=lambda m: m.created_at
    )


def latest_results(
    ctx: LeagueContext, division_id: str, limit: Optional[int] = DEFAULT_RESULTS_LIMIT
) -> list[Match]:
    """Completed matches, newest round first."""
    completed = sorted(
        (m for m in ctx.active_season().fixtures(division_id) if m.is_completed),
        key=lambda m: m.order_key,
        reverse=True,
    )
    return completed if limit is None else completed[:limit]
