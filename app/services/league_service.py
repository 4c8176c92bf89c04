"""League and season management.

A new season starts from a deep copy of the active season's divisions and
color rules (ids preserved) with an empty schedule and no rank history.
"""

from __future__ import annotations

import logging
from typing import Optional

from app.models.entities import Division, League, Season
from app.models.fields import ErrorCode
from app.services.context import LeagueContext, make_teams
from app.services.errors import LeagueValidationError

logger = logging.getLogger(__name__)


def add_league(ctx: LeagueContext, name: str = "New League") -> League:
    division = Division(
        id=ctx.next_id(),
        name="Div.1",
        teams=make_teams(ctx, ["Team A", "Team B"]),
    )
    season = Season(
        id=ctx.next_id(),
        number=1,
        created_at=ctx.now(),
        divisions=[division],
        rank_color_rules={division.id: []},
    )
    league = League(
        id=ctx.next_id(),
        name=name.strip() or "New League",
        seasons=[season],
    )
    ctx.graph.leagues.append(league)
    ctx.select(league, season, division)
    logger.info(f"Added league {league.name!r}")
    return league


def update_league(
    ctx: LeagueContext,
    league_id: str,
    name: Optional[str] = None,
    logo_ref: Optional[str] = None,
) -> Optional[League]:
    league = ctx.graph.find_league(league_id)
    if league is None:
        return None
    league.name = (name or "").strip() or league.name
    if logo_ref is not None:
        league.logo_ref = logo_ref
    return league


def remove_league(ctx: LeagueContext, league_id: str) -> Optional[League]:
    """Delete a league and move the view to the first remaining one.

    Raises:
        LeagueValidationError: MIN_LEAGUE_COUNT when it is the last league
    """
    league = ctx.graph.find_league(league_id)
    if league is None:
        return None
    if len(ctx.graph.leagues) <= 1:
        raise LeagueValidationError(ErrorCode.min_league_count)

    ctx.graph.leagues = [lg for lg in ctx.graph.leagues if lg.id != league.id]
    ctx.select(ctx.graph.leagues[0])
    logger.info(f"Removed league {league.name!r}")
    return league


def switch_league(ctx: LeagueContext, league_id: str) -> Optional[League]:
    league = ctx.graph.find_league(league_id)
    if league is None:
        return None
    ctx.select(league)
    return league


def create_season(ctx: LeagueContext) -> Season:
    league = ctx.active_league()
    current = ctx.active_season()
    season = Season(
        id=ctx.next_id(),
        number=max(s.number for s in league.seasons) + 1,
        created_at=ctx.now(),
        divisions=[d.model_copy(deep=True) for d in current.divisions],
        rank_color_rules={
            division_id: [rule.model_copy() for rule in rules]
            for division_id, rules in current.rank_color_rules.items()
        },
    )
    league.seasons.append(season)
    ctx.select(league, season)
    logger.info(f"Created season {season.number} for league {league.name!r}")
    return season


def delete_season(ctx: LeagueContext, season_id: str) -> Optional[Season]:
    """Delete a season with all its schedules, results and rank history.

    If the deleted season was active, the view moves to the season just
    before it (or the earliest remaining one).

    Raises:
        LeagueValidationError: MIN_SEASON_COUNT when it is the last season
    """
    league = ctx.active_league()
    season = league.find_season(season_id)
    if season is None:
        return None
    if len(league.seasons) <= 1:
        raise LeagueValidationError(ErrorCode.min_season_count)

    ordered = league.seasons_by_number()
    index = next(i for i, s in enumerate(ordered) if s.id == season.id)
    league.seasons = [s for s in league.seasons if s.id != season.id]

    if ctx.graph.view.active_season_id == season.id:
        remaining = league.seasons_by_number()
        fallback = remaining[max(0, min(len(remaining) - 1, index - 1))]
        ctx.select(league, fallback)

    logger.info(f"Deleted season {season.number} from league {league.name!r}")
    return season


def select_season(ctx: LeagueContext, season_id: str) -> Optional[Season]:
    league = ctx.active_league()
    season = league.find_season(season_id)
    if season is None:
        return None
    ctx.select(league, season)
    return season


def goto_season(ctx: LeagueContext, offset: int) -> bool:
    """Step to the previous/next season by number. False when out of range."""
    league = ctx.active_league()
    ordered = league.seasons_by_number()
    current = ctx.active_season()
    index = next(i for i, s in enumerate(ordered) if s.id == current.id)
    target = index + offset
    if not 0 <= target < len(ordered):
        return False
    ctx.select(league, ordered[target])
    return True


def select_division(ctx: LeagueContext, division_id: str) -> Optional[Division]:
    season = ctx.active_season()
    division = season.find_division(division_id)
    if division is None:
        return None
    ctx.select(ctx.active_league(), season, division)
    return division
