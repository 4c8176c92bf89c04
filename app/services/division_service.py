"""Division and team management within the active season."""

from __future__ import annotations

import logging
from typing import Optional

from app.models.entities import Division, Team
from app.models.fields import ErrorCode
from app.services.context import LeagueContext, make_teams
from app.services.errors import LeagueValidationError
from app.services.rank_history_service import forget_team

logger = logging.getLogger(__name__)

MIN_TEAMS = 2
MIN_DIVISIONS = 1


def add_division(ctx: LeagueContext, name: Optional[str] = None) -> Division:
    """Append a division with two placeholder teams and no color rules."""
    season = ctx.active_season()
    division = Division(
        id=ctx.next_id(),
        name=(name or "").strip() or f"Div.{len(season.divisions) + 1}",
        teams=make_teams(ctx, ["Team A", "Team B"]),
    )
    season.divisions.append(division)
    season.rank_color_rules[division.id] = []
    logger.info(f"Added division {division.name!r} to season {season.number}")
    return division


def rename_division(
    ctx: LeagueContext, division_id: str, name: Optional[str]
) -> Optional[Division]:
    division = ctx.find_division(division_id)
    if division is None:
        return None
    division.name = (name or "").strip() or division.name
    return division


def remove_division(ctx: LeagueContext, division_id: str) -> Optional[Division]:
    """Delete a division with its schedule, color rules and rank snapshot.

    Raises:
        LeagueValidationError: MIN_DIVISION_COUNT when it is the last one
    """
    season = ctx.active_season()
    division = season.find_division(division_id)
    if division is None:
        return None
    if len(season.divisions) <= MIN_DIVISIONS:
        raise LeagueValidationError(ErrorCode.min_division_count)

    season.divisions = [d for d in season.divisions if d.id != division.id]
    season.schedule_by_div.pop(division.id, None)
    season.rank_color_rules.pop(division.id, None)
    season.last_rank_by_div_team.pop(division.id, None)

    view = ctx.graph.view
    if view.active_division_id == division.id:
        view.active_division_id = season.divisions[0].id
        view.schedule_round = 1

    logger.info(f"Removed division {division.name!r}")
    return division


def add_team(
    ctx: LeagueContext,
    division_id: str,
    name: Optional[str] = None,
    logo_ref: str = "",
) -> Optional[Team]:
    division = ctx.find_division(division_id)
    if division is None:
        return None
    team = Team(
        id=ctx.next_id(),
        name=(name or "").strip() or f"Team {len(division.teams) + 1}",
        logo_ref=logo_ref,
    )
    division.teams.append(team)
    return team


def update_team(
    ctx: LeagueContext,
    division_id: str,
    team_id: str,
    name: Optional[str],
    logo_ref: Optional[str] = None,
) -> Optional[Team]:
    """Rename a team and optionally swap its logo reference.

    Raises:
        LeagueValidationError: NAME_REQUIRED for a blank name
    """
    team = ctx.find_team(division_id, team_id)
    if team is None:
        return None
    cleaned = (name or "").strip()
    if not cleaned:
        raise LeagueValidationError(ErrorCode.name_required, "name")
    team.name = cleaned
    if logo_ref is not None:
        team.logo_ref = logo_ref
    return team


def remove_team(
    ctx: LeagueContext, division_id: str, team_id: str
) -> Optional[Team]:
    """Delete a team, its fixtures and its rank-snapshot entry.

    Raises:
        LeagueValidationError: MIN_TEAM_COUNT when the division has only two
    """
    season = ctx.active_season()
    division = season.find_division(division_id)
    team = division.find_team(team_id) if division else None
    if division is None or team is None:
        return None
    if len(division.teams) <= MIN_TEAMS:
        raise LeagueValidationError(ErrorCode.min_team_count)

    division.teams = [t for t in division.teams if t.id != team.id]
    season.schedule_by_div[division.id] = [
        m for m in season.fixtures(division.id) if not m.involves(team.id)
    ]
    forget_team(season, division.id, team.id)

    logger.info(f"Removed team {team.name!r} from division {division.name!r}")
    return team
