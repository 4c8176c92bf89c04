"""Standings aggregation for a division.

Points rule: win 3, draw 1, loss 0. Rows are ordered by points, goal
difference and goals scored (all descending), then by team name using a
locale-aware collation key, then by team id, so no two rows ever tie.
"""

from __future__ import annotations

import logging
import unicodedata
from typing import Iterable, Optional, Sequence

from app.models.entities import Division, Match, Season
from app.models.fields import FormResult
from app.models.standings import StandingsRow, TeamRecord
from app.services.context import LeagueContext
from app.services.rank_color_service import band_for, rules_for
from app.services.rank_history_service import track_movement

logger = logging.getLogger(__name__)

POINTS_WIN = 3
POINTS_DRAW = 1
FORM_LENGTH = 5


def collation_key(name: str) -> tuple[str, str]:
    """Accent-, case- and width-insensitive sort key, then the raw name.

    "Élan" sorts with the E names rather than after "Zeta".
    """
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), name


def completed_in_order(fixtures: Iterable[Match]) -> list[Match]:
    return sorted(
        (m for m in fixtures if m.is_completed), key=lambda m: m.order_key
    )


def _apply_result(home: StandingsRow, away: StandingsRow, match: Match) -> None:
    home_goals, away_goals = match.goals_for(match.home_team_id)

    home.played += 1
    away.played += 1
    home.gf += home_goals
    home.ga += away_goals
    away.gf += away_goals
    away.ga += home_goals

    if home_goals > away_goals:
        home.w += 1
        away.l += 1
        home.pts += POINTS_WIN
    elif home_goals < away_goals:
        away.w += 1
        home.l += 1
        away.pts += POINTS_WIN
    else:
        home.d += 1
        away.d += 1
        home.pts += POINTS_DRAW
        away.pts += POINTS_DRAW


def aggregate(division: Division, fixtures: Sequence[Match]) -> list[StandingsRow]:
    """Accumulate completed matches into one unranked row per team.

    Teams with no completed match keep a zero row. Matches referencing a team
    that is no longer in the division are skipped.
    """
    table: dict[str, StandingsRow] = {
        team.id: StandingsRow(team_id=team.id, team_name=team.name)
        for team in division.teams
    }

    for match in completed_in_order(fixtures):
        home = table.get(match.home_team_id)
        away = table.get(match.away_team_id)
        if home is None or away is None:
            continue
        _apply_result(home, away, match)

    rows = list(table.values())
    for row in rows:
        row.gd = row.gf - row.ga
    return rows


def sort_key(row: StandingsRow) -> tuple:
    return (-row.pts, -row.gd, -row.gf, collation_key(row.team_name), row.team_id)


def rank_rows(rows: Iterable[StandingsRow]) -> list[StandingsRow]:
    ranked = sorted(rows, key=sort_key)
    for position, row in enumerate(ranked, start=1):
        row.rank = position
    return ranked


def rank_table(division: Division, fixtures: Sequence[Match]) -> list[StandingsRow]:
    return rank_rows(aggregate(division, fixtures))


def last_five(fixtures: Sequence[Match], team_id: str) -> list[FormResult]:
    """Results of the team's five latest fixtures by round, oldest first.

    Unplayed fixtures count as pending, and the strip is padded with pending
    markers up to five.
    """
    involved = sorted(
        (m for m in fixtures if m.involves(team_id)),
        key=lambda m: m.order_key,
        reverse=True,
    )

    form: list[FormResult] = []
    for match in involved[:FORM_LENGTH]:
        if match.score is None:
            form.append(FormResult.pending)
            continue
        scored, conceded = match.goals_for(team_id)
        if scored > conceded:
            form.append(FormResult.win)
        elif scored < conceded:
            form.append(FormResult.loss)
        else:
            form.append(FormResult.draw)

    form.extend([FormResult.pending] * (FORM_LENGTH - len(form)))
    form.reverse()
    return form


def compute_standings(ctx: LeagueContext, division_id: str) -> list[StandingsRow]:
    """Rank a division, annotate movement and bands, and commit the ranks.

    Every call overwrites the division's rank snapshot, so a second call with
    no new results reports every team as flat.

    Args:
        ctx: League context
        division_id: Division in the active season

    Returns:
        Ranked rows, or an empty list for an unknown division
    """
    season = ctx.active_season()
    division = season.find_division(division_id)
    if division is None:
        logger.debug(f"compute_standings: unknown division {division_id}")
        return []

    fixtures = season.fixtures(division.id)
    rows = rank_table(division, fixtures)

    rules = rules_for(season, division.id)
    for row in rows:
        row.band = band_for(rules, row.rank)
        row.form = last_five(fixtures, row.team_id)

    return track_movement(season, division.id, rows)


def team_record(
    season: Season, division_id: str, team_id: str
) -> Optional[TeamRecord]:
    """Summarise one team's results and list its fixtures, newest first."""
    division = season.find_division(division_id)
    team = division.find_team(team_id) if division else None
    if team is None:
        return None

    matches = sorted(
        (m for m in season.fixtures(division_id) if m.involves(team_id)),
        key=lambda m: m.order_key,
        reverse=True,
    )
    record = TeamRecord(team_id=team.id, team_name=team.name, matches=matches)
    for match in matches:
        if match.score is None:
            continue
        scored, conceded = match.goals_for(team_id)
        record.played += 1
        record.gf += scored
        record.ga += conceded
        if scored > conceded:
            record.w += 1
            record.pts += POINTS_WIN
        elif scored < conceded:
            record.l += 1
        else:
            record.d += 1
            record.pts += POINTS_DRAW
    return record
