"""Movement indicators between successive standings reads.

The committed snapshot is overwritten on every read, so movement reflects
drift since the previous read rather than since the previous round.
"""

from __future__ import annotations

from typing import Optional, Sequence

from app.models.entities import Season
from app.models.fields import Movement
from app.models.standings import StandingsRow


def movement_for(previous_rank: Optional[int], new_rank: int) -> Movement:
    if previous_rank is None:
        return Movement.flat
    if new_rank < previous_rank:
        return Movement.up
    if new_rank > previous_rank:
        return Movement.down
    return Movement.flat


def commit_ranks(
    season: Season, division_id: str, rows: Sequence[StandingsRow]
) -> None:
    snapshot = season.last_rank_by_div_team.setdefault(division_id, {})
    for row in rows:
        snapshot[row.team_id] = row.rank


def track_movement(
    season: Season, division_id: str, rows: Sequence[StandingsRow]
) -> list[StandingsRow]:
    """Set ``movement`` on each row, then commit the rows as the new baseline."""
    previous = season.last_rank_by_div_team.get(division_id, {})
    for row in rows:
        row.movement = movement_for(previous.get(row.team_id), row.rank)
    commit_ranks(season, division_id, rows)
    return list(rows)


def forget_team(season: Season, division_id: str, team_id: str) -> None:
    snapshot = season.last_rank_by_div_team.get(division_id)
    if snapshot is not None:
        snapshot.pop(team_id, None)
