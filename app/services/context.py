"""Explicit owner of the in-memory league graph.

Every service function takes a ``LeagueContext`` instead of reaching for
module-level state. The context also carries the id generator and the
wall clock so tests can pin both.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Callable, Optional

from app.models.entities import (
    Division,
    League,
    LeagueGraph,
    Match,
    RankColorRule,
    Season,
    Team,
)

logger = logging.getLogger(__name__)

DEFAULT_TEAM_NAMES: tuple[str, ...] = (
    "Luton",
    "Northampton",
    "Cardiff",
    "Wycombe",
    "Plymouth",
    "Huddersfield",
    "Burton",
    "Stockport",
    "Mansfield",
    "Blackpool",
    "Leyton Orient",
    "Port Vale",
    "Rotherham",
    "AFC Wimbledon",
    "Stevenage",
    "Reading",
    "Lincoln",
    "Barnsley",
    "Exeter",
    "Doncaster",
    "Bolton",
    "Wigan",
)


def new_id() -> str:
    """Return a short collision-resistant opaque identifier."""
    return uuid.uuid4().hex[:12]


def now_ms() -> int:
    """Wall clock in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass
class LeagueContext:
    graph: LeagueGraph
    id_factory: Callable[[], str] = field(default=new_id)
    clock_ms: Callable[[], int] = field(default=now_ms)

    @classmethod
    def seeded(
        cls,
        id_factory: Callable[[], str] = new_id,
        clock_ms: Callable[[], int] = now_ms,
    ) -> "LeagueContext":
        ctx = cls(graph=LeagueGraph(), id_factory=id_factory, clock_ms=clock_ms)
        seed_graph(ctx)
        return ctx

    def next_id(self) -> str:
        return self.id_factory()

    def now(self) -> int:
        return self.clock_ms()

    # ------------------------------------------------------------------
    # Active selection (falls back the same way a stale view would)
    # ------------------------------------------------------------------

    def active_league(self) -> League:
        graph = self.graph
        league = None
        if graph.view.active_league_id:
            league = graph.find_league(graph.view.active_league_id)
        return league or graph.leagues[0]

    def active_season(self) -> Season:
        league = self.active_league()
        season = None
        if self.graph.view.active_season_id:
            season = league.find_season(self.graph.view.active_season_id)
        return season or league.seasons[-1]

    def active_division(self) -> Optional[Division]:
        season = self.active_season()
        division = None
        if self.graph.view.active_division_id:
            division = season.find_division(self.graph.view.active_division_id)
        if division is None and season.divisions:
            division = season.divisions[0]
        return division

    def select(
        self,
        league: League,
        season: Optional[Season] = None,
        division: Optional[Division] = None,
    ) -> None:
        """Point the view at a league/season/division and rewind the round."""
        season = season or league.seasons[-1]
        if division is None and season.divisions:
            division = season.divisions[0]
        view = self.graph.view
        view.active_league_id = league.id
        view.active_season_id = season.id
        view.active_division_id = division.id if division else None
        view.schedule_round = 1

    # ------------------------------------------------------------------
    # Lookups within the active season. Misses return None.
    # ------------------------------------------------------------------

    def find_division(self, division_id: str) -> Optional[Division]:
        return self.active_season().find_division(division_id)

    def find_team(self, division_id: str, team_id: str) -> Optional[Team]:
        division = self.find_division(division_id)
        return division.find_team(team_id) if division else None

    def find_match(self, match_id: str) -> Optional[tuple[str, Match]]:
        season = self.active_season()
        for division_id, fixtures in season.schedule_by_div.items():
            for match in fixtures:
                if match.id == match_id:
                    return division_id, match
        return None


def make_teams(ctx: LeagueContext, names: list[str]) -> list[Team]:
    return [Team(id=ctx.next_id(), name=name) for name in names]


def seed_graph(ctx: LeagueContext) -> LeagueGraph:
    """Populate ``ctx.graph`` with the default league and return it."""
    division = Division(
        id=ctx.next_id(),
        name="Div.1",
        teams=make_teams(ctx, list(DEFAULT_TEAM_NAMES)),
    )
    rules = [
        RankColorRule(from_rank=1, to_rank=1, color="#FFD54A", label="Champions"),
        RankColorRule(from_rank=8, to_rank=8, color="#FF9B3D", label="Play-off"),
        RankColorRule(from_rank=9, to_rank=10, color="#FF4D4D", label="Relegation"),
    ]
    season = Season(
        id=ctx.next_id(),
        number=1,
        created_at=ctx.now(),
        divisions=[division],
        rank_color_rules={division.id: rules},
    )
    league = League(id=ctx.next_id(), name="League One", seasons=[season])

    ctx.graph = LeagueGraph(leagues=[league])
    ctx.select(league, season, division)
    logger.info(
        f"Seeded league {league.name!r} with {len(division.teams)} teams"
    )
    return ctx.graph
