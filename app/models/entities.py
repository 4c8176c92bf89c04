"""Pydantic models for the league entity graph.

The whole graph (leagues → seasons → divisions → teams, plus each season's
fixture lists, color rules and rank snapshots) is held in memory and
persisted as a single JSON document, so every model here round-trips through
``model_dump(mode="json", by_alias=True)`` / ``model_validate``.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.models.fields import GOALS, RANK


class Team(BaseModel):
    id: str
    name: str
    logo_ref: str = ""


class Score(BaseModel):
    """A recorded result. An unplayed match has no Score at all."""

    model_config = ConfigDict(frozen=True)

    home: GOALS
    away: GOALS


class Match(BaseModel):
    id: str
    division_id: str
    round: RANK
    home_team_id: str
    away_team_id: str
    score: Optional[Score] = Field(default=None)
    # Insertion-order key; breaks ties between fixtures of the same round.
    created_at: int

    @model_validator(mode="after")
    def sides_differ(self) -> "Match":
        if self.home_team_id == self.away_team_id:
            raise ValueError("home_team_id and away_team_id must differ")
        return self

    @property
    def is_completed(self) -> bool:
        return self.score is not None

    @property
    def order_key(self) -> tuple[int, int]:
        return (self.round, self.created_at)

    def involves(self, team_id: str) -> bool:
        return team_id in (self.home_team_id, self.away_team_id)

    def goals_for(self, team_id: str) -> tuple[int, int]:
        """Return (scored, conceded) from ``team_id``'s point of view."""
        if self.score is None:
            raise ValueError("match has no recorded score")
        if team_id == self.home_team_id:
            return self.score.home, self.score.away
        return self.score.away, self.score.home


class RankColorRule(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_rank: int = Field(alias="from")
    to_rank: int = Field(alias="to")
    color: str
    label: str = ""

    def covers(self, rank: int) -> bool:
        return self.from_rank <= rank <= self.to_rank


class Division(BaseModel):
    id: str
    name: str
    teams: list[Team] = Field(default_factory=list)

    def team_ids(self) -> list[str]:
        return [team.id for team in self.teams]

    def find_team(self, team_id: str) -> Optional[Team]:
        return next((t for t in self.teams if t.id == team_id), None)


class Season(BaseModel):
    id: str
    number: int = Field(ge=1)
    created_at: int
    divisions: list[Division] = Field(default_factory=list)
    schedule_by_div: dict[str, list[Match]] = Field(default_factory=dict)
    rank_color_rules: dict[str, list[RankColorRule]] = Field(default_factory=dict)
    last_rank_by_div_team: dict[str, dict[str, int]] = Field(default_factory=dict)

    def find_division(self, division_id: str) -> Optional[Division]:
        return next((d for d in self.divisions if d.id == division_id), None)

    def fixtures(self, division_id: str) -> list[Match]:
        return self.schedule_by_div.get(division_id, [])


class League(BaseModel):
    id: str
    name: str
    logo_ref: str = ""
    seasons: list[Season] = Field(default_factory=list)

    def seasons_by_number(self) -> list[Season]:
        return sorted(self.seasons, key=lambda s: s.number)

    def find_season(self, season_id: str) -> Optional[Season]:
        return next((s for s in self.seasons if s.id == season_id), None)


class ViewState(BaseModel):
    """Which league/season/division the caller is looking at."""

    active_league_id: Optional[str] = None
    active_season_id: Optional[str] = None
    active_division_id: Optional[str] = None
    schedule_round: int = Field(default=1, ge=1)


class LeagueGraph(BaseModel):
    view: ViewState = Field(default_factory=ViewState)
    leagues: list[League] = Field(default_factory=list)

    def find_league(self, league_id: str) -> Optional[League]:
        return next((lg for lg in self.leagues if lg.id == league_id), None)
