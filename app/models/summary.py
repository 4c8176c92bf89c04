"""Hierarchy summary returned by ``GET /api/state``."""

from typing import Optional

from pydantic import BaseModel, Field

from app.models.entities import LeagueGraph, Match, Team, ViewState


class DivisionSummary(BaseModel):
    id: str
    name: str
    teams: list[Team] = Field(default_factory=list)
    match_count: int = 0
    completed_count: int = 0
    max_round: int = 1


class SeasonSummary(BaseModel):
    id: str
    number: int
    divisions: list[DivisionSummary] = Field(default_factory=list)


class LeagueSummary(BaseModel):
    id: str
    name: str
    logo_ref: str = ""
    seasons: list[SeasonSummary] = Field(default_factory=list)


class StateResponse(BaseModel):
    view: ViewState
    leagues: list[LeagueSummary] = Field(default_factory=list)


class RoundResponse(BaseModel):
    division_id: Optional[str] = None
    round: int
    max_round: int
    fixtures: list[Match] = Field(default_factory=list)


def summarize(graph: LeagueGraph) -> StateResponse:
    leagues = []
    for league in graph.leagues:
        seasons = []
        for season in league.seasons_by_number():
            divisions = []
            for division in season.divisions:
                fixtures = season.fixtures(division.id)
                divisions.append(
                    DivisionSummary(
                        id=division.id,
                        name=division.name,
                        teams=division.teams,
                        match_count=len(fixtures),
                        completed_count=sum(1 for m in fixtures if m.is_completed),
                        max_round=max((m.round for m in fixtures), default=1),
                    )
                )
            seasons.append(
                SeasonSummary(id=season.id, number=season.number, divisions=divisions)
            )
        leagues.append(
            LeagueSummary(
                id=league.id, name=league.name, logo_ref=league.logo_ref, seasons=seasons
            )
        )
    return StateResponse(view=graph.view, leagues=leagues)
