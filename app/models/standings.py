"""Pydantic models for standings, bands and team record responses."""

from typing import Optional

from pydantic import BaseModel, Field, computed_field

from app.models.entities import Match
from app.models.fields import FormResult, Movement


class RankBand(BaseModel):
    color: str
    label: str = ""


class StandingsRow(BaseModel):
    rank: int = 0
    team_id: str
    team_name: str = ""
    played: int = 0
    w: int = 0
    d: int = 0
    l: int = 0  # noqa: E741
    gf: int = 0
    ga: int = 0
    gd: int = 0
    pts: int = 0
    movement: Movement = Field(default=Movement.flat)
    band: Optional[RankBand] = Field(default=None)
    form: list[FormResult] = Field(default_factory=list)


class TeamRecord(BaseModel):
    team_id: str
    team_name: str
    played: int = 0
    w: int = 0
    d: int = 0
    l: int = 0  # noqa: E741
    gf: int = 0
    ga: int = 0
    pts: int = 0
    matches: list[Match] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def gd(self) -> int:
        return self.gf - self.ga
