"""Request bodies accepted by the league API."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class LeagueCreate(BaseModel):
    name: str = "New League"


class LeagueUpdate(BaseModel):
    name: Optional[str] = None
    logo_ref: Optional[str] = None


class DivisionCreate(BaseModel):
    name: Optional[str] = None


class DivisionUpdate(BaseModel):
    name: Optional[str] = None


class TeamCreate(BaseModel):
    name: Optional[str] = None
    logo_ref: str = ""


class TeamUpdate(BaseModel):
    name: Optional[str] = None
    logo_ref: Optional[str] = None


class ScheduleRequest(BaseModel):
    cycles: int = Field(default=1, ge=1)
    alternate_home_away: bool = True


class ScoreUpdate(BaseModel):
    """Raw score fields; validation happens in the match service."""

    home: Any = None
    away: Any = None


class RoundUpdate(BaseModel):
    """Either jump to ``round`` or step by ``delta``."""

    round: Optional[int] = None
    delta: Optional[int] = None
    division_id: Optional[str] = None


class RankColorRuleInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_rank: int = Field(alias="from")
    to_rank: int = Field(alias="to")
    color: str = "#33D17A"
    label: str = ""
