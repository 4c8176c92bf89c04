"""Fixture generation, round views and score entry."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.entities import Match
from app.models.requests import ScheduleRequest, ScoreUpdate
from app.models.summary import RoundResponse
from app.routes.helpers import not_found, require_division, validation_error
from app.services import match_service
from app.services.errors import LeagueValidationError
from app.services.schedule_service import ScheduleOptions, generate_schedule
from app.services.state_store import load_context, save_graph
from app.utils.db_async import get_session

router = APIRouter(prefix="/api", tags=["schedule"])


@router.post(
    "/divisions/{division_id}/schedule",
    response_model=List[Match],
    status_code=201,
)
async def create_schedule(
    division_id: str,
    payload: Optional[ScheduleRequest] = None,
    db: AsyncSession = Depends(get_session),
) -> List[Match]:
    """Regenerate a division's round robin, discarding every existing result."""
    payload = payload or ScheduleRequest()
    async with db.begin():
        ctx = await load_context(db)
        division = require_division(ctx, division_id)
        options = ScheduleOptions(
            cycles=payload.cycles, alternate_home_away=payload.alternate_home_away
        )
        try:
            fixtures = generate_schedule(ctx, division.id, options)
        except LeagueValidationError as exc:
            raise validation_error(exc) from exc
        await save_graph(db, ctx.graph)
    return fixtures


@router.get("/divisions/{division_id}/schedule", response_model=RoundResponse)
async def get_round(
    division_id: str,
    round: Optional[int] = Query(default=None, ge=1, description="Defaults to the active round"),
    db: AsyncSession = Depends(get_session),
) -> RoundResponse:
    async with db.begin():
        ctx = await load_context(db)
        division = require_division(ctx, division_id)
    round_no = round or ctx.graph.view.schedule_round
    return RoundResponse(
        division_id=division.id,
        round=round_no,
        max_round=match_service.max_round(ctx.active_season().fixtures(division.id)),
        fixtures=match_service.round_fixtures(ctx, division.id, round_no),
    )


@router.get("/divisions/{division_id}/results", response_model=List[Match])
async def get_latest_results(
    division_id: str,
    limit: Optional[int] = Query(default=None, ge=1),
    db: AsyncSession = Depends(get_session),
) -> List[Match]:
    """Completed matches, newest first."""
    async with db.begin():
        ctx = await load_context(db)
        division = require_division(ctx, division_id)
    return match_service.latest_results(
        ctx, division.id, limit or settings.results_limit
    )


@router.put("/matches/{match_id}/score", response_model=Match)
async def put_score(
    match_id: str,
    payload: ScoreUpdate,
    db: AsyncSession = Depends(get_session),
) -> Match:
    async with db.begin():
        ctx = await load_context(db)
        try:
            match = match_service.record_score(ctx, match_id, payload.home, payload.away)
        except LeagueValidationError as exc:
            raise validation_error(exc) from exc
        if match is None:
            raise not_found("Match")
        await save_graph(db, ctx.graph)
    return match


@router.delete("/matches/{match_id}/score", response_model=Match)
async def delete_score(
    match_id: str,
    db: AsyncSession = Depends(get_session),
) -> Match:
    async with db.begin():
        ctx = await load_context(db)
        match = match_service.clear_score(ctx, match_id)
        if match is None:
            raise not_found("Match")
        await save_graph(db, ctx.graph)
    return match
